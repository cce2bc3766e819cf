"""Format handlers for Mus! banks."""

from musbank.formats.mus import MusParser, MusReader

__all__ = ["MusParser", "MusReader"]
