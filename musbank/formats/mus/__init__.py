"""Mus! bank format handlers."""

from musbank.formats.mus.reader import MusReader
from musbank.formats.mus.binary_parser import MusParser
from musbank.formats.mus.cursor import ByteCursor

__all__ = ["MusReader", "MusParser", "ByteCursor"]
