"""
CLI display modules.
"""

from cli.display.tables import (
    display_header,
    display_sequences,
    display_waves,
    display_programs,
    display_presets,
)
from cli.display.hex_view import display_header_dump
from cli.display.logs import configure_logging

__all__ = [
    "display_header",
    "display_sequences",
    "display_waves",
    "display_programs",
    "display_presets",
    "display_header_dump",
    "configure_logging",
]
