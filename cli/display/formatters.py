"""
Display formatting utilities for CLI output.

Provides offset, size, key-range and pan formatting helpers.
"""

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def format_offset(offset: int, width: int = 6) -> str:
    """Format an offset as 0x-prefixed uppercase hex."""
    return f"0x{offset:0{width}X}"


def format_size(size: int) -> str:
    """
    Format a byte count for humans.

    Returns:
        Formatted string like "512 B", "3.5 KB" or "1.2 MB"
    """
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def note_name(note: int) -> str:
    """MIDI note number to name, with middle C as C4."""
    return f"{NOTE_NAMES[note % 12]}{note // 12 - 1}"


def key_range(low: int, high: int) -> str:
    """Format a note range like "C2-G#5"."""
    if low == 0 and high == 127:
        return "all"
    return f"{note_name(low)}-{note_name(high)}"


def pan_bar(
    pan: float,
    width: int = 11,
    marker: str = "●",
    empty_char: str = "─",
) -> str:
    """
    Create a centered pan bar graphic.

    Pan is a float from 0.0 (left) to 1.0 (right), 0.5 is center.

    Returns:
        Formatted string like "L20 [──●────────]"
    """
    clamped = max(0.0, min(pan, 1.0))
    position = round(clamped * (width - 1))
    bar = empty_char * position + marker + empty_char * (width - 1 - position)

    amount = round((clamped - 0.5) * 100)
    if amount == 0:
        label = " C "
    elif amount < 0:
        label = f"L{-amount:02d}"
    else:
        label = f"R{amount:02d}"

    return f"{label} [{bar}]"
