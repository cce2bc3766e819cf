"""
Fixed-width name field handling.

Bank names are 20-byte fields. They may be NUL padded, space padded, or
followed by leftover garbage from the authoring tool, so decoding stops at
the first NUL or at the first byte that cannot appear in a file name.
"""

from typing import Iterable, List

NAME_LENGTH = 20

# Printable ASCII minus characters that are unsafe in file names
_FORBIDDEN = set(b'"$*/:;<>?\\^`')


def is_valid_name_byte(value: int) -> bool:
    """Check whether a byte may appear in a decoded name."""
    return 32 <= value <= 126 and value not in _FORBIDDEN


def decode_name(raw: bytes) -> str:
    """
    Decode a fixed-width name field.

    Args:
        raw: Raw field bytes

    Returns:
        Name truncated at the first NUL or invalid byte, with trailing
        spaces removed
    """
    chars = []
    for value in raw[:NAME_LENGTH]:
        if value == 0 or not is_valid_name_byte(value):
            break
        chars.append(chr(value))
    return "".join(chars).rstrip(" ")


def unique_names(names: Iterable[str], fallback: str = "wave") -> List[str]:
    """
    Make a list of names usable as distinct file names.

    Empty names become "<fallback>_<iiii>"; a name already taken gets "_<i>"
    appended, where i starts at its position in the list and counts up
    until the result is free.
    """
    result = []
    seen = set()
    for i, name in enumerate(names):
        if not name:
            name = f"{fallback}_{i:04d}"
        candidate = name
        suffix = i
        while candidate in seen:
            candidate = f"{name}_{suffix}"
            suffix += 1
        name = candidate
        seen.add(name)
        result.append(name)
    return result
