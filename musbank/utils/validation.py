"""
Error types and structural checks for Mus! bank data.
"""

from typing import Optional


class BankError(Exception):
    """Raised when bank data cannot be decoded or resolved."""

    def __init__(self, message: str, offset: Optional[int] = None, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.offset = offset
        self.stage = stage

    def __str__(self) -> str:
        parts = []
        if self.stage:
            parts.append(f"[{self.stage}]")
        parts.append(self.message)
        if self.offset is not None:
            parts.append(f"(at offset 0x{self.offset:X})")
        return " ".join(parts)


class BankIOError(BankError):
    """Raised when an input file cannot be loaded."""

    pass


class InvalidMagicError(BankError):
    """Raised when the header signature does not match."""

    def __init__(self, found: int, expected: int):
        super().__init__(
            f"Invalid magic number 0x{found:08X} (expected 0x{expected:08X})", offset=0
        )
        self.found = found
        self.expected = expected


class TruncatedInputError(BankError):
    """Raised when a read runs past the end of the buffer."""

    def __init__(self, offset: int, width: int, length: int):
        super().__init__(
            f"Truncated input: need {width} byte(s) but buffer is {length} bytes long",
            offset=offset,
        )
        self.width = width
        self.length = length


class MalformedRegionError(BankError):
    """Raised when a resolved region has a negative length or falls outside its buffer."""

    pass


def validate_magic(found: int, expected: int) -> None:
    """
    Validate the header signature.

    Args:
        found: Value read from the start of the buffer
        expected: Required signature

    Raises:
        InvalidMagicError: If the values differ
    """
    if found != expected:
        raise InvalidMagicError(found, expected)


def validate_region(start: int, length: int, buffer_length: int, label: str) -> None:
    """
    Validate that a region is non-negative and fits its buffer.

    Args:
        start: Offset of the first byte
        length: Number of bytes
        buffer_length: Size of the buffer the region points into
        label: Region name for error messages

    Raises:
        MalformedRegionError: If the region underflows or overruns
    """
    if length < 0:
        raise MalformedRegionError(f"{label} has negative length {length}", offset=start)
    if start < 0 or start + length > buffer_length:
        raise MalformedRegionError(
            f"{label} (0x{start:X} + 0x{length:X}) exceeds buffer of {buffer_length} bytes",
            offset=start,
        )
