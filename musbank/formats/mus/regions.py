"""
Byte-range resolution for sequences and waves.

Sequence lengths are not stored: each sequence runs up to the next one,
and the last runs up to the labels offsets table. Wave sizes are explicit.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from musbank.models.bank import SequenceIndexEntry, WaveEntry
from musbank.utils.validation import MalformedRegionError, validate_region

logger = logging.getLogger(__name__)

SOURCE_BANK = "bank"
SOURCE_SAMPLE = "sample"


@dataclass(frozen=True)
class Region:
    """A (start, length) range inside one of the two input buffers."""

    index: int
    start: int
    length: int
    source: str

    @property
    def end(self) -> int:
        return self.start + self.length

    def slice(self, data: bytes) -> bytes:
        return data[self.start : self.end]


def resolve_sequence_regions(
    entries: Sequence[SequenceIndexEntry], boundary: int, buffer_length: int
) -> List[Region]:
    """
    Resolve sequence regions inside the bank buffer.

    Args:
        entries: Sequence index table
        boundary: Offset of the labels offsets table (end of the last sequence)
        buffer_length: Size of the bank buffer

    Returns:
        One Region per entry, in table order

    Raises:
        MalformedRegionError: If offsets decrease, the boundary precedes the
            last sequence, or a region leaves the buffer
    """
    regions = []
    for i, entry in enumerate(entries):
        if i + 1 < len(entries):
            end = entries[i + 1].offset
            if end < entry.offset:
                raise MalformedRegionError(
                    f"Sequence #{i + 1} offset 0x{end:X} precedes sequence #{i} "
                    f"offset 0x{entry.offset:X}",
                    offset=entry.offset,
                )
        else:
            end = boundary
            if end < entry.offset:
                raise MalformedRegionError(
                    f"Labels table offset 0x{end:X} precedes last sequence "
                    f"offset 0x{entry.offset:X}",
                    offset=entry.offset,
                )

        length = end - entry.offset
        validate_region(entry.offset, length, buffer_length, f"Sequence #{i}")
        regions.append(Region(index=i, start=entry.offset, length=length, source=SOURCE_BANK))
        logger.debug("Sequence #%d: 0x%X + 0x%X", i, entry.offset, length)

    return regions


def resolve_wave_regions(waves: Sequence[WaveEntry], buffer_length: int) -> List[Region]:
    """
    Resolve wave regions inside the sample buffer.

    Each region depends only on its own entry.
    """
    regions = []
    for i, wave in enumerate(waves):
        validate_region(wave.offset, wave.size, buffer_length, f"Wave #{i} ({wave.name!r})")
        regions.append(Region(index=i, start=wave.offset, length=wave.size, source=SOURCE_SAMPLE))
        logger.debug("Wave #%d: 0x%X + 0x%X", i, wave.offset, wave.size)
    return regions
