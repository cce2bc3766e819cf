"""
Copies resolved regions out of the input buffers into named artifacts.
"""

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

from musbank.formats.mus.regions import Region
from musbank.models.bank import Platform, WaveEntry
from musbank.utils.names import unique_names

logger = logging.getLogger(__name__)

SEQUENCES_DIR = "sequences"
SAMPLES_DIR = "samples"
SEQUENCE_EXTENSION = ".msq"
SAMPLE_EXTENSION = ".bin"
ADS_EXTENSION = ".ads"

# PS-ADPCM block that should carry the end flag but was stored without it
_UNTERMINATED_BLOCK = bytes([0x07, 0x00]) + bytes([0x77] * 14)


@dataclass(frozen=True)
class Artifact:
    """An output file: path relative to the output directory, and its bytes."""

    relative_path: str
    data: bytes


def extract_sequences(regions: Sequence[Region], bank_data: bytes, base_name: str) -> List[Artifact]:
    """
    Copy each sequence region verbatim.

    Args:
        regions: Resolved sequence regions
        bank_data: Bank buffer
        base_name: Bank file stem, used as the file name prefix

    Returns:
        One artifact per region, named sequences/<base>_<iiii>.msq
    """
    return [
        Artifact(
            relative_path=f"{SEQUENCES_DIR}/{base_name}_{region.index:04d}{SEQUENCE_EXTENSION}",
            data=region.slice(bank_data),
        )
        for region in regions
    ]


def extract_waves(
    regions: Sequence[Region], waves: Sequence[WaveEntry], sample_data: bytes
) -> List[Artifact]:
    """
    Copy each wave region verbatim.

    Returns:
        One artifact per region, named samples/<wave name>.bin
    """
    names = unique_names(wave.name for wave in waves)
    return [
        Artifact(
            relative_path=f"{SAMPLES_DIR}/{names[region.index]}{SAMPLE_EXTENSION}",
            data=region.slice(sample_data),
        )
        for region in regions
    ]


def build_ads_header(wave: WaveEntry, platform: Platform) -> bytes:
    """
    Build the 40-byte ADS header for one wave.

    Layout: "SShd", chunk size 0x18, codec (0x01 PCM on PC, 0x10 PS-ADPCM on
    console), sample rate, 1 channel, interleave 0, loop start/end unset,
    then "SSbd" and the payload size.
    """
    codec = 0x01 if platform == Platform.PC else 0x10
    return (
        b"SShd"
        + struct.pack("<III", 0x18, codec, wave.sample_rate)
        + struct.pack("<II", 1, 0)
        + b"\xff" * 8
        + b"SSbd"
        + struct.pack("<I", wave.size)
    )


def patch_end_flag(payload: bytes) -> bytes:
    """Set the end flag on a trailing unterminated PS-ADPCM block, returning a copy."""
    if len(payload) >= 16 and payload[-16:] == _UNTERMINATED_BLOCK:
        patched = bytearray(payload)
        patched[-15] = 0x07
        return bytes(patched)
    return payload


def wrap_ads(artifacts: Sequence[Artifact], waves: Sequence[WaveEntry], platform: Platform) -> List[Artifact]:
    """
    Wrap extracted wave artifacts in ADS headers.

    The artifacts must be in wave order, as returned by extract_waves.
    """
    wrapped = []
    for artifact, wave in zip(artifacts, waves):
        payload = artifact.data
        if platform == Platform.CONSOLE:
            payload = patch_end_flag(payload)
        path = artifact.relative_path[: -len(SAMPLE_EXTENSION)] + ADS_EXTENSION
        wrapped.append(Artifact(relative_path=path, data=build_ads_header(wave, platform) + payload))
    return wrapped


def write_artifacts(artifacts: Sequence[Artifact], output_dir: Union[str, Path]) -> List[Path]:
    """
    Write artifacts under output_dir, creating subdirectories as needed.

    Zero-length artifacts are written as empty files.

    Returns:
        Paths written, in artifact order
    """
    output_dir = Path(output_dir)
    written = []
    for artifact in artifacts:
        path = output_dir / artifact.relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            f.write(artifact.data)
        logger.debug("Wrote %s (%d bytes)", path, len(artifact.data))
        written.append(path)
    return written
