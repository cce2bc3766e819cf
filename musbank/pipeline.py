"""
Extraction pipeline.

Loads a bank and its sample blob, decodes the tables, resolves regions and
writes one file per sequence and per wave.

Example:
    config = ExtractConfig(platform=Platform.CONSOLE)
    result = run_pipeline("overland.mus", "overland.sam", config)
    print(f"{len(result.written)} files in {result.output_dir}")
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from musbank.formats.mus.cursor import BIG_ENDIAN
from musbank.formats.mus.description import render_description, render_loop_info
from musbank.formats.mus.extractor import (
    SAMPLES_DIR,
    SEQUENCES_DIR,
    Artifact,
    extract_sequences,
    extract_waves,
    wrap_ads,
    write_artifacts,
)
from musbank.formats.mus.reader import MusReader, load_buffer
from musbank.formats.mus.regions import Region, resolve_sequence_regions, resolve_wave_regions
from musbank.models.bank import MusBank, Platform

logger = logging.getLogger(__name__)


@dataclass
class ExtractConfig:
    """Settings for one extraction run."""

    platform: Platform = Platform.PC
    output_dir: Optional[Path] = None
    byte_order: str = BIG_ENDIAN
    overwrite: bool = False
    ads: bool = False
    write_description: bool = True
    write_loop_info: bool = True


@dataclass
class ExtractResult:
    bank: MusBank
    output_dir: Path
    sequence_regions: List[Region] = field(default_factory=list)
    wave_regions: List[Region] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)


def default_output_dir(mus_path: Union[str, Path]) -> Path:
    """The bank path without its extension."""
    return Path(mus_path).with_suffix("")


def build_artifacts(
    bank: MusBank,
    bank_data: bytes,
    sample_data: bytes,
    base_name: str,
    config: ExtractConfig,
) -> Tuple[List[Region], List[Region], List[Artifact]]:
    """
    Resolve regions and build every output artifact without touching disk.

    Returns:
        (sequence_regions, wave_regions, artifacts)
    """
    sequence_regions = resolve_sequence_regions(
        bank.sequences, bank.header.offset_to_labels_offsets_table, len(bank_data)
    )
    wave_regions = resolve_wave_regions(bank.waves, len(sample_data))

    artifacts: List[Artifact] = extract_sequences(sequence_regions, bank_data, base_name)
    waves = extract_waves(wave_regions, bank.waves, sample_data)
    if config.ads:
        waves = wrap_ads(waves, bank.waves, bank.platform)
    artifacts.extend(waves)

    if config.write_loop_info:
        artifacts.append(
            Artifact(f"{base_name}_smploopinfo.txt", render_loop_info(bank).encode("utf-8"))
        )
    if config.write_description:
        artifacts.append(
            Artifact(f"{base_name}.txt", render_description(bank, base_name).encode("utf-8"))
        )

    return sequence_regions, wave_regions, artifacts


def run_pipeline(
    mus_path: Union[str, Path], sam_path: Union[str, Path], config: Optional[ExtractConfig] = None
) -> ExtractResult:
    """
    Decode a bank and extract its sequences and samples.

    Args:
        mus_path: Bank (.mus) file
        sam_path: Sample blob (.sam) file
        config: Run settings

    Returns:
        ExtractResult with the decoded bank and the files written

    Raises:
        BankError: On unreadable input or structural failure
        FileExistsError: If output already exists and overwrite is off
    """
    config = config or ExtractConfig()
    mus_path = Path(mus_path)
    output_dir = Path(config.output_dir) if config.output_dir else default_output_dir(mus_path)
    base_name = mus_path.stem

    bank_data = load_buffer(mus_path)
    sample_data = load_buffer(sam_path)
    logger.info(
        "Loaded %s (%d bytes) and %s (%d bytes)", mus_path, len(bank_data), sam_path, len(sample_data)
    )

    reader = MusReader(platform=config.platform, byte_order=config.byte_order)
    bank = reader.parse_bytes(bank_data)

    # Resolve every region before the first write
    sequence_regions, wave_regions, artifacts = build_artifacts(
        bank, bank_data, sample_data, base_name, config
    )

    existing = [
        output_dir / name for name in (SEQUENCES_DIR, SAMPLES_DIR) if (output_dir / name).exists()
    ]
    if existing:
        if not config.overwrite:
            raise FileExistsError(f"Output already exists: {existing[0]}")
        for path in existing:
            logger.info("Removing %s", path)
            shutil.rmtree(path)

    for name in (SEQUENCES_DIR, SAMPLES_DIR):
        (output_dir / name).mkdir(parents=True, exist_ok=True)
    written = write_artifacts(artifacts, output_dir)
    logger.info("Wrote %d file(s) to %s", len(written), output_dir)

    return ExtractResult(
        bank=bank,
        output_dir=output_dir,
        sequence_regions=sequence_regions,
        wave_regions=wave_regions,
        written=written,
    )
