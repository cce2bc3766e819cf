"""
musbank - Decoder and extractor for Mus! audio bank files.

This library provides tools to:
- Decode .mus bank tables (sequences, layers, waves, programs, presets)
- Resolve sequence and wave byte ranges in the bank and sample files
- Extract sequences (.msq) and samples (.bin/.ads) to disk
- Write a SoundFont text description of the bank

Example usage:
    from musbank import MusReader, Platform
    from musbank.pipeline import ExtractConfig, run_pipeline

    # Inspect a bank
    bank = MusReader.read("overland.mus")

    # Extract everything next to it
    run_pipeline("overland.mus", "overland.sam", ExtractConfig(platform=Platform.PC))
"""

__version__ = "0.1.0"
__author__ = "musbank Contributors"

from musbank.formats.mus.binary_parser import MusParser
from musbank.formats.mus.reader import MusReader
from musbank.models.bank import MusBank, MusHeader, Platform
from musbank.utils.validation import (
    BankError,
    BankIOError,
    InvalidMagicError,
    MalformedRegionError,
    TruncatedInputError,
)

__all__ = [
    "MusParser",
    "MusReader",
    "MusBank",
    "MusHeader",
    "Platform",
    "BankError",
    "BankIOError",
    "InvalidMagicError",
    "MalformedRegionError",
    "TruncatedInputError",
]
