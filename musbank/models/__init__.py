"""Data models for decoded Mus! banks."""

from musbank.models.bank import (
    Envelope,
    MusBank,
    MusHeader,
    Platform,
    PresetEntry,
    PresetZone,
    ProgramEntry,
    ProgramZone,
    SequenceIndexEntry,
    WaveEntry,
)

__all__ = [
    "Envelope",
    "MusBank",
    "MusHeader",
    "Platform",
    "PresetEntry",
    "PresetZone",
    "ProgramEntry",
    "ProgramZone",
    "SequenceIndexEntry",
    "WaveEntry",
]
