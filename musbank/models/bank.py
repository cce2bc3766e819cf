"""
Decoded Mus! bank structures.

All records are immutable snapshots of what the parser read; nothing is
mutated after decoding.
"""

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

MUS_MAGIC = 0x4D757321  # "Mus!"


class Platform(Enum):
    """Wave-entry layout variant."""

    PC = "pc"
    CONSOLE = "console"


@dataclass(frozen=True)
class MusHeader:
    """
    Fixed 48-byte bank header.

    Field order matches the on-disk order.
    """

    magic: int
    header_size: int
    version_number: int
    reverb_volume: int
    reverb_type: int
    reverb_multiply: int
    num_sequences: int
    num_labels: int
    offset_to_labels_offsets_table: int
    num_waves: int
    num_programs: int
    num_presets: int

    SIZE = 48

    def is_valid(self) -> bool:
        """Check if the signature is correct."""
        return self.magic == MUS_MAGIC

    @property
    def num_layers(self) -> int:
        return self.num_presets + self.num_programs

    def to_bytes(self, byte_order: str = ">") -> bytes:
        """
        Re-encode the header.

        The magic is always written big-endian so that it reads "Mus!".
        """
        rest = (
            self.header_size,
            self.version_number,
            self.reverb_volume,
            self.reverb_type,
            self.reverb_multiply,
            self.num_sequences,
            self.num_labels,
            self.offset_to_labels_offsets_table,
            self.num_waves,
            self.num_programs,
            self.num_presets,
        )
        return struct.pack(">I", self.magic) + struct.pack(f"{byte_order}11I", *rest)


@dataclass(frozen=True)
class SequenceIndexEntry:
    index: int
    offset: int


@dataclass(frozen=True)
class WaveEntry:
    """
    Wave metadata record.

    offset and size point into the sample blob. size is always in bytes;
    size_field keeps the value as stored, a count of 16-bit units.
    """

    raw_name: bytes
    name: str
    offset: int
    loop_begin: int
    size: int
    size_field: int
    loop_end: int
    sample_rate: int
    original_pitch: int
    loop_info: int
    snd_handle: int

    SIZE = 52

    @property
    def root_key(self) -> int:
        """MIDI key from the 8.8 fixed-point pitch field."""
        return int(self.original_pitch / 256)

    @property
    def loops(self) -> bool:
        return self.loop_info != 0


@dataclass(frozen=True)
class Envelope:
    delay: float
    attack: float
    hold: float
    decay: float
    sustain: float
    release: float


@dataclass(frozen=True)
class ProgramZone:
    """Per-keyzone synthesis parameters of a program (104 bytes)."""

    pitch_finetuning: int
    reverb: int
    pan_position: float
    keynum_hold: int
    keynum_decay: int
    volume_env: Envelope
    volume_env_atten: float
    vib_delay: float
    vib_frequency: float
    vib_to_pitch: float
    root_key: int  # -1 = use the wave's original pitch
    note_low: int
    note_high: int
    velocity_low: int
    velocity_high: int
    wave_index: int
    base_priority: float
    modul_env: Envelope
    modul_env_to_pitch: float

    SIZE = 104


@dataclass(frozen=True)
class ProgramEntry:
    raw_name: bytes
    name: str
    num_zones: int
    zones: Tuple[ProgramZone, ...] = ()

    SIZE = 24


@dataclass(frozen=True)
class PresetZone:
    root_key: int
    note_low: int
    note_high: int
    velocity_low: int
    velocity_high: int
    program_index: int

    SIZE = 12


@dataclass(frozen=True)
class PresetEntry:
    raw_name: bytes
    name: str
    midi_bank_number: int
    midi_preset_number: int
    num_zones: int
    zones: Tuple[PresetZone, ...] = ()

    SIZE = 32


@dataclass(frozen=True)
class MusBank:
    """
    A fully decoded bank.

    Example:
        bank = MusReader.read("overland.mus")
        print(bank.header.num_sequences, len(bank.waves))
    """

    header: MusHeader
    sequences: Tuple[SequenceIndexEntry, ...] = ()
    layers: Tuple[int, ...] = ()
    waves: Tuple[WaveEntry, ...] = ()
    programs: Tuple[ProgramEntry, ...] = ()
    presets: Tuple[PresetEntry, ...] = ()
    platform: Platform = Platform.PC
    end_offset: int = 0
    source_size: int = field(default=0, compare=False)

    def wave_name(self, index: int) -> str:
        """Name of a wave, or a placeholder for a dangling index."""
        if 0 <= index < len(self.waves):
            return self.waves[index].name
        return f"wave_{index}"

    def program_name(self, index: int) -> str:
        if 0 <= index < len(self.programs):
            return self.programs[index].name
        return f"program_{index}"
