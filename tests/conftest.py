"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from musbank.models.bank import MUS_MAGIC, Platform, WaveEntry  # noqa: E402

ENVELOPE = (0.0, 0.5, 0.0, 1.0, 50.0, 2.0)


def pack_name(name: str) -> bytes:
    """Encode a name into a NUL-padded 20-byte field."""
    return name.encode("ascii")[:20].ljust(20, b"\x00")


def pack_wave(wave: dict, platform: Platform, byte_order: str) -> bytes:
    """Pack a wave entry; 'size' is the value stored in the record."""
    order = "<" if platform == Platform.PC else byte_order
    return pack_name(wave.get("name", "")) + struct.pack(
        f"{order}8I",
        wave.get("offset", 0),
        wave.get("loop_begin", 0),
        wave.get("size", 0),
        wave.get("loop_end", 0),
        wave.get("sample_rate", 22050),
        wave.get("original_pitch", 60 * 256),
        wave.get("loop_info", 0),
        wave.get("snd_handle", 0),
    )


def pack_program_zone(zone: dict, byte_order: str) -> bytes:
    return struct.pack(
        f"{byte_order}iifii6fffffiBBBBif6ff",
        zone.get("pitch_finetuning", 0),
        zone.get("reverb", 0),
        zone.get("pan_position", 0.5),
        zone.get("keynum_hold", 0),
        zone.get("keynum_decay", 0),
        *ENVELOPE,
        zone.get("volume_env_atten", 0.0),
        zone.get("vib_delay", 0.0),
        zone.get("vib_frequency", 8.176),
        zone.get("vib_to_pitch", 0.0),
        zone.get("root_key", -1),
        zone.get("note_low", 0),
        zone.get("note_high", 127),
        zone.get("velocity_low", 0),
        zone.get("velocity_high", 127),
        zone.get("wave_index", 0),
        zone.get("base_priority", 1.0),
        *ENVELOPE,
        zone.get("modul_env_to_pitch", 0.0),
    )


def pack_preset_zone(zone: dict, byte_order: str) -> bytes:
    return struct.pack(
        f"{byte_order}iBBBBi",
        zone.get("root_key", -1),
        zone.get("note_low", 0),
        zone.get("note_high", 127),
        zone.get("velocity_low", 0),
        zone.get("velocity_high", 127),
        zone.get("program_index", 0),
    )


def build_bank(
    sequence_data=(),
    waves=(),
    programs=(),
    presets=(),
    layers=None,
    platform: Platform = Platform.PC,
    byte_order: str = ">",
    magic: int = MUS_MAGIC,
    labels: bytes = b"LBLS",
) -> bytes:
    """
    Build a synthetic .mus file.

    sequence_data: list of bytes, laid out after the tables in order
    waves: list of dicts for pack_wave
    programs: list of (name, [zone dicts])
    presets: list of (name, bank, program, [zone dicts])
    """
    if layers is None:
        layers = list(range(len(programs) + len(presets)))

    body = b"".join(struct.pack(f"{byte_order}i", v) for v in layers)
    body += b"".join(pack_wave(w, platform, byte_order) for w in waves)
    for name, zones in programs:
        body += pack_name(name) + struct.pack(f"{byte_order}I", len(zones))
        body += b"".join(pack_program_zone(z, byte_order) for z in zones)
    for name, midi_bank, midi_program, zones in presets:
        body += pack_name(name) + struct.pack(
            f"{byte_order}III", midi_bank, midi_program, len(zones)
        )
        body += b"".join(pack_preset_zone(z, byte_order) for z in zones)

    tables_end = 48 + 8 * len(sequence_data) + len(body)
    offsets = []
    position = tables_end
    for chunk in sequence_data:
        offsets.append(position)
        position += len(chunk)
    boundary = position

    header = struct.pack(">I", magic) + struct.pack(
        f"{byte_order}11I",
        48,
        1,
        100,
        2,
        3,
        len(sequence_data),
        1,
        boundary,
        len(waves),
        len(programs),
        len(presets),
    )
    table = b"".join(
        struct.pack(f"{byte_order}II", i, offset) for i, offset in enumerate(offsets)
    )
    return header + table + body + b"".join(sequence_data) + labels


@pytest.fixture
def bank_builder():
    """Return the synthetic bank builder."""
    return build_bank


@pytest.fixture
def sample_data():
    """Return a sample blob with two distinguishable 64-byte waves."""
    return bytes([0x11] * 64) + bytes([0x22] * 64)


@pytest.fixture
def full_bank_data():
    """Return a PC bank with sequences, waves, programs and presets."""
    return build_bank(
        sequence_data=[b"SEQ0" * 4, b"SEQ1" * 8],
        waves=[
            {"name": "Kick", "offset": 0, "size": 32, "loop_info": 0},
            {"name": "Pad Loop", "offset": 64, "size": 32, "loop_begin": 4, "loop_end": 20, "loop_info": 1},
        ],
        programs=[
            ("Drums", [{"wave_index": 0, "note_low": 36, "note_high": 36}]),
            ("Pad", [{"wave_index": 1, "pan_position": 0.25}, {"wave_index": 1, "root_key": 48}]),
        ],
        presets=[("Pad Preset", 0, 5, [{"program_index": 1, "note_low": 24, "note_high": 96}])],
    )


@pytest.fixture
def bank_files(tmp_path, full_bank_data, sample_data):
    """Write the full bank and its samples to disk, returning (mus_path, sam_path)."""
    mus_path = tmp_path / "overland.mus"
    sam_path = tmp_path / "overland.sam"
    mus_path.write_bytes(full_bank_data)
    sam_path.write_bytes(sample_data)
    return mus_path, sam_path


def make_wave(offset: int, size: int, name: str = "w") -> WaveEntry:
    """Build a WaveEntry directly, bypassing the parser."""
    return WaveEntry(
        raw_name=name.encode("ascii").ljust(20, b"\x00"),
        name=name,
        offset=offset,
        loop_begin=0,
        size=size,
        size_field=size,
        loop_end=0,
        sample_rate=22050,
        original_pitch=60 * 256,
        loop_info=0,
        snd_handle=0,
    )


@pytest.fixture
def wave_factory():
    """Return the WaveEntry factory."""
    return make_wave
