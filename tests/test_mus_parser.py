"""Tests for the Mus! bank parser."""

import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from musbank.formats.mus.binary_parser import MusParser, parse_mus_bytes
from musbank.formats.mus.cursor import LITTLE_ENDIAN, ByteCursor
from musbank.formats.mus.reader import MusReader
from musbank.models.bank import MUS_MAGIC, Platform
from musbank.utils.validation import BankIOError, InvalidMagicError, TruncatedInputError

HEADER_VALUES = (MUS_MAGIC, 48, 3, 100, 2, 7, 5, 4, 0x1234, 9, 6, 8)


class TestHeader:
    """Test cases for header decoding."""

    def test_header_fields_in_order(self):
        """All twelve fields decode in file order."""
        data = struct.pack(">12I", *HEADER_VALUES)
        header = MusParser().parse_header(ByteCursor(data))

        assert header.is_valid()
        assert header.header_size == 48
        assert header.version_number == 3
        assert header.reverb_volume == 100
        assert header.reverb_type == 2
        assert header.reverb_multiply == 7
        assert header.num_sequences == 5
        assert header.num_labels == 4
        assert header.offset_to_labels_offsets_table == 0x1234
        assert header.num_waves == 9
        assert header.num_programs == 6
        assert header.num_presets == 8
        assert header.num_layers == 14

    def test_header_roundtrip(self):
        """Re-encoding a decoded header reproduces its 48 bytes."""
        data = struct.pack(">12I", *HEADER_VALUES)
        header = MusParser().parse_header(ByteCursor(data))

        assert header.to_bytes() == data

    def test_header_roundtrip_little_endian(self):
        """Little-endian banks keep a big-endian magic."""
        data = b"Mus!" + struct.pack("<11I", *HEADER_VALUES[1:])
        parser = MusParser(byte_order=LITTLE_ENDIAN)
        header = parser.parse_header(ByteCursor(data, byte_order=LITTLE_ENDIAN))

        assert header.num_waves == 9
        assert header.to_bytes(LITTLE_ENDIAN) == data

    def test_invalid_magic_consumes_nothing(self):
        """A bad signature is rejected before any byte is consumed."""
        cursor = ByteCursor(b"RIFF" + bytes(44))

        with pytest.raises(InvalidMagicError) as exc_info:
            MusParser().parse_header(cursor)

        assert cursor.position == 0
        assert exc_info.value.found == 0x52494646
        assert exc_info.value.expected == MUS_MAGIC

    def test_invalid_magic_on_full_parse(self, bank_builder):
        """Full parse reports the header stage."""
        data = bank_builder(magic=0xDEADBEEF)

        with pytest.raises(InvalidMagicError) as exc_info:
            parse_mus_bytes(data)

        assert exc_info.value.stage == "header"

    def test_truncated_header(self):
        """A header cut short fails at the missing field."""
        data = struct.pack(">12I", *HEADER_VALUES)[:30]

        with pytest.raises(TruncatedInputError) as exc_info:
            parse_mus_bytes(data)

        assert exc_info.value.offset == 28
        assert exc_info.value.stage == "header"


class TestTables:
    """Test cases for count-driven table decoding."""

    @pytest.mark.parametrize(
        "method",
        [
            "parse_sequence_table",
            "parse_layer_indices",
            "parse_wave_table",
            "parse_program_table",
            "parse_preset_table",
        ],
    )
    def test_zero_count_consumes_nothing(self, method):
        """Empty sections produce an empty tuple and leave the cursor alone."""
        cursor = ByteCursor(bytes(16), position=4)

        result = getattr(MusParser(), method)(cursor, 0)

        assert result == ()
        assert cursor.position == 4

    def test_empty_bank(self, bank_builder):
        """A bank with all counts zero decodes to empty tables."""
        bank = parse_mus_bytes(bank_builder())

        assert bank.sequences == ()
        assert bank.layers == ()
        assert bank.waves == ()
        assert bank.programs == ()
        assert bank.presets == ()
        assert bank.end_offset == 48

    def test_sequence_table_and_layers(self, bank_builder):
        """Sequence entries and signed layer indices decode in order."""
        data = bank_builder(
            sequence_data=[b"a" * 10, b"b" * 6],
            programs=[("P", [])],
            presets=[("S", 0, 0, [])],
            layers=[-1, 7],
        )
        bank = parse_mus_bytes(data)

        assert [e.index for e in bank.sequences] == [0, 1]
        assert bank.sequences[1].offset - bank.sequences[0].offset == 10
        assert bank.layers == (-1, 7)

    def test_wave_pc_layout(self, bank_builder):
        """PC wave entries are little-endian with sizes in 16-bit frames."""
        data = bank_builder(
            waves=[
                {
                    "name": "C Hit",
                    "offset": 512,
                    "size": 32,
                    "loop_begin": 3,
                    "loop_end": 30,
                    "sample_rate": 44100,
                    "original_pitch": 0x3C80,
                    "loop_info": 1,
                    "snd_handle": 0xAB,
                }
            ]
        )
        wave = parse_mus_bytes(data).waves[0]

        assert wave.name == "C Hit"
        assert wave.raw_name == b"C Hit".ljust(20, b"\x00")
        assert wave.offset == 512
        assert wave.size_field == 32
        assert wave.size == 64
        assert wave.loop_begin == 3
        assert wave.loop_end == 30
        assert wave.sample_rate == 44100
        assert wave.root_key == 0x3C
        assert wave.loops
        assert wave.snd_handle == 0xAB

    def test_wave_console_layout(self, bank_builder):
        """Console wave entries follow the bank byte order; sizes still count 16-bit units."""
        data = bank_builder(
            waves=[{"name": "Snare", "offset": 0x100, "size": 64, "sample_rate": 22050}],
            platform=Platform.CONSOLE,
        )
        bank = parse_mus_bytes(data, platform=Platform.CONSOLE)
        wave = bank.waves[0]

        assert bank.platform == Platform.CONSOLE
        assert wave.offset == 0x100
        assert wave.size == 128
        assert wave.size_field == 64
        assert wave.sample_rate == 22050

    def test_wave_layout_mismatch_misreads(self, bank_builder):
        """Reading console entries with the PC layout gives different values."""
        data = bank_builder(
            waves=[{"name": "Snare", "offset": 0x100, "size": 64}], platform=Platform.CONSOLE
        )
        wave = parse_mus_bytes(data, platform=Platform.PC).waves[0]

        assert wave.offset == 0x00010000

    def test_program_zones_are_threaded(self, bank_builder):
        """Each program's zones sit between it and the next program."""
        data = bank_builder(
            programs=[
                ("First", [{"wave_index": 1}, {"wave_index": 2}, {"wave_index": 3}]),
                ("Second", [{"wave_index": 9, "pan_position": 0.75, "note_low": 40}]),
            ]
        )
        bank = parse_mus_bytes(data)
        first, second = bank.programs

        assert first.name == "First"
        assert first.num_zones == 3
        assert [z.wave_index for z in first.zones] == [1, 2, 3]
        assert second.name == "Second"
        assert second.num_zones == 1
        assert second.zones[0].wave_index == 9
        assert second.zones[0].pan_position == 0.75
        assert second.zones[0].note_low == 40
        # 48 header + 2 layers + (24 + 3 * 104) + (24 + 104)
        assert bank.end_offset == 48 + 8 + 336 + 128

    def test_program_zone_fields(self, bank_builder):
        """Zone envelopes and scalar fields decode faithfully."""
        data = bank_builder(
            programs=[
                (
                    "Lead",
                    [
                        {
                            "pitch_finetuning": -300,
                            "reverb": 4,
                            "keynum_hold": 5,
                            "keynum_decay": 6,
                            "root_key": 60,
                            "velocity_low": 10,
                            "velocity_high": 100,
                            "modul_env_to_pitch": 2.5,
                        }
                    ],
                )
            ]
        )
        zone = parse_mus_bytes(data).programs[0].zones[0]

        assert zone.pitch_finetuning == -300
        assert zone.reverb == 4
        assert zone.keynum_hold == 5
        assert zone.keynum_decay == 6
        assert zone.root_key == 60
        assert zone.velocity_low == 10
        assert zone.velocity_high == 100
        assert zone.volume_env.attack == 0.5
        assert zone.volume_env.sustain == 50.0
        assert zone.modul_env.release == 2.0
        assert zone.modul_env_to_pitch == 2.5

    def test_program_zone_vibrato_block(self, bank_builder):
        """The four floats between the volume envelope and root key stay aligned."""
        data = bank_builder(
            programs=[
                (
                    "Vib",
                    [
                        {
                            "volume_env_atten": 12.5,
                            "vib_delay": 0.25,
                            "vib_frequency": 4.0,
                            "vib_to_pitch": 1.5,
                            "root_key": 72,
                            "wave_index": 3,
                        }
                    ],
                )
            ]
        )
        zone = parse_mus_bytes(data).programs[0].zones[0]

        assert zone.volume_env_atten == 12.5
        assert zone.vib_delay == 0.25
        assert zone.vib_frequency == 4.0
        assert zone.vib_to_pitch == 1.5
        assert zone.root_key == 72
        assert zone.wave_index == 3
        assert zone.base_priority == 1.0

    def test_preset_zones_are_threaded(self, bank_builder):
        """Each preset's zones sit between it and the next preset."""
        data = bank_builder(
            presets=[
                ("Strings", 1, 48, [{"program_index": 0}, {"program_index": 1, "note_high": 60}]),
                ("Brass", 2, 61, [{"program_index": 4, "velocity_low": 64}]),
            ]
        )
        bank = parse_mus_bytes(data)
        first, second = bank.presets

        assert first.num_zones == 2
        assert first.zones[1].note_high == 60
        assert second.name == "Brass"
        assert second.midi_bank_number == 2
        assert second.midi_preset_number == 61
        assert second.zones[0].program_index == 4
        assert second.zones[0].velocity_low == 64

    def test_truncated_wave_table(self, bank_builder):
        """Truncation inside a record fails at the exact field offset."""
        data = bank_builder(waves=[{"name": "A"}, {"name": "B"}])
        # Second wave starts at 48 + 52 = 100; its offset field follows the name
        truncated = data[:122]

        with pytest.raises(TruncatedInputError) as exc_info:
            parse_mus_bytes(truncated)

        assert exc_info.value.offset == 120
        assert exc_info.value.stage == "wave table"

    def test_truncated_zone(self, bank_builder):
        """A program declaring more zones than present fails in the program table."""
        data = bank_builder(programs=[("P", [{}])], labels=b"")
        # Drop the last 4 bytes of the only zone
        truncated = data[:-4]

        with pytest.raises(TruncatedInputError) as exc_info:
            parse_mus_bytes(truncated)

        assert exc_info.value.stage == "program table"
        assert exc_info.value.offset == len(data) - 4

    def test_dump_structure(self, full_bank_data):
        """Structure dump lists every table."""
        bank = parse_mus_bytes(full_bank_data)

        dump = MusParser.dump_structure(bank)

        assert "Mus! Bank Structure" in dump
        assert "Header valid: True" in dump
        assert "wave table" in dump
        assert "preset table" in dump


class TestMusReader:
    """Test cases for file-level reading."""

    def test_read_file(self, bank_files):
        """Reading from disk decodes the bank."""
        mus_path, _ = bank_files

        bank = MusReader.read(mus_path)

        assert [w.name for w in bank.waves] == ["Kick", "Pad Loop"]
        assert len(bank.programs) == 2
        assert len(bank.presets) == 1

    def test_missing_file(self, tmp_path):
        """A missing file raises BankIOError."""
        with pytest.raises(BankIOError):
            MusReader.read(tmp_path / "missing.mus")

    def test_can_read_check(self, bank_files):
        """Format detection looks at the signature only."""
        mus_path, sam_path = bank_files

        assert MusReader.can_read(mus_path) is True
        assert MusReader.can_read(sam_path) is False
        assert MusReader.can_read(mus_path.parent / "missing.mus") is False
