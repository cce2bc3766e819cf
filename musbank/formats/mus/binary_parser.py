"""
Mus! bank binary parser.

Parses the table structure of a Mus! bank (.mus) file. Section sizes are
not stored; every table is sized by counts from the header, so tables must
be read strictly in file order.

Mus! File Structure:
    Offset  Size                Description
    0x000   48                  Header (12 x u32, magic "Mus!")
    0x030   8 * numSequences    Sequence index table (index, offset)
    ...     4 * numLayers       Layer indices (numPresets + numPrograms, s32)
    ...     52 * numWaves       Wave entries
    ...     variable            Programs: 24-byte entry + 104 bytes per zone
    ...     variable            Presets: 32-byte entry + 12 bytes per zone
    ...                         Sequence data, up to offsetToLabelsOffsetsTable

Wave entry (52 bytes):
    0x00    20      Name
    0x14    4       Offset into the sample blob
    0x18    4       Loop begin
    0x1C    4       Size in 16-bit units (bytes = size * 2)
    0x20    4       Loop end
    0x24    4       Sample rate
    0x28    4       Original pitch (8.8 fixed point)
    0x2C    4       Loop info
    0x30    4       Sound handle

On PC the wave entries are always little-endian; on console they follow
the bank byte order.
"""

import logging
from typing import Tuple

from musbank.formats.mus.cursor import BIG_ENDIAN, LITTLE_ENDIAN, ByteCursor
from musbank.models.bank import (
    MUS_MAGIC,
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
from musbank.utils.names import NAME_LENGTH, decode_name
from musbank.utils.validation import BankError, validate_magic

logger = logging.getLogger(__name__)


class MusParser:
    """
    Parser for Mus! bank files.

    Example:
        parser = MusParser(platform=Platform.CONSOLE)
        bank = parser.parse_bytes(data)
    """

    HEADER_MAGIC = MUS_MAGIC
    HEADER_SIZE = MusHeader.SIZE

    def __init__(self, platform: Platform = Platform.PC, byte_order: str = BIG_ENDIAN):
        self.platform = platform
        self.byte_order = byte_order

    @property
    def wave_byte_order(self) -> str:
        if self.platform == Platform.PC:
            return LITTLE_ENDIAN
        return self.byte_order

    def parse_bytes(self, data: bytes) -> MusBank:
        """
        Parse a complete bank.

        Args:
            data: Raw .mus file contents

        Returns:
            Decoded MusBank

        Raises:
            BankError: On any structural failure, with the stage recorded
        """
        cursor = ByteCursor(data, byte_order=self.byte_order)

        header = self._run_stage("header", self.parse_header, cursor)
        sequences = self._run_stage(
            "sequence table", self.parse_sequence_table, cursor, header.num_sequences
        )
        layers = self._run_stage("layer indices", self.parse_layer_indices, cursor, header.num_layers)
        waves = self._run_stage("wave table", self.parse_wave_table, cursor, header.num_waves)
        programs = self._run_stage(
            "program table", self.parse_program_table, cursor, header.num_programs
        )
        presets = self._run_stage("preset table", self.parse_preset_table, cursor, header.num_presets)

        logger.info(
            "Decoded bank: %d sequence(s), %d wave(s), %d program(s), %d preset(s), tables end at 0x%X",
            len(sequences),
            len(waves),
            len(programs),
            len(presets),
            cursor.position,
        )

        return MusBank(
            header=header,
            sequences=sequences,
            layers=layers,
            waves=waves,
            programs=programs,
            presets=presets,
            platform=self.platform,
            end_offset=cursor.position,
            source_size=len(data),
        )

    def _run_stage(self, stage: str, func, *args):
        try:
            return func(*args)
        except BankError as e:
            if e.stage is None:
                e.stage = stage
            raise

    def parse_header(self, cursor: ByteCursor) -> MusHeader:
        """Parse the fixed header. The magic is checked before anything is consumed."""
        validate_magic(cursor.peek_u32(BIG_ENDIAN), self.HEADER_MAGIC)
        magic = cursor.read_u32(BIG_ENDIAN)

        header = MusHeader(
            magic=magic,
            header_size=cursor.read_u32(),
            version_number=cursor.read_u32(),
            reverb_volume=cursor.read_u32(),
            reverb_type=cursor.read_u32(),
            reverb_multiply=cursor.read_u32(),
            num_sequences=cursor.read_u32(),
            num_labels=cursor.read_u32(),
            offset_to_labels_offsets_table=cursor.read_u32(),
            num_waves=cursor.read_u32(),
            num_programs=cursor.read_u32(),
            num_presets=cursor.read_u32(),
        )
        logger.debug("Header: %s", header)
        return header

    def parse_sequence_table(self, cursor: ByteCursor, count: int) -> Tuple[SequenceIndexEntry, ...]:
        entries = []
        for i in range(count):
            entry = SequenceIndexEntry(index=cursor.read_u32(), offset=cursor.read_u32())
            logger.debug("Sequence #%d: index=0x%X offset=0x%X", i, entry.index, entry.offset)
            entries.append(entry)
        return tuple(entries)

    def parse_layer_indices(self, cursor: ByteCursor, count: int) -> Tuple[int, ...]:
        layers = tuple(cursor.read_i32() for _ in range(count))
        if layers:
            logger.debug("Layers: %s", ", ".join(f"0x{v & 0xFFFFFFFF:X}" for v in layers))
        return layers

    def parse_wave_table(self, cursor: ByteCursor, count: int) -> Tuple[WaveEntry, ...]:
        return tuple(self.parse_wave_entry(cursor) for _ in range(count))

    def parse_wave_entry(self, cursor: ByteCursor) -> WaveEntry:
        """Parse one 52-byte wave entry in the platform's layout."""
        order = self.wave_byte_order
        raw_name = cursor.read_fixed_string(NAME_LENGTH)
        offset = cursor.read_u32(order)
        loop_begin = cursor.read_u32(order)
        size_field = cursor.read_u32(order)
        loop_end = cursor.read_u32(order)
        sample_rate = cursor.read_u32(order)
        original_pitch = cursor.read_i32(order)
        loop_info = cursor.read_u32(order)
        snd_handle = cursor.read_u32(order)

        # Stored sizes count 16-bit units on every platform
        size = size_field * 2

        wave = WaveEntry(
            raw_name=raw_name,
            name=decode_name(raw_name),
            offset=offset,
            loop_begin=loop_begin,
            size=size,
            size_field=size_field,
            loop_end=loop_end,
            sample_rate=sample_rate,
            original_pitch=original_pitch,
            loop_info=loop_info,
            snd_handle=snd_handle,
        )
        logger.debug("Wave %r: offset=0x%X size=0x%X rate=%d", wave.name, offset, size, sample_rate)
        return wave

    def parse_program_table(self, cursor: ByteCursor, count: int) -> Tuple[ProgramEntry, ...]:
        """
        Parse programs.

        Each entry is followed directly by its zones; the next entry starts
        after the last zone.
        """
        programs = []
        for i in range(count):
            raw_name = cursor.read_fixed_string(NAME_LENGTH)
            num_zones = cursor.read_u32()
            zones = tuple(self.parse_program_zone(cursor) for _ in range(num_zones))
            program = ProgramEntry(
                raw_name=raw_name, name=decode_name(raw_name), num_zones=num_zones, zones=zones
            )
            logger.debug("Program #%d %r: %d zone(s)", i, program.name, num_zones)
            programs.append(program)
        return tuple(programs)

    def _parse_envelope(self, cursor: ByteCursor) -> Envelope:
        return Envelope(
            delay=cursor.read_f32(),
            attack=cursor.read_f32(),
            hold=cursor.read_f32(),
            decay=cursor.read_f32(),
            sustain=cursor.read_f32(),
            release=cursor.read_f32(),
        )

    def parse_program_zone(self, cursor: ByteCursor) -> ProgramZone:
        return ProgramZone(
            pitch_finetuning=cursor.read_i32(),
            reverb=cursor.read_i32(),
            pan_position=cursor.read_f32(),
            keynum_hold=cursor.read_i32(),
            keynum_decay=cursor.read_i32(),
            volume_env=self._parse_envelope(cursor),
            volume_env_atten=cursor.read_f32(),
            vib_delay=cursor.read_f32(),
            vib_frequency=cursor.read_f32(),
            vib_to_pitch=cursor.read_f32(),
            root_key=cursor.read_i32(),
            note_low=cursor.read_u8(),
            note_high=cursor.read_u8(),
            velocity_low=cursor.read_u8(),
            velocity_high=cursor.read_u8(),
            wave_index=cursor.read_i32(),
            base_priority=cursor.read_f32(),
            modul_env=self._parse_envelope(cursor),
            modul_env_to_pitch=cursor.read_f32(),
        )

    def parse_preset_table(self, cursor: ByteCursor, count: int) -> Tuple[PresetEntry, ...]:
        presets = []
        for i in range(count):
            raw_name = cursor.read_fixed_string(NAME_LENGTH)
            midi_bank_number = cursor.read_u32()
            midi_preset_number = cursor.read_u32()
            num_zones = cursor.read_u32()
            zones = tuple(self.parse_preset_zone(cursor) for _ in range(num_zones))
            preset = PresetEntry(
                raw_name=raw_name,
                name=decode_name(raw_name),
                midi_bank_number=midi_bank_number,
                midi_preset_number=midi_preset_number,
                num_zones=num_zones,
                zones=zones,
            )
            logger.debug("Preset #%d %r: %d zone(s)", i, preset.name, num_zones)
            presets.append(preset)
        return tuple(presets)

    def parse_preset_zone(self, cursor: ByteCursor) -> PresetZone:
        return PresetZone(
            root_key=cursor.read_i32(),
            note_low=cursor.read_u8(),
            note_high=cursor.read_u8(),
            velocity_low=cursor.read_u8(),
            velocity_high=cursor.read_u8(),
            program_index=cursor.read_i32(),
        )

    @staticmethod
    def dump_structure(bank: MusBank) -> str:
        """
        Generate a text dump of the table layout for debugging.

        Returns:
            Formatted structure description
        """
        header = bank.header
        lines = ["Mus! Bank Structure:"]
        lines.append(f"  File size: {bank.source_size} bytes")
        lines.append(f"  Header valid: {header.is_valid()}")
        lines.append(f"  Version: {header.version_number}")
        lines.append(f"  Platform: {bank.platform.value}")

        offset = MusHeader.SIZE
        sizes = [
            ("sequence table", 8 * len(bank.sequences)),
            ("layer indices", 4 * len(bank.layers)),
            ("wave table", WaveEntry.SIZE * len(bank.waves)),
            (
                "program table",
                sum(ProgramEntry.SIZE + ProgramZone.SIZE * p.num_zones for p in bank.programs),
            ),
            (
                "preset table",
                sum(PresetEntry.SIZE + PresetZone.SIZE * p.num_zones for p in bank.presets),
            ),
        ]

        lines.append("")
        lines.append("  Tables:")
        for name, size in sizes:
            lines.append(f"    {name:20} @ 0x{offset:05X}: {size:6d} bytes")
            offset += size
        lines.append(f"    {'sequence data':20} @ 0x{offset:05X}")
        lines.append(f"    {'labels table':20} @ 0x{header.offset_to_labels_offsets_table:05X}")

        return "\n".join(lines)


def parse_mus_bytes(
    data: bytes, platform: Platform = Platform.PC, byte_order: str = BIG_ENDIAN
) -> MusBank:
    """
    Convenience function to parse bank bytes.

    Args:
        data: Raw .mus contents
        platform: Wave-entry layout
        byte_order: Byte order of the header and tables

    Returns:
        Decoded MusBank
    """
    return MusParser(platform=platform, byte_order=byte_order).parse_bytes(data)
