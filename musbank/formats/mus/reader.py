"""
Mus! bank file reader.

Loads .mus and .sam files and decodes the bank tables.
"""

from pathlib import Path
from typing import Union

from musbank.formats.mus.binary_parser import MusParser
from musbank.formats.mus.cursor import BIG_ENDIAN
from musbank.models.bank import MUS_MAGIC, MusBank, Platform
from musbank.utils.validation import BankIOError


def load_buffer(filepath: Union[str, Path]) -> bytes:
    """
    Read a whole file into memory.

    Raises:
        BankIOError: If the file cannot be read
    """
    filepath = Path(filepath)
    try:
        with open(filepath, "rb") as f:
            return f.read()
    except OSError as e:
        raise BankIOError(f"Cannot read {filepath}: {e.strerror or e}") from e


class MusReader:
    """
    Reader for Mus! bank files.

    Example:
        bank = MusReader.read("overland.mus", platform=Platform.CONSOLE)
        print(f"{len(bank.waves)} waves, {len(bank.sequences)} sequences")
    """

    def __init__(self, platform: Platform = Platform.PC, byte_order: str = BIG_ENDIAN):
        self.parser = MusParser(platform=platform, byte_order=byte_order)
        self._raw_data: bytes = b""

    @property
    def raw_data(self) -> bytes:
        return self._raw_data

    @classmethod
    def read(
        cls,
        filepath: Union[str, Path],
        platform: Platform = Platform.PC,
        byte_order: str = BIG_ENDIAN,
    ) -> MusBank:
        """
        Read a .mus file and return the decoded bank.

        Args:
            filepath: Path to .mus file
            platform: Wave-entry layout
            byte_order: Byte order of the header and tables

        Returns:
            Decoded MusBank
        """
        reader = cls(platform=platform, byte_order=byte_order)
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> MusBank:
        return self.parse_bytes(load_buffer(filepath))

    def parse_bytes(self, data: bytes) -> MusBank:
        self._raw_data = data
        return self.parser.parse_bytes(data)

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file starts with the Mus! signature.

        Args:
            filepath: Path to check

        Returns:
            True if the first four bytes are "Mus!"
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        try:
            with open(filepath, "rb") as f:
                magic = f.read(4)
        except OSError:
            return False

        return int.from_bytes(magic, "big") == MUS_MAGIC if len(magic) == 4 else False
