"""
Raw header display.

Shows the 48 header bytes one 32-bit word per row, next to the field each
word decodes to.
"""

from dataclasses import fields
from typing import List, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from musbank.models.bank import MusHeader

console = Console()

WORD_SIZE = 4


def header_field_rows(header: MusHeader, data: bytes) -> List[Tuple[int, str, str, int]]:
    """
    Pair each header word with its field.

    Returns:
        (offset, raw hex, field name, decoded value) per field, in file order.
        Words past the end of data show an empty hex column.
    """
    rows = []
    for i, field in enumerate(fields(MusHeader)):
        offset = i * WORD_SIZE
        word = data[offset : offset + WORD_SIZE]
        raw = " ".join(f"{b:02X}" for b in word)
        rows.append((offset, raw, field.name, getattr(header, field.name)))
    return rows


def _ascii(raw: str) -> str:
    chars = []
    for part in raw.split():
        b = int(part, 16)
        chars.append(chr(b) if 32 <= b < 127 else ".")
    return "".join(chars)


def display_header_dump(header: MusHeader, data: bytes) -> None:
    """Display the raw header words beside their decoded fields."""
    table = Table(title="Raw Header", box=box.SIMPLE, show_header=True, header_style="bold blue")
    table.add_column("Offset", style="dim", width=6)
    table.add_column("Bytes", width=11)
    table.add_column("ASCII", style="cyan", width=5)
    table.add_column("Field", width=30)
    table.add_column("Value", justify="right")

    for offset, raw, name, value in header_field_rows(header, data):
        table.add_row(f"0x{offset:02X}", raw, escape(_ascii(raw)), name, f"{value} (0x{value:X})")

    console.print(table)
