"""
Info command - display decoded bank tables.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.commands.extract import report_bank_error, resolve_platform
from cli.display.hex_view import display_header_dump
from cli.display.logs import configure_logging
from cli.display.tables import (
    display_header,
    display_presets,
    display_programs,
    display_sequences,
    display_waves,
)
from musbank.formats.mus.binary_parser import MusParser
from musbank.formats.mus.cursor import BIG_ENDIAN, LITTLE_ENDIAN
from musbank.formats.mus.reader import MusReader
from musbank.formats.mus.regions import resolve_sequence_regions
from musbank.utils.validation import BankError

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="Bank (.mus) file to analyze"),
    pc: bool = typer.Option(False, "--pc", "-p", help="Use the PC wave layout (default)"),
    console_style: bool = typer.Option(False, "--console", "-c", help="Use the console wave layout"),
    little_endian: bool = typer.Option(
        False, "--little-endian", "-L", help="Header and tables are little-endian"
    ),
    zones: bool = typer.Option(False, "--zones", "-z", help="List program and preset zones"),
    raw: bool = typer.Option(False, "--raw", "-r", help="Show the raw header bytes"),
    structure: bool = typer.Option(False, "--structure", "-s", help="Show the table layout"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Log every decoded record"),
) -> None:
    """
    Display the decoded contents of a Mus! bank.

    Examples:

        musbank info overland.mus

        musbank info overland.mus --zones

        musbank info overland.mus --console --raw
    """
    configure_logging(debug=debug)
    platform = resolve_platform(pc, console_style)

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    reader = MusReader(platform=platform, byte_order=LITTLE_ENDIAN if little_endian else BIG_ENDIAN)
    try:
        bank = reader.parse_file(file)
        regions = resolve_sequence_regions(
            bank.sequences, bank.header.offset_to_labels_offsets_table, len(reader.raw_data)
        )
    except BankError as e:
        report_bank_error(e)
        raise typer.Exit(1)

    display_header(bank, str(file))
    if raw:
        display_header_dump(bank.header, reader.raw_data)
    if structure:
        console.print(MusParser.dump_structure(bank))

    console.print()
    if bank.sequences:
        display_sequences(bank, regions)
    if bank.waves:
        display_waves(bank)
    if bank.programs:
        display_programs(bank, show_zones=zones)
    if bank.presets:
        display_presets(bank, show_zones=zones)


if __name__ == "__main__":
    app()
