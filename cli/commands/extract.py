"""
Extract command - split a bank into sequence and sample files.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from cli.display.formatters import format_size
from cli.display.logs import configure_logging
from musbank.formats.mus.cursor import BIG_ENDIAN, LITTLE_ENDIAN
from musbank.formats.mus.extractor import SAMPLES_DIR, SEQUENCES_DIR
from musbank.models.bank import Platform
from musbank.pipeline import ExtractConfig, default_output_dir, run_pipeline
from musbank.utils.validation import BankError

console = Console()
app = typer.Typer()


def resolve_platform(pc: bool, console_style: bool) -> Platform:
    """Pick the wave layout from the --pc/--console flags."""
    if pc and console_style:
        console.print("[red]Error: --pc and --console are mutually exclusive[/red]")
        raise typer.Exit(1)
    return Platform.CONSOLE if console_style else Platform.PC


def report_bank_error(error: BankError) -> None:
    """Print a decode failure with its stage and offset."""
    stage = f" during {error.stage}" if error.stage else ""
    console.print(f"[red]Error{stage}: {escape(error.message)}[/red]")
    if error.offset is not None:
        console.print(f"[dim]Byte offset: 0x{error.offset:X} ({error.offset})[/dim]")


@app.command()
def extract(
    mus_file: Path = typer.Argument(..., help="Bank (.mus) file to read"),
    sam_file: Path = typer.Argument(..., help="Sample (.sam) file to read"),
    pc: bool = typer.Option(False, "--pc", "-p", help="Use the PC wave layout (default)"),
    console_style: bool = typer.Option(False, "--console", "-c", help="Use the console wave layout"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output directory (default: bank path without extension)"
    ),
    little_endian: bool = typer.Option(
        False, "--little-endian", "-L", help="Header and tables are little-endian"
    ),
    ads: bool = typer.Option(False, "--ads", help="Wrap samples in ADS headers"),
    no_text: bool = typer.Option(
        False, "--no-text", help="Skip the SoundFont description and loop info files"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Replace existing output without asking"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Log every decoded record"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log stage summaries"),
) -> None:
    """
    Extract sequences and samples from a Mus! bank.

    Writes:
    - sequences/<bank>_NNNN.msq for each sequence
    - samples/<wave name>.bin (or .ads) for each wave
    - <bank>.txt SoundFont description and <bank>_smploopinfo.txt

    Examples:

        musbank extract overland.mus overland.sam

        musbank extract overland.mus overland.sam --console --ads

        musbank extract overland.mus overland.sam -o out/ --force
    """
    configure_logging(debug=debug, verbose=verbose)
    platform = resolve_platform(pc, console_style)

    for path in (mus_file, sam_file):
        if not path.exists():
            console.print(f"[red]Error: File not found: {path}[/red]")
            raise typer.Exit(1)

    output_dir = output or default_output_dir(mus_file)
    overwrite = force
    if not force and any((output_dir / d).exists() for d in (SEQUENCES_DIR, SAMPLES_DIR)):
        overwrite = typer.confirm(f"{output_dir} already exists, delete?", default=False)
        if not overwrite:
            console.print("Abandoning")
            raise typer.Exit()

    config = ExtractConfig(
        platform=platform,
        output_dir=output_dir,
        byte_order=LITTLE_ENDIAN if little_endian else BIG_ENDIAN,
        overwrite=overwrite,
        ads=ads,
        write_description=not no_text,
        write_loop_info=not no_text,
    )

    try:
        result = run_pipeline(mus_file, sam_file, config)
    except BankError as e:
        report_bank_error(e)
        raise typer.Exit(1)

    total = sum(r.length for r in result.wave_regions)
    console.print(
        Panel(
            f"[bold]Bank:[/bold] {mus_file}\n"
            f"[bold]Output:[/bold] {result.output_dir}\n"
            f"[bold]Sequences:[/bold] {len(result.sequence_regions)}\n"
            f"[bold]Samples:[/bold] {len(result.wave_regions)} ({format_size(total)})\n"
            f"[bold]Files written:[/bold] {len(result.written)}",
            title="[bold green]Extraction complete[/bold green]",
            border_style="green",
            expand=False,
        )
    )


if __name__ == "__main__":
    app()
