"""
musbank - Decode and extract Mus! audio bank files.

A CLI tool for inspecting banks and splitting them into sequences and samples.
"""

import typer
from rich.console import Console

from cli.commands.extract import extract
from cli.commands.info import info
from musbank import __version__

console = Console()

# Main app
app = typer.Typer(
    name="musbank",
    help="Decode and extract Mus! audio bank files.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="extract")(extract)
app.command(name="info")(info)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]musbank[/bold] version {__version__}")
    console.print("[dim]Decoder and extractor for Mus! audio bank files[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
) -> None:
    """
    musbank - Decode and extract Mus! audio banks.

    A bank comes as two files: the [cyan].mus[/cyan] file with the tables and
    sequence data, and the [cyan].sam[/cyan] file with the raw samples.

    [bold]Quick Start:[/bold]

        musbank info overland.mus                   # Header and tables
        musbank info overland.mus --zones           # Include zones
        musbank extract overland.mus overland.sam   # Split into files

    [bold]Platform Layouts:[/bold]

        --pc       Little-endian wave entries, sizes in 16-bit frames (default)
        --console  Wave entries in bank byte order, PS-ADPCM payloads

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
