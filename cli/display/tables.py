"""
Rich table displays for bank information.

Provides formatted output for the header and each decoded table.
"""

from typing import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import format_offset, format_size, key_range, pan_bar
from musbank.formats.mus.regions import Region
from musbank.models.bank import MusBank

console = Console()


def display_header(bank: MusBank, filepath: str) -> None:
    """Display the bank header panel."""
    header = bank.header
    status = "[green]Valid[/green]" if header.is_valid() else "[red]Invalid[/red]"

    content = f"""[bold]File:[/bold] {filepath}
[bold]Magic:[/bold] 0x{header.magic:08X} {status}
[bold]Header Size:[/bold] {header.header_size}
[bold]Version:[/bold] {header.version_number}
[bold]Platform:[/bold] {bank.platform.value}
[bold]Reverb:[/bold] volume {header.reverb_volume}, type {header.reverb_type}, multiply {header.reverb_multiply}
[bold]Labels:[/bold] {header.num_labels} (table at {format_offset(header.offset_to_labels_offsets_table)})
[bold]File Size:[/bold] {format_size(bank.source_size)} ({bank.source_size} bytes)
[bold]Tables End:[/bold] {format_offset(bank.end_offset)}"""

    console.print(
        Panel(content, title="[bold blue]Mus! Bank Info[/bold blue]", border_style="blue", expand=False)
    )

    counts = Table(title="Counts", box=box.SIMPLE, show_header=True, header_style="bold yellow")
    counts.add_column("Table", style="cyan", width=12)
    counts.add_column("Count", justify="right", width=8)
    counts.add_row("Sequences", str(header.num_sequences))
    counts.add_row("Layers", str(header.num_layers))
    counts.add_row("Waves", str(header.num_waves))
    counts.add_row("Programs", str(header.num_programs))
    counts.add_row("Presets", str(header.num_presets))
    console.print(counts)


def display_sequences(bank: MusBank, regions: Sequence[Region]) -> None:
    """Display sequence table entries with their resolved regions."""
    table = Table(
        title="Sequences", box=box.ROUNDED, show_header=True, header_style="bold magenta"
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Index", width=8)
    table.add_column("Offset", width=10)
    table.add_column("Length", justify="right", width=10)

    for entry, region in zip(bank.sequences, regions):
        table.add_row(
            str(region.index), str(entry.index), format_offset(region.start), str(region.length)
        )

    console.print(table)


def display_waves(bank: MusBank) -> None:
    """Display wave entries."""
    table = Table(title="Waves", box=box.ROUNDED, show_header=True, header_style="bold green")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan", width=20)
    table.add_column("Offset", width=10)
    table.add_column("Size", justify="right", width=9)
    table.add_column("Rate", justify="right", width=6)
    table.add_column("Key", justify="right", width=4)
    table.add_column("Loop", width=18)

    for i, wave in enumerate(bank.waves):
        loop = f"{wave.loop_begin}-{wave.loop_end}" if wave.loops else "[dim]-[/dim]"
        table.add_row(
            str(i),
            escape(wave.name),
            format_offset(wave.offset),
            str(wave.size),
            str(wave.sample_rate),
            str(wave.root_key),
            loop,
        )

    console.print(table)


def display_programs(bank: MusBank, show_zones: bool = False) -> None:
    """Display programs, optionally with one row per zone."""
    table = Table(title="Programs", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan", width=20)
    table.add_column("Zones", justify="right", width=6)
    if show_zones:
        table.add_column("Sample", width=20)
        table.add_column("Keys", width=10)
        table.add_column("Pan", width=18)
        table.add_column("Rev", justify="right", width=4)

    for i, program in enumerate(bank.programs):
        if not show_zones or not program.zones:
            row = [str(i), escape(program.name), str(program.num_zones)]
            if show_zones:
                row.extend(["", "", "", ""])
            table.add_row(*row)
            continue

        for j, zone in enumerate(program.zones):
            table.add_row(
                str(i) if j == 0 else "",
                escape(program.name) if j == 0 else "",
                str(program.num_zones) if j == 0 else "",
                escape(bank.wave_name(zone.wave_index)),
                key_range(zone.note_low, zone.note_high),
                pan_bar(zone.pan_position),
                str(zone.reverb),
            )

    console.print(table)


def display_presets(bank: MusBank, show_zones: bool = False) -> None:
    """Display presets, optionally with one row per zone."""
    table = Table(title="Presets", box=box.ROUNDED, show_header=True, header_style="bold yellow")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan", width=20)
    table.add_column("Bank", justify="right", width=5)
    table.add_column("Prog", justify="right", width=5)
    table.add_column("Zones", justify="right", width=6)
    if show_zones:
        table.add_column("Program", width=20)
        table.add_column("Keys", width=10)
        table.add_column("Velocity", width=9)

    for i, preset in enumerate(bank.presets):
        row = [
            str(i),
            escape(preset.name),
            str(preset.midi_bank_number),
            str(preset.midi_preset_number),
            str(preset.num_zones),
        ]
        if not show_zones or not preset.zones:
            if show_zones:
                row.extend(["", "", ""])
            table.add_row(*row)
            continue

        for j, zone in enumerate(preset.zones):
            lead = row if j == 0 else [""] * len(row)
            table.add_row(
                *lead,
                escape(bank.program_name(zone.program_index)),
                key_range(zone.note_low, zone.note_high),
                f"{zone.velocity_low}-{zone.velocity_high}",
            )

    console.print(table)
