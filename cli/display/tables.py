"""
Rich table displays for instrument information.

Provides formatted output for EXS instrument analysis and conversion results.
"""

from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import (
    group_limit_str,
    key_range_str,
    pan_bar,
    range_bar,
    select_group_str,
    value_bar,
    yes_no,
)
from exsconvert.analysis.program_type import ZoneStatistics
from exsconvert.converters.batch import BatchResult
from exsconvert.models.instrument import EXSInstrument
from exsconvert.models.params import Params
from exsconvert.models.program import ProgramType

console = Console()


def display_instrument_info(
    instrument: EXSInstrument,
    file_info: Dict[str, Any],
    program_type: ProgramType,
    stats: ZoneStatistics,
) -> None:
    """Display the instrument overview panel."""
    chunks = ", ".join(f"{name}: {count}" for name, count in sorted(file_info["chunks"].items()))
    byte_order = "big-endian" if instrument.big_endian else "little-endian"

    single_percent = int(stats.single_note_ratio * 100)
    one_shot_percent = int(stats.one_shot_ratio * 100)

    header_content = f"""[bold]Instrument:[/bold] {instrument.name}
[bold]File:[/bold] {file_info["file"]}
[bold]Magic:[/bold] {file_info["magic"]} ({byte_order})
[bold]Size:[/bold] {instrument.size} bytes{" (size-expanded)" if instrument.size_expanded else ""}
[bold]Chunks:[/bold] {chunks or "none"}
[bold]Zones:[/bold] {len(instrument.zones)} ({stats.playable_zones} playable, {stats.key_ranges} key ranges)
[bold]Groups:[/bold] {len(instrument.groups)}
[bold]Samples:[/bold] {len(instrument.samples)}
[bold]Single-note zones:[/bold] {value_bar(single_percent, max_value=100, show_value=False)}
[bold]One-shot zones:[/bold] {value_bar(one_shot_percent, max_value=100, show_value=False)}
[bold]Program Type:[/bold] [cyan]{program_type.value}[/cyan]"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]EXS Instrument Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )


def display_zones_table(instrument: EXSInstrument, limit: Optional[int] = 32) -> None:
    """Display zones, optionally truncated to the first `limit` entries."""
    table = Table(title="Zones", box=box.ROUNDED, show_header=True, header_style="bold green")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan", width=18)
    table.add_column("Keys", width=18)
    table.add_column("Root", width=5)
    table.add_column("Velocity", width=26)
    table.add_column("Pan", width=20)
    table.add_column("Vol", width=5)
    table.add_column("Grp", width=4)
    table.add_column("Sample", width=18)
    table.add_column("Flags", width=10)

    zones = instrument.zones if limit is None else instrument.zones[:limit]
    for index, zone in enumerate(zones):
        if instrument.has_sample(zone):
            sample = instrument.sample_for(zone).resolved_file_name
        else:
            sample = "[red]missing[/red]"

        flags = []
        if zone.one_shot:
            flags.append("1shot")
        if zone.loop_on:
            flags.append("loop")
        if zone.reverse:
            flags.append("rev")

        table.add_row(
            str(index),
            zone.name,
            key_range_str(zone.key_low, zone.key_high),
            str(zone.root_note),
            f"{zone.vel_low:3d}-{zone.vel_high:<3d} {range_bar(zone.vel_low, zone.vel_high, width=12)}",
            pan_bar(zone.pan, width=9),
            str(zone.volume),
            str(zone.group_index),
            sample,
            " ".join(flags),
        )

    console.print(table)
    if limit is not None and len(instrument.zones) > limit:
        console.print(f"[dim]... {len(instrument.zones) - limit} more zones (use --all)[/dim]")


def display_groups_table(instrument: EXSInstrument) -> None:
    """Display groups with their limits and round-robin links."""
    table = Table(title="Groups", box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", width=4)
    table.add_column("Name", style="cyan", width=18)
    table.add_column("Vol", width=5)
    table.add_column("Keys", width=9)
    table.add_column("Velocity", width=9)
    table.add_column("Cutoff", width=6)
    table.add_column("Trigger", width=8)
    table.add_column("Follows", width=16)
    table.add_column("Seq", width=4)

    names = {index: group.name for index, group in enumerate(instrument.groups)}
    for index, group in enumerate(instrument.groups):
        table.add_row(
            str(index),
            str(group.id),
            group.name,
            str(group.volume),
            group_limit_str(group.key_low, group.key_high),
            group_limit_str(group.vel_low, group.vel_high),
            str(group.cutoff),
            "Release" if group.is_release_trigger else "Attack",
            select_group_str(group.select_group, names),
            str(group.select_number) if group.select_number else "[dim]-[/dim]",
        )

    console.print(table)


def display_samples_table(instrument: EXSInstrument) -> None:
    table = Table(title="Samples", box=box.SIMPLE, show_header=True, header_style="bold yellow")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan", width=24)
    table.add_column("File", width=24)
    table.add_column("Rate", width=7)
    table.add_column("Bits", width=5)
    table.add_column("Length", width=10)
    table.add_column("Path", style="dim")

    for index, sample in enumerate(instrument.samples):
        table.add_row(
            str(index),
            sample.name,
            sample.resolved_file_name,
            str(sample.rate),
            str(sample.bit_depth),
            str(sample.length),
            sample.path,
        )

    console.print(table)


def display_sequences(instrument: EXSInstrument) -> None:
    """Display round-robin chains as group name sequences."""
    if not instrument.sequences:
        console.print("[dim]No round-robin sequences[/dim]")
        return

    table = Table(title="Round-Robin Sequences", box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=4)
    table.add_column("Length", width=6)
    table.add_column("Play Order")

    for index, chain in enumerate(instrument.sequences):
        order = " -> ".join(instrument.groups[group].name or str(group) for group in chain)
        table.add_row(str(index + 1), str(len(chain)), order)

    console.print(table)


def display_params(params: Optional[Params]) -> None:
    """Display global parameters and active modulation routings."""
    if params is None:
        console.print("[dim]No global parameters (group envelopes are used)[/dim]")
        return

    table = Table(title="Global Parameters", box=box.SIMPLE, show_header=False)
    table.add_column("Parameter", style="cyan", width=22)
    table.add_column("Value", width=40)

    table.add_row("Output Volume", str(params.output_volume))
    table.add_row("Voices", str(params.voices))
    table.add_row("Transpose", str(params.transpose))
    table.add_row("Coarse/Fine Tune", f"{params.coarse_tune} / {params.fine_tune}")
    table.add_row("Pitch Bend Up/Down", f"{params.pitch_bend_up} / {params.pitch_bend_down}")
    table.add_row("Filter", f"{'On' if params.filter_on else 'Off'} (type {params.filter_type})")
    table.add_row(
        "Env 1 (filter) ADSR",
        f"{params.env1_attack} {params.env1_decay} {params.env1_sustain} {params.env1_release}",
    )
    table.add_row(
        "Env 2 (amp) ADSR",
        f"{params.env2_attack} {params.env2_decay} {params.env2_sustain} {params.env2_release}",
    )
    table.add_row("Time Curve", str(params.time_curve))

    console.print(table)

    active = params.active_modulations
    if active:
        mod_table = Table(title="Modulation Matrix", box=box.SIMPLE, show_header=True, header_style="dim")
        mod_table.add_column("Dest", width=6)
        mod_table.add_column("Source", width=6)
        mod_table.add_column("Via", width=6)
        mod_table.add_column("Amount", width=8)
        mod_table.add_column("Inv", width=5)
        for slot in active:
            mod_table.add_row(
                str(slot.destination),
                str(slot.source),
                str(slot.via),
                str(slot.amount),
                yes_no(slot.invert),
            )
        console.print(mod_table)


def display_batch_result(batch: BatchResult) -> None:
    """Display one row per converted or skipped file."""
    table = Table(title="Conversion Results", box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("Instrument", style="cyan", width=28)
    table.add_column("Type", width=9)
    table.add_column("Inst", width=5)
    table.add_column("Layers", width=6)
    table.add_column("Result")

    for result in batch.results:
        program_type = result.program_type.value if result.program_type else "-"
        if result.success:
            outcome = f"[green]OK[/green] [dim]{result.xpm_path}[/dim]"
        else:
            outcome = f"[red]Skipped[/red] [dim]{result.error}[/dim]"
        table.add_row(
            result.source.stem,
            program_type,
            str(result.instruments),
            str(result.layers),
            outcome,
        )

    console.print(table)
    console.print(
        f"[green]{len(batch.converted)} converted[/green], "
        f"[{'red' if batch.failed else 'dim'}]{len(batch.failed)} skipped[/]"
    )
