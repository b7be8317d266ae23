"""
Info command - display EXS instrument information.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import (
    display_groups_table,
    display_instrument_info,
    display_params,
    display_samples_table,
    display_sequences,
    display_zones_table,
)
from cli.log import setup_logging
from exsconvert.analysis.program_type import classify_program, collect_zone_statistics
from exsconvert.formats.exs.reader import EXSReader
from exsconvert.utils.validation import EXSConvertError

console = Console()
app = typer.Typer()

ZONE_PREVIEW = 32


@app.command()
def info(
    file: Path = typer.Argument(..., help="EXS instrument file (.exs)"),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Show every zone, the sample list and global parameters"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show decoder details"),
) -> None:
    """
    Display EXS instrument information.

    Shows header, zones, groups and round-robin sequences, plus the
    program type the converter would pick.

    Examples:

        exsconvert info Piano.exs

        exsconvert info Kit.exs --all
    """
    setup_logging(verbose)

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        instrument = EXSReader.read(file)
        file_info = EXSReader.get_file_info(file)
    except (EXSConvertError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    display_instrument_info(
        instrument,
        file_info,
        classify_program(instrument),
        collect_zone_statistics(instrument),
    )
    display_zones_table(instrument, limit=None if show_all else ZONE_PREVIEW)
    display_groups_table(instrument)
    display_sequences(instrument)

    if show_all:
        display_samples_table(instrument)
        display_params(instrument.params)


if __name__ == "__main__":
    app()
