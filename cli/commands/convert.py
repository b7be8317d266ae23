"""
Convert command - EXS24 instruments to MPC programs.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from cli.display.tables import display_batch_result
from cli.log import setup_logging
from exsconvert.converters.batch import BatchResult, convert_directory, convert_file
from exsconvert.converters.options import DEFAULT_LAYERS_PER_INSTRUMENT, ConvertOptions
from exsconvert.utils.validation import EXSConvertError

console = Console()
app = typer.Typer()


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Folder of .exs instruments, or a single .exs file"),
    output: Path = typer.Option(
        Path("output"),
        "--output",
        "-o",
        envvar="EXSCONVERT_OUTPUT",
        help="Output folder (one sub-folder per instrument)",
    ),
    layers: int = typer.Option(
        DEFAULT_LAYERS_PER_INSTRUMENT,
        "--layers",
        "-l",
        envvar="EXSCONVERT_LAYERS",
        help="Maximum layers per program instrument",
    ),
    skip_errors: bool = typer.Option(
        True, "--skip-errors/--strict", help="Skip instruments that fail instead of aborting"
    ),
    program_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        envvar="EXSCONVERT_PROGRAM_TYPE",
        help="Program type: keygroup or drum (auto-detected when omitted)",
    ),
    samples: Optional[Path] = typer.Option(
        None,
        "--samples",
        "-s",
        envvar="EXSCONVERT_SAMPLES_PATH",
        help="Folder to search for samples (defaults to the source folder)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Convert EXS24 instruments to MPC keygroup or drum programs.

    Every instrument becomes OUTPUT/<name>/<name>.xpm next to copies of
    the samples it uses.

    Examples:

        exsconvert convert Instruments -o Programs

        exsconvert convert Kit.exs -t drum --samples Samples

        exsconvert convert Instruments --strict -l 8
    """
    setup_logging(verbose)

    if not source.exists():
        console.print(f"[red]Error: Source not found: {source}[/red]")
        raise typer.Exit(1)

    try:
        options = ConvertOptions.create(
            source,
            output,
            layers_per_instrument=layers,
            skip_errors=skip_errors,
            program_type=program_type,
            samples_path=samples,
        )
    except EXSConvertError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task("Indexing samples...", total=None)

        def on_file(path: Path) -> None:
            progress.update(task, description=f"Converting {path.name}...")

        try:
            if source.is_file():
                on_file(source)
                batch = BatchResult([convert_file(source, options)])
            else:
                batch = convert_directory(options, progress=on_file)
            progress.update(task, description="Done!")

        except (EXSConvertError, OSError) as e:
            console.print(f"[red]Error: {e}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

    display_batch_result(batch)

    if not batch.converted:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
