"""
exsconvert - Convert Logic EXS24 instruments to Akai MPC programs.

A CLI tool for converting and inspecting EXS24 sampler instruments.
"""

import typer
from rich.console import Console

from cli.commands.convert import convert
from cli.commands.info import info
from exsconvert import __version__

console = Console()

# Main app
app = typer.Typer(
    name="exsconvert",
    help="Convert Logic EXS24 instruments to Akai MPC programs.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="convert")(convert)
app.command(name="info")(info)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]exsconvert[/bold] version {__version__}")
    console.print("[dim]EXS24 to MPC keygroup/drum program converter[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
) -> None:
    """
    exsconvert - Convert Logic EXS24 instruments to Akai MPC programs.

    Converts [cyan]EXS24[/cyan] instruments (.exs) into MPC
    [cyan]keygroup[/cyan] or [cyan]drum[/cyan] programs (.xpm).

    [bold]Quick Start:[/bold]

        exsconvert convert Instruments -o Programs   # Convert a folder
        exsconvert convert Kit.exs -t drum           # Force a drum program

    [bold]Analysis Commands:[/bold]

        exsconvert info Piano.exs         # Zones, groups, sequences
        exsconvert info Piano.exs --all   # Everything, incl. parameters

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
