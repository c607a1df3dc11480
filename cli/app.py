"""
splice - Decode and inspect .splice drum pattern files.

A small CLI on top of the splicedrum library.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.dump import dump
from cli.commands.info import info
from cli.commands.render import render
from cli.commands.validate import validate
from splicedrum import __version__

console = Console()

app = typer.Typer(
    name="splice",
    help="Decode and inspect .splice drum pattern files.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="info")(info)
app.command(name="print")(render)
app.command(name="validate")(validate)
app.command(name="dump")(dump)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]splice[/bold] version {__version__}")
    console.print("[dim]Decoder for .splice drum machine pattern files[/dim]")


def setup_logging(verbose: bool) -> None:
    """Send library logging through Rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show decoder debug output"),
) -> None:
    """
    splice - Decode and inspect .splice drum pattern files.

    [bold]Commands:[/bold]

        splice info pattern.splice       # Pattern summary and step grid
        splice print pattern.splice      # Plain text rendering
        splice validate pattern.splice   # Structure checks
        splice dump pattern.splice       # Annotated hex dump

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    setup_logging(verbose)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
