"""
Print command - plain text rendering of a pattern.
"""

from pathlib import Path

import typer
from rich.console import Console

from splicedrum.formats.splice.errors import DecodeError, InvalidStepValue
from splicedrum.formats.splice.reader import SpliceReader
from splicedrum.utils.formatting import format_pattern

console = Console()
app = typer.Typer()


@app.command()
def render(
    file: Path = typer.Argument(..., help="Splice file to print"),
    strict: bool = typer.Option(
        False, "--strict", "-s", help="Reject a last track that ends past the declared body"
    ),
) -> None:
    """
    Print a pattern in the standard text layout.

    Output is plain text, suitable for diffing against expected output:

        Saved with HW Version: 0.808-alpha
        Tempo: 120
        (0) kick	|x---|x---|x---|x---|

    Examples:

        splice print pattern_1.splice
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        pattern = SpliceReader.read(file, strict=strict)
        text = format_pattern(pattern)
    except (DecodeError, InvalidStepValue) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    # Bypass Rich markup and wrapping
    typer.echo(text, nl=False)


if __name__ == "__main__":
    app()
