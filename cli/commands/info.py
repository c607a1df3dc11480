"""
Info command - display decoded pattern information.
"""

import math
from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_pattern_info
from splicedrum.formats.splice.errors import DecodeError
from splicedrum.formats.splice.reader import SpliceReader
from splicedrum.models.pattern import Pattern
from splicedrum.utils.formatting import format_tempo

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="Splice file to analyze"),
    strict: bool = typer.Option(
        False, "--strict", "-s", help="Reject a last track that ends past the declared body"
    ),
    hex: bool = typer.Option(False, "--hex", "-x", help="Show raw header bytes"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """
    Display information about a splice pattern file.

    Shows hardware version, tempo, track data usage and a step grid
    for every track.

    Examples:

        splice info pattern_1.splice

        splice info pattern_1.splice --hex

        splice info pattern_1.splice --json
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        pattern = SpliceReader.read(file, strict=strict)
    except DecodeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if json_output:
        _output_json(pattern)
    else:
        display_pattern_info(pattern, SpliceReader.get_file_info(file), show_hex=hex)


def _output_json(pattern: Pattern) -> None:
    """Output pattern as JSON."""
    # JSON has no NaN or infinity
    tempo = None
    if math.isfinite(pattern.tempo):
        tempo = float(format_tempo(pattern.tempo))

    data = {
        "hardware_revision": pattern.hardware_revision,
        "tempo": tempo,
        "tracks": [
            {"id": track.id, "name": track.name, "steps": list(track.steps)}
            for track in pattern.tracks
        ],
    }
    console.print_json(data=data)


if __name__ == "__main__":
    app()
