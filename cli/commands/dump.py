"""
Dump command - annotated hex dump of a splice file.
"""

from pathlib import Path
from typing import List, Tuple

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from splicedrum.formats.splice.binary_parser import SpliceParser
from splicedrum.formats.splice.errors import DecodeError
from splicedrum.formats.splice.layout import DEFAULT_LAYOUT, SpliceLayout

console = Console()
app = typer.Typer()

# (start, end, name, description, color)
Region = Tuple[int, int, str, str, str]


def header_regions(layout: SpliceLayout = DEFAULT_LAYOUT) -> List[Region]:
    """Fixed header regions."""
    return [
        (layout.magic_offset, layout.magic_end, "MAGIC", "Magic cookie", "bright_blue"),
        (
            layout.body_length_offset,
            layout.body_length_end,
            "BODY_LEN",
            "Body length (uint64 BE)",
            "cyan",
        ),
        (
            layout.hardware_rev_offset,
            layout.hardware_rev_end,
            "HW_REV",
            "Hardware revision",
            "magenta",
        ),
        (layout.tempo_offset, layout.tempo_end, "TEMPO", "Tempo (float32 LE)", "yellow"),
    ]


def build_regions(data: bytes, layout: SpliceLayout = DEFAULT_LAYOUT) -> List[Region]:
    """
    Map a file to named regions.

    Tracks decoded before a decode error are still mapped; the rest of the
    file is reported as UNPARSED.
    """
    regions = [r for r in header_regions(layout) if r[1] <= len(data)]

    parser = SpliceParser(layout)
    error = None
    try:
        parser.parse_bytes(data)
    except DecodeError as e:
        error = e

    for number, (offset, size) in enumerate(parser.records):
        id_end = offset + layout.track_id_size
        name_start = id_end + layout.track_name_length_size
        steps_start = offset + size - layout.step_count
        regions.append((offset, id_end, f"T{number}_ID", f"Track {number} id slot", "green"))
        regions.append((id_end, name_start, f"T{number}_LEN", f"Track {number} name length", "blue"))
        if steps_start > name_start:
            regions.append(
                (name_start, steps_start, f"T{number}_NAME", f"Track {number} name", "cyan")
            )
        regions.append((steps_start, offset + size, f"T{number}_STEP", f"Track {number} steps", "red"))

    covered = max((r[1] for r in regions), default=0)
    if covered < len(data):
        if error is not None:
            regions.append((covered, len(data), "UNPARSED", f"Not decoded: {error.message}", "dim"))
        else:
            regions.append((covered, len(data), "TRAILING", "After the last track, ignored", "dim"))

    return regions


def get_region_for_offset(regions: List[Region], offset: int) -> Tuple[str, str]:
    """Get region name and color for an offset."""
    for start, end, name, desc, color in regions:
        if start <= offset < end:
            return name, color
    return "UNKNOWN", "white"


def format_hex_line(data: bytes, offset: int, regions: List[Region], bytes_per_line: int = 16) -> Text:
    """
    Format a single line of hex dump, coloring each byte by its region.

    Returns Rich Text object with colored output.
    """
    text = Text()

    text.append(f"0x{offset:03X} ", style="dim")

    region_name, _ = get_region_for_offset(regions, offset)
    text.append(f"[{region_name:10s}] ", style="dim")

    for i, byte in enumerate(data):
        _, color = get_region_for_offset(regions, offset + i)
        style = "dim" if byte == 0x00 else color
        text.append(f"{byte:02X}", style=style)
        text.append(" ")

    if len(data) < bytes_per_line:
        text.append("   " * (bytes_per_line - len(data)))

    text.append(" ", style="dim")
    for byte in data:
        if 32 <= byte < 127:
            text.append(chr(byte), style="green")
        elif byte == 0x00:
            text.append(".", style="dim")
        else:
            text.append(".", style="yellow")

    return text


def create_legend(regions: List[Region]) -> Table:
    """Create a legend for the hex dump colors."""
    table = Table(title="Legend", box=box.SIMPLE, show_header=False, expand=False)
    table.add_column("Region", width=12)
    table.add_column("Description", width=40)

    for start, end, name, desc, color in regions:
        table.add_row(
            Text(name, style=color),
            f"{desc} ({end - start} bytes, 0x{start:03X}-0x{end - 1:03X})",
        )

    return table


@app.command()
def dump(
    file: Path = typer.Argument(..., help="Splice file to dump"),
    width: int = typer.Option(16, "--width", "-w", help="Bytes per line"),
    max_lines: int = typer.Option(0, "--max-lines", "-m", help="Maximum lines (0=all)"),
    no_legend: bool = typer.Option(False, "--no-legend", help="Hide the legend"),
) -> None:
    """
    Annotated hex dump of a splice pattern file.

    Bytes are colored by region: header fields, and the id slot, name
    length, name and steps of each track.

    Examples:

        splice dump pattern_1.splice

        splice dump pattern_1.splice --width 8 --max-lines 10
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    if width <= 0:
        console.print(f"[red]Error: Width must be positive, got {width}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    regions = build_regions(data)

    if not no_legend:
        console.print(create_legend(regions))
        console.print()

    console.print(
        Panel(
            f"[bold]File:[/bold] {file}\n[bold]Size:[/bold] {len(data)} bytes",
            title="[bold]Splice Hex Dump[/bold]",
            border_style="blue",
        )
    )

    lines_shown = 0
    for offset in range(0, len(data), width):
        if max_lines and lines_shown >= max_lines:
            console.print(f"[dim]... {len(data) - offset} more bytes ...[/dim]")
            break
        console.print(format_hex_line(data[offset : offset + width], offset, regions, width))
        lines_shown += 1

    console.print(f"[dim]Total: {lines_shown} lines displayed[/dim]")


if __name__ == "__main__":
    app()
