"""
Rich table displays for decoded patterns.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from cli.display.formatters import density_bar, hex_bytes, step_grid
from splicedrum.models.pattern import Pattern
from splicedrum.utils.formatting import format_tempo

console = Console()


def display_pattern_info(pattern: Pattern, info: dict, show_hex: bool = False) -> None:
    """
    Display a decoded pattern with Rich formatting.

    Args:
        pattern: Decoded pattern
        info: Header summary from describe_splice_header()
        show_hex: Also show the raw header bytes
    """
    budget = info.get("track_budget", 0)
    used = sum(track.record_size for track in pattern.tracks)

    header_content = f"""[bold]HW Version:[/bold] {escape(pattern.hardware_revision) or "N/A"}
[bold]Tempo:[/bold] {format_tempo(pattern.tempo)} BPM
[bold]Tracks:[/bold] {pattern.track_count}
[bold]File Size:[/bold] {info.get("size", 0)} bytes
[bold]Body Length:[/bold] {info.get("body_length", 0)} bytes
[bold]Track Data:[/bold] {density_bar(used, budget)}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]Splice Pattern Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    if show_hex and "raw_header" in info:
        console.print(f"[dim]Header bytes:[/dim] {hex_bytes(info['raw_header'], limit=64)}")

    display_track_table(pattern)


def display_track_table(pattern: Pattern) -> None:
    """Display one row per track with its step grid."""
    if not pattern.tracks:
        console.print("[dim]No tracks[/dim]")
        return

    track_table = Table(
        title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold green"
    )
    track_table.add_column("ID", style="dim", justify="right", width=4)
    track_table.add_column("Name", style="cyan", width=16)
    track_table.add_column("Steps", width=22)
    track_table.add_column("Hits", justify="right", width=5)

    for track in pattern.tracks:
        track_table.add_row(
            str(track.id),
            Text(track.name),
            step_grid(track.steps),
            str(track.hit_count),
        )

    console.print(track_table)
