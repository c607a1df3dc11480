"""
Display formatting utilities for CLI output.

Provides step grids, bar graphics, and other formatting helpers.
"""

from typing import Sequence

from rich.text import Text

from splicedrum.utils.formatting import BAR_LENGTH, STEP_SYMBOLS


def step_grid(steps: Sequence[int], hit_style: str = "bold green", rest_style: str = "dim") -> Text:
    """
    Create a colored step grid for a track.

    Step bytes other than 0 and 1 are shown as "?" in red instead of failing,
    so a suspicious file can still be inspected.

    Args:
        steps: Raw step bytes
        hit_style: Style for hits
        rest_style: Style for rests

    Returns:
        Rich Text like "|x---|x---|x---|x---|"
    """
    text = Text()
    for index, step in enumerate(steps):
        if index % BAR_LENGTH == 0:
            text.append("|", style="dim")

        if step == 0:
            text.append(STEP_SYMBOLS[0], style=rest_style)
        elif step == 1:
            text.append(STEP_SYMBOLS[1], style=hit_style)
        else:
            text.append("?", style="bold red")
    text.append("|", style="dim")
    return text


def density_bar(
    used: int,
    total: int,
    width: int = 20,
    filled_char: str = "█",
    empty_char: str = "░",
) -> str:
    """
    Create a density/usage bar with percentage.

    Returns:
        Formatted string like "[████████░░░░░░░░░░░░] 42.0% (21/50)"
    """
    if total <= 0:
        return f"[{empty_char * width}]   0.0% (0/0)"

    clamped = max(0, min(used, total))
    percent = (used / total) * 100
    fill_count = int((clamped / total) * width)
    empty_count = width - fill_count

    bar = filled_char * fill_count + empty_char * empty_count

    return f"[{bar}] {percent:5.1f}% ({used}/{total})"


def hex_bytes(data: bytes, limit: int = 16) -> str:
    """Format bytes as space separated hex, truncated with '...'."""
    shown = " ".join(f"{b:02X}" for b in data[:limit])
    if len(data) > limit:
        shown += " ..."
    return shown
