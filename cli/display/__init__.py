"""
CLI display modules.
"""

from cli.display.tables import display_pattern_info, display_track_table

__all__ = [
    "display_pattern_info",
    "display_track_table",
]
