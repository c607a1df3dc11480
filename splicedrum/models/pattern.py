"""
Pattern data model - the decoded contents of a .splice file.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from splicedrum.models.track import Track


@dataclass(frozen=True)
class Pattern:
    """
    Complete drum pattern.

    A Pattern is built once by the decoder and never modified afterwards.
    str(pattern) gives the standard text rendering.

    Attributes:
        hardware_revision: Version string of the machine that saved the file
        tempo: Tempo in BPM
        tracks: Tracks in file order
    """

    hardware_revision: str = ""
    tempo: float = 0.0
    tracks: Tuple[Track, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "tracks", tuple(self.tracks))

    @property
    def track_count(self) -> int:
        return len(self.tracks)

    @property
    def track_ids(self) -> Tuple[int, ...]:
        return tuple(track.id for track in self.tracks)

    def get_track(self, track_id: int) -> Optional[Track]:
        """Get the first track with the given id."""
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def find_track(self, name: str) -> Optional[Track]:
        """Get the first track with the given name (case-insensitive)."""
        wanted = name.lower()
        for track in self.tracks:
            if track.name.lower() == wanted:
                return track
        return None

    def __str__(self) -> str:
        from splicedrum.utils.formatting import format_pattern

        return format_pattern(self)

    def __repr__(self) -> str:
        return (
            f"Pattern(hardware_revision={self.hardware_revision!r}, "
            f"tempo={self.tempo:g}, tracks={len(self.tracks)})"
        )
