"""
Track data model for splice patterns.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

from splicedrum.formats.splice.layout import DEFAULT_LAYOUT

STEPS_PER_TRACK = 16

STEP_OFF = 0
STEP_ON = 1


@dataclass(frozen=True)
class Track:
    """
    A single instrument lane in a drum pattern.

    Attributes:
        id: Track identifier (0-255)
        name: Instrument name as stored in the file
        steps: Raw step bytes, exactly 16 (0 = no hit, 1 = hit)
    """

    id: int = 0
    name: str = ""
    steps: Tuple[int, ...] = field(default_factory=lambda: (STEP_OFF,) * STEPS_PER_TRACK)

    def __post_init__(self):
        # Accept any sequence but always store a tuple
        steps = tuple(self.steps)
        if len(steps) != STEPS_PER_TRACK:
            raise ValueError(
                f"Track {self.id} must have {STEPS_PER_TRACK} steps, got {len(steps)}"
            )
        object.__setattr__(self, "steps", steps)

        if not 0 <= self.id <= 255:
            raise ValueError(f"Track id must be 0-255, got {self.id}")

    @property
    def hits(self) -> List[int]:
        """Indices of steps that trigger the instrument."""
        return [i for i, step in enumerate(self.steps) if step != STEP_OFF]

    @property
    def hit_count(self) -> int:
        return len(self.hits)

    @property
    def is_empty(self) -> bool:
        """Check if the track never plays."""
        return not self.hits

    @property
    def record_size(self) -> int:
        """Bytes this track occupies in a .splice file."""
        name_length = len(self.name.encode(DEFAULT_LAYOUT.text_encoding, errors="replace"))
        return DEFAULT_LAYOUT.track_size(name_length)

    def is_hit(self, index: int) -> bool:
        """
        Check whether a step is a hit.

        Args:
            index: Step index (0-15)

        Returns:
            True if the step byte is nonzero
        """
        if not 0 <= index < STEPS_PER_TRACK:
            raise IndexError(f"Step index must be 0-{STEPS_PER_TRACK - 1}, got {index}")
        return self.steps[index] != STEP_OFF

    def __repr__(self) -> str:
        return f"Track(id={self.id}, name={self.name!r}, hits={self.hits})"
