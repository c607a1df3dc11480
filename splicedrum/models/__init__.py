"""Data models for decoded splice patterns."""

from splicedrum.models.pattern import Pattern
from splicedrum.models.track import Track, STEPS_PER_TRACK, STEP_OFF, STEP_ON

__all__ = [
    "Pattern",
    "Track",
    "STEPS_PER_TRACK",
    "STEP_OFF",
    "STEP_ON",
]
