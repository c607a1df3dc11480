"""Utility functions for splicedrum."""

from splicedrum.utils.formatting import format_pattern, format_steps, format_track
from splicedrum.utils.validation import describe_splice_header, validate_splice_header

__all__ = [
    "format_pattern",
    "format_steps",
    "format_track",
    "describe_splice_header",
    "validate_splice_header",
]
