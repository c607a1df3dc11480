"""
splicedrum - Decoder for .splice drum machine pattern files.

This library provides tools to:
- Decode .splice files into immutable Pattern/Track objects
- Render decoded patterns in the standard text layout
- Inspect file headers without a full decode

Example usage:
    import splicedrum

    pattern = splicedrum.decode_file("pattern_1.splice")
    print(pattern)

    for track in pattern.tracks:
        print(track.id, track.name, track.hits)
"""

__version__ = "0.1.0"
__author__ = "splicedrum Contributors"

from splicedrum.formats.splice.errors import (
    DecodeError,
    InsufficientHeaderData,
    InsufficientTrackData,
    InvalidStepValue,
    NotRecognizedFormat,
    OverrunTrackRegion,
    TruncatedFile,
    TruncatedTrack,
)
from splicedrum.formats.splice.reader import SpliceReader, decode, decode_file
from splicedrum.models.pattern import Pattern
from splicedrum.models.track import Track

__all__ = [
    "SpliceReader",
    "decode",
    "decode_file",
    "Pattern",
    "Track",
    "DecodeError",
    "InsufficientHeaderData",
    "InsufficientTrackData",
    "InvalidStepValue",
    "NotRecognizedFormat",
    "OverrunTrackRegion",
    "TruncatedFile",
    "TruncatedTrack",
]
