"""Splice drum pattern format handlers."""

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
from splicedrum.formats.splice.layout import DEFAULT_LAYOUT, SpliceLayout
from splicedrum.formats.splice.binary_parser import SpliceHeader, SpliceParser
from splicedrum.formats.splice.reader import SpliceReader, decode, decode_file

__all__ = [
    "DecodeError",
    "InsufficientHeaderData",
    "InsufficientTrackData",
    "InvalidStepValue",
    "NotRecognizedFormat",
    "OverrunTrackRegion",
    "TruncatedFile",
    "TruncatedTrack",
    "DEFAULT_LAYOUT",
    "SpliceLayout",
    "SpliceHeader",
    "SpliceParser",
    "SpliceReader",
    "decode",
    "decode_file",
]
