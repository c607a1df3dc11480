"""
Errors raised while decoding .splice files.

All decode failures derive from DecodeError, which is a ValueError so callers
that only care about "bad input" can catch that.
"""

from typing import Optional


class DecodeError(ValueError):
    """Base class for .splice decode failures."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset 0x{offset:02X})"
        super().__init__(message)


class NotRecognizedFormat(DecodeError):
    """The buffer does not start with the SPLICE magic cookie."""


class InsufficientHeaderData(DecodeError):
    """The buffer ends inside the fixed header."""


class TruncatedFile(DecodeError):
    """The declared body length is larger than the bytes available."""


class InsufficientTrackData(DecodeError):
    """A track record ends before its id slot and name length byte."""


class TruncatedTrack(DecodeError):
    """A track record ends inside its name or steps."""


class OverrunTrackRegion(DecodeError):
    """Strict mode: the last track record ends past the declared body."""


class InvalidStepValue(ValueError):
    """A step byte has no display symbol."""

    def __init__(self, value: int, index: int):
        self.value = value
        self.index = index
        super().__init__(f"Step {index} has value {value}, expected 0 or 1")
