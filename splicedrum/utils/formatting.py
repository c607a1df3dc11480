"""
Text rendering of decoded patterns.

Output looks like:

    Saved with HW Version: 0.808-alpha
    Tempo: 120
    (0) kick	|x---|x---|x---|x---|
    (1) snare	|----|x---|----|x---|
"""

import math
import struct
from typing import Sequence

from splicedrum.formats.splice.errors import InvalidStepValue

# Indexed by step byte
STEP_SYMBOLS = ("-", "x")

BAR_LENGTH = 4


def format_steps(steps: Sequence[int], symbols: Sequence[str] = STEP_SYMBOLS) -> str:
    """
    Render step bytes as a grid like "|x---|x---|x---|x---|".

    Raises:
        InvalidStepValue: If a step byte has no symbol
    """
    parts = []
    for index, step in enumerate(steps):
        if index % BAR_LENGTH == 0:
            parts.append("|")
        if not 0 <= step < len(symbols):
            raise InvalidStepValue(step, index)
        parts.append(symbols[step])
    parts.append("|")
    return "".join(parts)


def format_track(track) -> str:
    """Render one track line, without the newline."""
    return f"({track.id}) {track.name}\t{format_steps(track.steps)}"


def format_tempo(tempo: float) -> str:
    """
    Format tempo as the shortest number that reads back as the same float32.

    120.0 gives "120", the float32 stored for 98.4 gives "98.4" and 120.5625
    keeps all its digits. Values that are not float32 (NaN, infinities,
    plain doubles) fall back to general formatting.
    """
    if not math.isfinite(tempo):
        return f"{tempo:g}"
    try:
        stored = struct.unpack("<f", struct.pack("<f", tempo))[0]
    except OverflowError:
        return f"{tempo:g}"
    if stored != tempo:
        return f"{tempo:g}"

    for precision in range(1, 10):
        text = f"{tempo:.{precision}g}"
        if struct.unpack("<f", struct.pack("<f", float(text)))[0] == tempo:
            return text
    return repr(tempo)


def format_pattern(pattern) -> str:
    """
    Render a pattern as text.

    Args:
        pattern: Decoded Pattern

    Returns:
        Header lines followed by one line per track, each ending in a newline
    """
    lines = [
        f"Saved with HW Version: {pattern.hardware_revision}",
        f"Tempo: {format_tempo(pattern.tempo)}",
    ]
    lines.extend(format_track(track) for track in pattern.tracks)
    return "\n".join(lines) + "\n"
