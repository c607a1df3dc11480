"""Test configuration and fixtures."""

import struct

import pytest

KICK_STEPS = [1, 0, 0, 0] * 4

# Tracks of the reference pattern_1 file: (id, name, steps)
PATTERN_1_TRACKS = [
    (0, "kick", [1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0]),
    (1, "snare", [0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0]),
    (2, "clap", [0, 0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0]),
    (3, "hh-open", [0, 0, 1, 0, 0, 0, 1, 0, 1, 0, 1, 0, 0, 0, 1, 0]),
    (4, "hh-close", [1, 0, 0, 0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 1]),
    (5, "cowbell", [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0]),
]

PATTERN_1_TEXT = """Saved with HW Version: 0.808-alpha
Tempo: 120
(0) kick\t|x---|x---|x---|x---|
(1) snare\t|----|x---|----|x---|
(2) clap\t|----|x-x-|----|----|
(3) hh-open\t|--x-|--x-|x-x-|--x-|
(4) hh-close\t|x---|x---|----|x--x|
(5) cowbell\t|----|----|--x-|----|
"""


def encode_track(track_id, name, steps, id_padding=b"\x00\x00\x00"):
    """Encode one track record."""
    name_bytes = name.encode("ascii") if isinstance(name, str) else name
    return bytes([track_id]) + id_padding + bytes([len(name_bytes)]) + name_bytes + bytes(steps)


def build_splice(
    tracks=(),
    hardware_revision=b"0.808-alpha",
    tempo=120.0,
    body_length=None,
    magic=b"SPLICE",
    trailing=b"",
):
    """
    Build a .splice buffer.

    Args:
        tracks: (id, name, steps) tuples or already encoded records (bytes)
        hardware_revision: Raw revision bytes, zero-padded to 32
        tempo: Tempo, stored as little-endian float32
        body_length: Declared body length (default: exact)
        magic: Magic cookie
        trailing: Bytes appended after the body
    """
    records = b"".join(t if isinstance(t, bytes) else encode_track(*t) for t in tracks)
    body = hardware_revision.ljust(32, b"\x00") + struct.pack("<f", tempo) + records
    if body_length is None:
        body_length = len(body)
    return magic + struct.pack(">Q", body_length) + body + trailing


@pytest.fixture
def make_splice():
    """Return the .splice buffer builder."""
    return build_splice


@pytest.fixture
def pattern_1_data():
    """Return raw bytes equivalent to the reference pattern_1 file."""
    return build_splice(PATTERN_1_TRACKS)


@pytest.fixture
def pattern_1_text():
    """Return the expected rendering of pattern_1."""
    return PATTERN_1_TEXT


@pytest.fixture
def kick_data():
    """Return a buffer holding a single "kick" track."""
    return build_splice([(0, "kick", KICK_STEPS)])


@pytest.fixture
def splice_file(tmp_path, pattern_1_data):
    """Return path to a pattern_1 .splice file."""
    path = tmp_path / "pattern_1.splice"
    path.write_bytes(pattern_1_data)
    return path


@pytest.fixture
def bad_magic_file(tmp_path, pattern_1_data):
    """Return path to a file with a wrong magic cookie."""
    path = tmp_path / "bad_magic.splice"
    path.write_bytes(b"SPLICX" + pattern_1_data[6:])
    return path
