"""
Splice binary file parser.

Parses the binary structure of .splice drum pattern files. See
splicedrum.formats.splice.layout for the byte layout.

There is no track count in the file. The body length field counts every
byte after itself, so the bytes left for track records are the body length
minus the hardware revision and tempo fields, and records are read until
that budget is used up.
"""

import logging
import struct
from dataclasses import dataclass
from typing import List, Optional, Tuple

from splicedrum.formats.splice.errors import (
    InsufficientHeaderData,
    InsufficientTrackData,
    NotRecognizedFormat,
    OverrunTrackRegion,
    TruncatedFile,
    TruncatedTrack,
)
from splicedrum.formats.splice.layout import DEFAULT_LAYOUT, SpliceLayout
from splicedrum.models.track import Track
from splicedrum.utils.formatting import format_tempo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpliceHeader:
    """
    Splice file header.
    """

    magic: bytes  # "SPLICE"
    body_length: int  # Bytes after the length field
    hardware_revision: str
    tempo: float
    track_budget: int  # Bytes reserved for track records


class SpliceParser:
    """
    Parser for .splice binary files.

    A parser keeps the data of the last parse for inspection; use one parser
    per buffer when decoding concurrently.

    Example:
        parser = SpliceParser()
        header, tracks = parser.parse_bytes(data)
    """

    def __init__(self, layout: SpliceLayout = DEFAULT_LAYOUT):
        self.layout = layout
        self.data: bytes = b""
        self.header: Optional[SpliceHeader] = None
        self.tracks: List[Track] = []
        self.records: List[Tuple[int, int]] = []  # (offset, size) per track
        self.bytes_consumed: int = 0

    def parse_file(self, filepath: str, strict: bool = False) -> Tuple[SpliceHeader, List[Track]]:
        """
        Parse a .splice file.

        Args:
            filepath: Path to .splice file
            strict: Reject a last record that ends past the declared body

        Returns:
            Tuple of (header, tracks)
        """
        with open(filepath, "rb") as f:
            data = f.read()

        return self.parse_bytes(data, strict=strict)

    def parse_bytes(self, data: bytes, strict: bool = False) -> Tuple[SpliceHeader, List[Track]]:
        """
        Parse .splice data from bytes.

        Args:
            data: Raw file contents
            strict: Reject a last record that ends past the declared body

        Returns:
            Tuple of (header, tracks)

        Raises:
            DecodeError: If the data is not a complete .splice file
        """
        self.data = bytes(data)
        self.header = None
        self.tracks = []
        self.records = []
        self.bytes_consumed = 0

        self.validate_magic(self.data)
        body_length = self.read_body_length(self.data)
        budget = self.track_budget(body_length)

        self.header = SpliceHeader(
            magic=self.data[self.layout.magic_offset : self.layout.magic_end],
            body_length=body_length,
            hardware_revision=self.read_hardware_revision(self.data),
            tempo=self.read_tempo(self.data),
            track_budget=budget,
        )
        logger.debug(
            "Header: body length %d, track budget %d, hw %r, tempo %g",
            body_length,
            budget,
            self.header.hardware_revision,
            self.header.tempo,
        )

        self.tracks = self._parse_tracks(budget, strict)

        return self.header, list(self.tracks)

    def validate_magic(self, data: bytes) -> None:
        """
        Check that data starts with the magic cookie.

        Raises:
            NotRecognizedFormat: If the magic is missing or wrong
        """
        start, end = self.layout.magic_offset, self.layout.magic_end
        if len(data) < end:
            raise NotRecognizedFormat(
                f"Not a splice file: {len(data)} bytes is too short for the magic cookie"
            )

        if data[start:end] != self.layout.magic:
            raise NotRecognizedFormat(
                f"Not a splice file: expected {self.layout.magic!r}, got {data[start:end]!r}",
                offset=start,
            )

    def read_body_length(self, data: bytes) -> int:
        """
        Read the big-endian body length and check the data holds that many bytes.

        Returns:
            Number of bytes following the length field

        Raises:
            InsufficientHeaderData: If the length field is cut short
            TruncatedFile: If fewer bytes follow than the length declares
        """
        start, end = self.layout.body_length_offset, self.layout.body_length_end
        if len(data) < end:
            raise InsufficientHeaderData(
                f"Data not long enough to provide body length ({len(data)} bytes, need {end})",
                offset=start,
            )

        body_length = struct.unpack(">Q", data[start:end])[0]

        available = len(data) - end
        if available < body_length:
            raise TruncatedFile(
                f"Body length is {body_length} bytes but only {available} follow",
                offset=end,
            )

        return body_length

    def track_budget(self, body_length: int) -> int:
        """
        Bytes available to track records for a given body length.

        Raises:
            InsufficientHeaderData: If the body is too short for the fixed fields
        """
        fixed = self.layout.fixed_fields_size
        if body_length < fixed:
            raise InsufficientHeaderData(
                f"Body length {body_length} is too short for hardware revision and tempo "
                f"({fixed} bytes)",
                offset=self.layout.body_length_offset,
            )
        return body_length - fixed

    def read_hardware_revision(self, data: bytes) -> str:
        """
        Read the hardware revision, dropping the trailing zero padding.

        Raises:
            InsufficientHeaderData: If the field is cut short
        """
        start, end = self.layout.hardware_rev_offset, self.layout.hardware_rev_end
        if len(data) < end:
            raise InsufficientHeaderData(
                "Data not long enough to provide hardware revision", offset=start
            )

        # Only trailing padding; leading or inner zero bytes are kept
        raw = data[start:end].rstrip(b"\x00")
        return raw.decode(self.layout.text_encoding, errors="replace")

    def read_tempo(self, data: bytes) -> float:
        """
        Read the little-endian float32 tempo.

        Raises:
            InsufficientHeaderData: If the field is cut short
        """
        start, end = self.layout.tempo_offset, self.layout.tempo_end
        if len(data) < end:
            raise InsufficientHeaderData("Data not long enough to provide tempo", offset=start)

        return struct.unpack("<f", data[start:end])[0]

    def parse_track(self, data: bytes, offset: int) -> Tuple[Track, int]:
        """
        Parse one track record.

        Args:
            data: Buffer holding the record
            offset: Offset of the record start within data

        Returns:
            Tuple of (track, bytes consumed)

        Raises:
            InsufficientTrackData: If the id slot or name length is cut short
            TruncatedTrack: If the name or steps are cut short
        """
        layout = self.layout
        available = len(data) - offset
        if available < layout.track_prefix_size:
            raise InsufficientTrackData(
                f"Data not big enough to hold track info ({available} bytes, "
                f"need {layout.track_prefix_size})",
                offset=offset,
            )

        # Only the first byte of the id slot is used
        track_id = data[offset]
        name_length = data[offset + layout.track_id_size]

        name_start = offset + layout.track_prefix_size
        name_end = name_start + name_length
        if name_end > len(data):
            raise TruncatedTrack(
                f"Track {track_id} name needs {name_length} bytes, "
                f"only {len(data) - name_start} left",
                offset=name_start,
            )
        name = data[name_start:name_end].decode(layout.text_encoding, errors="replace")

        steps_end = name_end + layout.step_count
        steps = data[name_end:steps_end]
        if len(steps) != layout.step_count:
            raise TruncatedTrack(
                f"Track {track_id} ({name!r}) has {len(steps)} step bytes, "
                f"need {layout.step_count}",
                offset=name_end,
            )

        return Track(id=track_id, name=name, steps=tuple(steps)), steps_end - offset

    def _parse_tracks(self, budget: int, strict: bool) -> List[Track]:
        """Read track records until the budget is used up."""
        tracks = []
        cursor = self.layout.track_start
        consumed = 0

        while consumed < budget:
            track, size = self.parse_track(self.data, cursor)
            logger.debug(
                "Track %d %r at 0x%02X (%d bytes, hits %s)",
                track.id,
                track.name,
                cursor,
                size,
                track.hits,
            )
            self.records.append((cursor, size))
            tracks.append(track)
            cursor += size
            consumed += size

        self.bytes_consumed = consumed

        if consumed > budget:
            overrun = consumed - budget
            if strict:
                raise OverrunTrackRegion(
                    f"Last track ends {overrun} bytes past the declared body",
                    offset=self.layout.track_start + budget,
                )
            logger.warning("Last track ends %d bytes past the declared body", overrun)

        return tracks

    def dump_structure(self) -> str:
        """
        Generate a text dump of file structure for debugging.

        Returns:
            Formatted structure description
        """
        lines = ["Splice File Structure:"]
        lines.append(f"  File size: {len(self.data)} bytes")

        if self.header:
            lines.append(f"  Body length: {self.header.body_length}")
            lines.append(f"  Track budget: {self.header.track_budget}")
            lines.append(f"  Bytes consumed: {self.bytes_consumed}")
            lines.append(f"  Hardware revision: {self.header.hardware_revision}")
            lines.append(f"  Tempo: {format_tempo(self.header.tempo)}")

        lines.append("")
        lines.append("  Tracks:")
        for (offset, size), track in zip(self.records, self.tracks):
            lines.append(
                f"    ({track.id:3d}) {track.name:20} @ 0x{offset:03X}: {size:4d} bytes"
            )

        return "\n".join(lines)


def parse_splice_file(filepath: str, strict: bool = False) -> Tuple[SpliceHeader, List[Track]]:
    """
    Convenience function to parse a .splice file.

    Args:
        filepath: Path to .splice file
        strict: Reject a last record that ends past the declared body

    Returns:
        Tuple of (header, tracks)
    """
    parser = SpliceParser()
    return parser.parse_file(filepath, strict=strict)
