"""
Splice file layout.

Every offset and size used by the decoder lives here, in one validated value.

Splice File Structure:
    Offset  Size    Description
    0x00    6       Magic cookie "SPLICE"
    0x06    8       Body length (uint64, big-endian), bytes after this field
    0x0E    32      Hardware revision (text, zero-padded)
    0x2E    4       Tempo (float32, little-endian)
    0x32    ...     Track records until the body length is used up

Track record (offsets relative to record start):
    0       4       Track id slot (only the first byte is used)
    4       1       Name length L
    5       L       Name
    5+L     16      Steps (one byte per step, 0 or 1)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SpliceLayout:
    """
    Offsets and sizes of a .splice file.

    Header fields must be contiguous and start at offset 0; this is checked
    on construction so a bad layout fails before any data is read.
    """

    magic: bytes = b"SPLICE"
    magic_offset: int = 0
    magic_size: int = 6
    body_length_offset: int = 6
    body_length_size: int = 8
    hardware_rev_offset: int = 14
    hardware_rev_size: int = 32
    tempo_offset: int = 46
    tempo_size: int = 4

    # Track record, relative to the record start
    track_id_size: int = 4
    track_name_length_size: int = 1
    step_count: int = 16

    # One character per byte
    text_encoding: str = "latin-1"

    def __post_init__(self) -> None:
        if len(self.magic) != self.magic_size:
            raise ValueError(
                f"Magic {self.magic!r} does not fit its slot of {self.magic_size} bytes"
            )
        if self.magic_offset != 0:
            raise ValueError(f"Magic must start at offset 0, got {self.magic_offset}")

        fields = [
            ("magic", self.magic_offset, self.magic_size),
            ("body_length", self.body_length_offset, self.body_length_size),
            ("hardware_rev", self.hardware_rev_offset, self.hardware_rev_size),
            ("tempo", self.tempo_offset, self.tempo_size),
        ]
        for (name, offset, size), (next_name, next_offset, _) in zip(fields, fields[1:]):
            if size <= 0:
                raise ValueError(f"Field {name} must have a positive size, got {size}")
            if offset + size != next_offset:
                raise ValueError(
                    f"Field {next_name} at {next_offset} does not follow {name} "
                    f"(expected {offset + size})"
                )

        if self.tempo_size != 4:
            raise ValueError(f"Tempo is a float32, size must be 4, got {self.tempo_size}")
        if self.body_length_size != 8:
            raise ValueError(
                f"Body length is a uint64, size must be 8, got {self.body_length_size}"
            )
        if self.track_id_size < 1:
            raise ValueError(f"Track id slot needs at least 1 byte, got {self.track_id_size}")
        if self.track_name_length_size != 1:
            raise ValueError(
                f"Name length is a single byte, got size {self.track_name_length_size}"
            )
        if self.step_count <= 0:
            raise ValueError(f"Step count must be positive, got {self.step_count}")

    @property
    def magic_end(self) -> int:
        return self.magic_offset + self.magic_size

    @property
    def body_length_end(self) -> int:
        return self.body_length_offset + self.body_length_size

    @property
    def hardware_rev_end(self) -> int:
        return self.hardware_rev_offset + self.hardware_rev_size

    @property
    def tempo_end(self) -> int:
        return self.tempo_offset + self.tempo_size

    @property
    def track_start(self) -> int:
        """Absolute offset of the first track record."""
        return self.tempo_end

    @property
    def fixed_fields_size(self) -> int:
        """Bytes counted by the body length that are not track records."""
        return self.track_start - self.body_length_end

    @property
    def track_prefix_size(self) -> int:
        """Id slot plus name length byte."""
        return self.track_id_size + self.track_name_length_size

    @property
    def min_track_size(self) -> int:
        """Size of a record with an empty name."""
        return self.track_prefix_size + self.step_count

    def track_size(self, name_length: int) -> int:
        """Bytes occupied by a record whose name is name_length bytes."""
        return self.track_prefix_size + name_length + self.step_count


DEFAULT_LAYOUT = SpliceLayout()
