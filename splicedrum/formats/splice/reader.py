"""
Splice file reader.

Reads .splice binary files and converts them to the Pattern model.
"""

from pathlib import Path
from typing import List, Union

from splicedrum.formats.splice.binary_parser import SpliceHeader, SpliceParser
from splicedrum.formats.splice.layout import DEFAULT_LAYOUT, SpliceLayout
from splicedrum.models.pattern import Pattern
from splicedrum.models.track import Track
from splicedrum.utils.validation import describe_splice_header, validate_splice_header


class SpliceReader:
    """
    Reader for .splice drum pattern files.

    Parses .splice binary files and constructs Pattern objects.

    Example:
        pattern = SpliceReader.read("pattern_1.splice")
        print(f"HW: {pattern.hardware_revision}, Tempo: {pattern.tempo:g}")
    """

    def __init__(self, layout: SpliceLayout = DEFAULT_LAYOUT, strict: bool = False):
        self.layout = layout
        self.strict = strict
        self.parser = SpliceParser(layout)
        self._raw_data: bytes = b""

    @classmethod
    def read(cls, filepath: Union[str, Path], strict: bool = False) -> Pattern:
        """
        Read a .splice file and return a Pattern.

        Args:
            filepath: Path to .splice file
            strict: Reject a last record that ends past the declared body

        Returns:
            Parsed Pattern object
        """
        reader = cls(strict=strict)
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> Pattern:
        """
        Parse a .splice file.

        Args:
            filepath: Path to .splice file

        Returns:
            Parsed Pattern object
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            self._raw_data = f.read()

        return self.parse_bytes(self._raw_data)

    def parse_bytes(self, data: bytes) -> Pattern:
        """
        Parse .splice data from bytes.

        Args:
            data: Raw .splice file contents

        Returns:
            Parsed Pattern object

        Raises:
            DecodeError: If the data is not a complete .splice file
        """
        self._raw_data = data

        header, tracks = self.parser.parse_bytes(data, strict=self.strict)

        return self._build_pattern(header, tracks)

    def _build_pattern(self, header: SpliceHeader, tracks: List[Track]) -> Pattern:
        """
        Build Pattern object from parsed data.

        Args:
            header: Parsed header
            tracks: Parsed tracks in file order

        Returns:
            Pattern object
        """
        return Pattern(
            hardware_revision=header.hardware_revision,
            tempo=header.tempo,
            tracks=tuple(tracks),
        )

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file can be read as .splice.

        Only the magic cookie is checked.

        Args:
            filepath: Path to check

        Returns:
            True if file starts with the splice magic
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        with open(filepath, "rb") as f:
            header = f.read(DEFAULT_LAYOUT.magic_end)

        return validate_splice_header(header)

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get basic information about a .splice file without parsing tracks.

        Args:
            filepath: Path to .splice file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        return describe_splice_header(data)


def decode(data: bytes, strict: bool = False) -> Pattern:
    """
    Decode a complete .splice buffer.

    Args:
        data: Raw file contents
        strict: Reject a last record that ends past the declared body

    Returns:
        Decoded Pattern

    Raises:
        DecodeError: If the data is not a complete .splice file
    """
    return SpliceReader(strict=strict).parse_bytes(data)


def decode_file(filepath: Union[str, Path], strict: bool = False) -> Pattern:
    """
    Decode the .splice file at filepath.

    Raises:
        FileNotFoundError: If the file does not exist
        DecodeError: If the file is not a complete .splice file
    """
    return SpliceReader.read(filepath, strict=strict)
