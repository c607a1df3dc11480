"""Format handlers."""

from splicedrum.formats.splice import SpliceParser, SpliceReader

__all__ = ["SpliceParser", "SpliceReader"]
