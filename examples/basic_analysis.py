#!/usr/bin/env python3
"""
Example: Basic pattern analysis

Shows how to decode a .splice file and walk its tracks.

Usage:
    python basic_analysis.py pattern_1.splice
"""

import sys

sys.path.insert(0, "..")

from splicedrum import DecodeError, SpliceReader
from splicedrum.utils.formatting import format_tempo


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)

    filepath = sys.argv[1]

    info = SpliceReader.get_file_info(filepath)
    print(f"File Size: {info['size']} bytes")
    print(f"Declared Size: {info.get('expected_size', 'N/A')}")
    print()

    try:
        pattern = SpliceReader.read(filepath)
    except DecodeError as e:
        print(f"Cannot decode {filepath}: {e}")
        sys.exit(1)

    print(f"HW Version: {pattern.hardware_revision}")
    print(f"Tempo: {format_tempo(pattern.tempo)} BPM")
    print()

    print("Tracks:")
    for track in pattern.tracks:
        print(f"  ({track.id}) {track.name}: hits at steps {track.hits}")
    print()

    # Standard rendering
    print(pattern, end="")


if __name__ == "__main__":
    main()
