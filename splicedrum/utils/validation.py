"""
Header checks for splice files that do not need a full decode.
"""

import struct

from splicedrum.formats.splice.layout import DEFAULT_LAYOUT, SpliceLayout


def validate_splice_header(data: bytes, layout: SpliceLayout = DEFAULT_LAYOUT) -> bool:
    """
    Validate the splice magic cookie.

    Args:
        data: File data (at least 6 bytes)

    Returns:
        True if data starts with "SPLICE"
    """
    if len(data) < layout.magic_end:
        return False

    return data[layout.magic_offset : layout.magic_end] == layout.magic


def describe_splice_header(data: bytes, layout: SpliceLayout = DEFAULT_LAYOUT) -> dict:
    """
    Summarize the fixed header of a splice file.

    Never raises on bad input; fields that cannot be read are left out.

    Args:
        data: Raw file contents

    Returns:
        Dictionary with "valid", "size" and whatever header fields are present
    """
    info = {
        "valid": False,
        "size": len(data),
        "raw_header": bytes(data[: layout.track_start]),
    }

    if len(data) >= layout.magic_end:
        info["magic"] = data[layout.magic_offset : layout.magic_end].decode(
            "ascii", errors="replace"
        )
        info["valid"] = validate_splice_header(data, layout)

    if len(data) >= layout.body_length_end:
        body_length = struct.unpack(
            ">Q", data[layout.body_length_offset : layout.body_length_end]
        )[0]
        info["body_length"] = body_length
        info["expected_size"] = layout.body_length_end + body_length
        info["truncated"] = len(data) < info["expected_size"]
        info["track_budget"] = body_length - layout.fixed_fields_size

    if len(data) >= layout.hardware_rev_end:
        raw = data[layout.hardware_rev_offset : layout.hardware_rev_end]
        info["hardware_revision"] = raw.rstrip(b"\x00").decode(
            layout.text_encoding, errors="replace"
        )

    if len(data) >= layout.tempo_end:
        info["tempo"] = struct.unpack("<f", data[layout.tempo_offset : layout.tempo_end])[0]

    return info
