"""Tests for the .splice binary parser and reader."""

import math
import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from splicedrum import decode, decode_file
from splicedrum.formats.splice.binary_parser import SpliceParser
from splicedrum.formats.splice.errors import (
    DecodeError,
    InsufficientHeaderData,
    InsufficientTrackData,
    NotRecognizedFormat,
    OverrunTrackRegion,
    TruncatedFile,
    TruncatedTrack,
)
from splicedrum.formats.splice.reader import SpliceReader

from conftest import KICK_STEPS, PATTERN_1_TRACKS, encode_track


class TestHeaderValidation:
    """Magic cookie and body length checks."""

    @pytest.mark.parametrize(
        "magic", [b"SPLICX", b"splice", b"\x00" * 6, b"ECILPS", b"SPLIC "]
    )
    def test_wrong_magic_rejected(self, magic, pattern_1_data):
        """Wrong first 6 bytes fail regardless of the rest of the file."""
        with pytest.raises(NotRecognizedFormat):
            decode(magic + pattern_1_data[6:])

    @pytest.mark.parametrize("data", [b"", b"S", b"SPLIC"])
    def test_shorter_than_magic_rejected(self, data):
        with pytest.raises(NotRecognizedFormat):
            decode(data)

    @pytest.mark.parametrize("extra", [0, 1, 7])
    def test_missing_body_length(self, extra):
        """Buffers shorter than 14 bytes with a valid magic lack the length field."""
        with pytest.raises(InsufficientHeaderData):
            decode(b"SPLICE" + b"\x00" * extra)

    def test_body_length_is_big_endian(self, make_splice):
        parser = SpliceParser()
        data = make_splice([(0, "kick", KICK_STEPS)])
        body_length = parser.read_body_length(data)

        assert body_length == 32 + 4 + 4 + 1 + 4 + 16
        assert data[6:14] == b"\x00" * 7 + bytes([body_length])

    def test_declared_length_exceeds_data(self, make_splice):
        data = make_splice([(0, "kick", KICK_STEPS)], body_length=1000)

        with pytest.raises(TruncatedFile) as excinfo:
            decode(data)

        assert excinfo.value.offset == 14

    def test_declared_length_exceeds_data_by_one(self, kick_data):
        data = kick_data[:-1]

        with pytest.raises(TruncatedFile):
            decode(data)

    def test_huge_body_length(self, make_splice):
        data = make_splice(body_length=2**64 - 1)

        with pytest.raises(TruncatedFile):
            decode(data)

    def test_body_too_short_for_fixed_fields(self, make_splice):
        """A body shorter than hardware revision + tempo cannot hold the header."""
        data = make_splice(body_length=35)

        with pytest.raises(InsufficientHeaderData):
            decode(data)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            decode(b"not a splice file")

        assert issubclass(TruncatedTrack, DecodeError)


class TestFixedFields:
    """Hardware revision and tempo."""

    def test_hardware_revision_padding_stripped(self, make_splice):
        pattern = decode(make_splice(hardware_revision=b"0.808-alpha"))

        assert pattern.hardware_revision == "0.808-alpha"
        assert "\x00" not in pattern.hardware_revision

    def test_hardware_revision_full_width(self, make_splice):
        revision = b"R" * 32
        pattern = decode(make_splice(hardware_revision=revision))

        assert pattern.hardware_revision == "R" * 32

    def test_hardware_revision_keeps_whitespace_and_leading_zeros(self, make_splice):
        pattern = decode(make_splice(hardware_revision=b"\x00v1 "))

        assert pattern.hardware_revision == "\x00v1 "

    def test_empty_hardware_revision(self, make_splice):
        pattern = decode(make_splice(hardware_revision=b""))

        assert pattern.hardware_revision == ""

    def test_hardware_revision_high_bytes_kept(self, make_splice):
        pattern = decode(make_splice(hardware_revision=b"rev\xe9\xff"))

        assert pattern.hardware_revision == "rev\xe9\xff"
        assert pattern.hardware_revision.encode("latin-1") == b"rev\xe9\xff"

    @pytest.mark.parametrize(
        "revision", [b"0.808-alpha", b"0.909", b"x" * 31, b"a-b-c", b"1"]
    )
    def test_no_null_in_revision(self, make_splice, revision):
        pattern = decode(make_splice(hardware_revision=revision))

        assert "\x00" not in pattern.hardware_revision

    @pytest.mark.parametrize("tempo", [120.0, 98.4, 999.0, 0.5])
    def test_tempo_little_endian_float(self, make_splice, tempo):
        pattern = decode(make_splice(tempo=tempo))

        assert pattern.tempo == struct.unpack("<f", struct.pack("<f", tempo))[0]

    def test_tempo_nan_is_stored(self, make_splice):
        pattern = decode(make_splice(tempo=float("nan")))

        assert math.isnan(pattern.tempo)

    def test_tempo_rendered_with_float32_digits(self, make_splice):
        pattern = decode(make_splice(tempo=120.5625))

        assert "Tempo: 120.5625\n" in str(pattern)


class TestTrackParsing:
    """Single record parsing."""

    def test_parse_single_record(self):
        parser = SpliceParser()
        record = encode_track(7, "kick", KICK_STEPS)

        track, consumed = parser.parse_track(record, 0)

        assert track.id == 7
        assert track.name == "kick"
        assert track.steps == tuple(KICK_STEPS)
        assert consumed == 4 + 1 + 4 + 16

    def test_id_padding_ignored(self):
        parser = SpliceParser()
        record = encode_track(40, "SubKick", KICK_STEPS, id_padding=b"\xff\xee\xdd")

        track, consumed = parser.parse_track(record, 0)

        assert track.id == 40
        assert track.name == "SubKick"
        assert consumed == 28

    def test_record_at_offset(self):
        parser = SpliceParser()
        data = b"\xaa" * 10 + encode_track(3, "hh", [0] * 16)

        track, consumed = parser.parse_track(data, 10)

        assert track.id == 3
        assert track.name == "hh"
        assert consumed == 23

    def test_empty_name(self):
        parser = SpliceParser()
        track, consumed = parser.parse_track(encode_track(1, "", [1] * 16), 0)

        assert track.name == ""
        assert consumed == 21

    def test_max_name_length(self):
        parser = SpliceParser()
        name = "n" * 255
        track, consumed = parser.parse_track(encode_track(1, name, [0] * 16), 0)

        assert track.name == name
        assert consumed == 4 + 1 + 255 + 16

    def test_name_not_stripped(self):
        parser = SpliceParser()
        track, _ = parser.parse_track(encode_track(1, b"tom \x00", [0] * 16), 0)

        assert track.name == "tom \x00"

    def test_name_high_bytes_kept(self):
        parser = SpliceParser()
        track, consumed = parser.parse_track(encode_track(2, b"caf\xe9", [0] * 16), 0)

        assert track.name == "caf\xe9"
        assert track.name.encode("latin-1") == b"caf\xe9"
        assert consumed == track.record_size == 25

    def test_raw_step_values_kept(self):
        """The decoder stores step bytes as-is; rendering is where 2+ fails."""
        parser = SpliceParser()
        steps = [0, 1, 2, 255] * 4
        track, _ = parser.parse_track(encode_track(1, "odd", steps), 0)

        assert track.steps == tuple(steps)

    @pytest.mark.parametrize("size", [0, 1, 4])
    def test_prefix_truncated(self, size):
        parser = SpliceParser()
        record = encode_track(1, "kick", KICK_STEPS)[:size]

        with pytest.raises(InsufficientTrackData):
            parser.parse_track(record, 0)

    def test_name_truncated(self):
        parser = SpliceParser()
        record = encode_track(1, "kick", KICK_STEPS)[:7]

        with pytest.raises(TruncatedTrack):
            parser.parse_track(record, 0)

    def test_steps_truncated(self):
        parser = SpliceParser()
        record = encode_track(1, "kick", KICK_STEPS)[:-1]

        with pytest.raises(TruncatedTrack) as excinfo:
            parser.parse_track(record, 0)

        assert excinfo.value.offset == 9


class TestTrackRegion:
    """Budget-driven track loop."""

    def test_no_tracks(self, make_splice):
        pattern = decode(make_splice())

        assert pattern.tracks == ()

    def test_all_tracks_decoded_in_order(self, pattern_1_data):
        pattern = decode(pattern_1_data)

        assert [t.name for t in pattern.tracks] == [t[1] for t in PATTERN_1_TRACKS]
        assert [t.id for t in pattern.tracks] == [t[0] for t in PATTERN_1_TRACKS]

    def test_every_track_has_16_steps(self, pattern_1_data):
        pattern = decode(pattern_1_data)

        for track in pattern.tracks:
            assert len(track.steps) == 16

    def test_consumed_equals_budget(self, pattern_1_data):
        parser = SpliceParser()
        header, tracks = parser.parse_bytes(pattern_1_data)

        assert parser.bytes_consumed == header.track_budget
        assert header.track_budget == header.body_length - 36
        assert header.track_budget == sum(t.record_size for t in tracks)

    def test_trailing_data_ignored(self, make_splice):
        """Bytes after the declared body are not decoded as tracks."""
        data = make_splice(
            [(0, "kick", KICK_STEPS)],
            trailing=b"This is junk that should be ignored",
        )

        pattern = decode(data)

        assert pattern.track_count == 1
        assert pattern.tracks[0].name == "kick"

    def test_track_cut_by_body_end(self, make_splice):
        """The declared body ends inside the id slot of a second track."""
        record = encode_track(0, "kick", KICK_STEPS)
        data = make_splice([record, b"\x01\x00"])

        with pytest.raises(InsufficientTrackData):
            decode(data)

    def test_truncated_second_track(self, make_splice):
        records = encode_track(0, "kick", KICK_STEPS) + encode_track(1, "snare", [0] * 16)[:-4]
        data = make_splice([records])

        with pytest.raises(TruncatedTrack):
            decode(data)

    def test_overrun_lenient(self, make_splice):
        """The last record may end past the budget when the bytes exist."""
        record = encode_track(0, "kick", KICK_STEPS)
        data = make_splice([record], body_length=36 + len(record) - 5)

        parser = SpliceParser()
        header, tracks = parser.parse_bytes(data)

        assert len(tracks) == 1
        assert tracks[0].steps == tuple(KICK_STEPS)
        assert parser.bytes_consumed == header.track_budget + 5

    def test_overrun_strict(self, make_splice):
        record = encode_track(0, "kick", KICK_STEPS)
        data = make_splice([record], body_length=36 + len(record) - 5)

        with pytest.raises(OverrunTrackRegion):
            decode(data, strict=True)

    def test_strict_accepts_exact_budget(self, pattern_1_data):
        pattern = decode(pattern_1_data, strict=True)

        assert pattern.track_count == 6

    def test_failure_returns_no_pattern(self, make_splice):
        """A failing record aborts the whole decode."""
        records = encode_track(0, "kick", KICK_STEPS) + b"\x01\x00\x00\x00\x09ab"
        data = make_splice([records])

        reader = SpliceReader()
        with pytest.raises(TruncatedTrack):
            reader.parse_bytes(data)


class TestScenarios:
    """End-to-end decode scenarios."""

    def test_single_kick_track(self, kick_data):
        pattern = decode(kick_data)

        assert pattern.track_count == 1
        track = pattern.tracks[0]
        assert track.name == "kick"
        assert track.steps == (1, 0, 0, 0) * 4
        assert str(pattern).splitlines()[-1].endswith("|x---|x---|x---|x---|")

    def test_truncated_file(self, kick_data):
        data = kick_data[:6] + struct.pack(">Q", len(kick_data)) + kick_data[14:]

        with pytest.raises(TruncatedFile):
            decode(data)

    def test_wrong_magic_well_formed_body(self, kick_data):
        with pytest.raises(NotRecognizedFormat):
            decode(b"SPLICF" + kick_data[6:])

    def test_back_to_back_tracks(self, make_splice):
        data = make_splice([(0, "kick", KICK_STEPS), (1, "snare", [0, 0, 0, 0, 1, 0, 0, 0] * 2)])

        parser = SpliceParser()
        _, tracks = parser.parse_bytes(data)

        first_offset, first_size = parser.records[0]
        second_offset, _ = parser.records[1]
        assert first_offset == 50
        assert first_size == 4 + 1 + len("kick") + 16
        assert second_offset == first_offset + first_size
        assert tracks[1].name == "snare"

    def test_pattern_1_rendering(self, pattern_1_data, pattern_1_text):
        assert str(decode(pattern_1_data)) == pattern_1_text


class TestSpliceParser:
    """Parser state and debugging output."""

    def test_parse_header(self, pattern_1_data):
        parser = SpliceParser()
        header, tracks = parser.parse_bytes(pattern_1_data)

        assert header.magic == b"SPLICE"
        assert header.hardware_revision == "0.808-alpha"
        assert header.tempo == 120.0
        assert len(tracks) == 6

    def test_parser_reset_between_calls(self, pattern_1_data, kick_data):
        parser = SpliceParser()
        parser.parse_bytes(pattern_1_data)
        _, tracks = parser.parse_bytes(kick_data)

        assert len(tracks) == 1
        assert len(parser.records) == 1

    def test_parse_file(self, splice_file):
        parser = SpliceParser()
        header, tracks = parser.parse_file(str(splice_file))

        assert len(tracks) == 6

    def test_dump_structure(self, pattern_1_data):
        parser = SpliceParser()
        parser.parse_bytes(pattern_1_data)

        dump = parser.dump_structure()

        assert "Splice File Structure" in dump
        assert "Track budget:" in dump
        assert "cowbell" in dump


class TestSpliceReader:
    """Test cases for the Pattern reader."""

    def test_read_file(self, splice_file, pattern_1_text):
        pattern = SpliceReader.read(splice_file)

        assert str(pattern) == pattern_1_text

    def test_decode_file(self, splice_file):
        pattern = decode_file(str(splice_file))

        assert pattern.track_count == 6

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SpliceReader.read(tmp_path / "missing.splice")

    def test_can_read_check(self, splice_file, bad_magic_file, tmp_path):
        assert SpliceReader.can_read(splice_file) is True
        assert SpliceReader.can_read(bad_magic_file) is False
        assert SpliceReader.can_read(tmp_path / "missing.splice") is False

    def test_get_file_info(self, splice_file):
        info = SpliceReader.get_file_info(splice_file)

        assert info["valid"] is True
        assert info["magic"] == "SPLICE"
        assert info["hardware_revision"] == "0.808-alpha"
        assert info["tempo"] == 120.0
        assert info["truncated"] is False
        assert info["expected_size"] == info["size"]

    def test_get_file_info_truncated(self, tmp_path, kick_data):
        path = tmp_path / "cut.splice"
        path.write_bytes(kick_data[:20])

        info = SpliceReader.get_file_info(path)

        assert info["valid"] is True
        assert info["truncated"] is True
        assert "tempo" not in info
