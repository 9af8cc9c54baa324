"""Tests for the A-Station to V-Station converter."""

import io
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import build_message
from stationconv.converters.a_to_v_station import (
    AStationToVStationConverter,
    convert_a_station_to_v_station,
)
from stationconv.formats.station.sysex_parser import DumpType
from stationconv.utils.validation import (
    AlreadyConverted,
    BadDeviceType,
    BadManufacturerId,
    MessageTooLong,
    MessageTooShort,
    NotSysexFile,
    TruncatedMessage,
    UnknownDeviceFamily,
    WriteError,
)


class FailingSink:
    """Sink that accepts a number of writes and then raises."""

    def __init__(self, accept=0):
        self.accept = accept
        self.chunks = []

    def write(self, data):
        if len(self.chunks) >= self.accept:
            raise OSError("disk full")
        self.chunks.append(bytes(data))
        return len(data)


class ShortSink:
    """Sink that reports a partial write."""

    def write(self, data):
        return len(data) - 1


def run(data, **kwargs):
    converter = AStationToVStationConverter(**kwargs)
    sink = io.BytesIO()
    converter.process_stream(io.BytesIO(data), sink)
    return sink.getvalue(), converter.report


class TestConversion:
    """Test cases for successful conversion."""

    def test_only_family_byte_changes(self, program_dump):
        out, report = run(program_dump)

        assert len(out) == len(program_dump)
        assert out[5] == 0x41
        assert out[:5] == program_dump[:5]
        assert out[6:] == program_dump[6:]
        assert report.bytes_written == len(program_dump)

    def test_program_explicit_bank_decode(self, program_dump):
        _, report = run(program_dump)

        entry = report.messages[0]
        assert entry.dump_type == DumpType.PROGRAM
        assert entry.bank == 3
        assert entry.programs == [7]
        assert entry.describe() == "PROGRAM BANK=3, PROGRAM NUMBER=7"

    def test_program_current_bank_decode(self, make_message):
        _, report = run(make_message(msg_type=0x01, bank_mode=0x00, bank=9, program=42))

        entry = report.messages[0]
        assert entry.bank is None
        assert entry.describe() == "Current selected bank, PROGRAM NUMBER=42"

    def test_program_unknown_bank_mode_has_no_notice(self, make_message):
        out, report = run(make_message(msg_type=0x01, bank_mode=0x02))

        assert report.messages[0].describe() is None
        assert out[5] == 0x41

    def test_program_pair_decode(self, pair_dump):
        _, report = run(pair_dump)

        entry = report.messages[0]
        assert entry.programs == [10, 11]
        assert entry.describe() == "PROGRAM BANK=2, PROGRAM NUMBER=10 and 11"

    @pytest.mark.parametrize("bank_mode", [0x00, 0x01, 0x05])
    def test_program_pair_ignores_bank_mode(self, make_message, bank_mode):
        _, report = run(make_message(msg_type=0x02, bank_mode=bank_mode, bank=1, program=4, programs=2))

        assert report.messages[0].describe() == "PROGRAM BANK=1, PROGRAM NUMBER=4 and 5"

    def test_current_sound_decode(self, current_dump):
        _, report = run(current_dump)

        assert report.messages[0].describe() == "Current sound (edit buffer) dump"

    def test_unknown_type_passes_silently(self, make_message):
        data = make_message(msg_type=0x7E)
        out, report = run(data)

        assert report.messages[0].dump_type is None
        assert report.messages[0].describe() is None
        assert out[6:] == data[6:]

    def test_multi_message_order(self, program_dump, pair_dump, current_dump):
        data = program_dump + pair_dump + current_dump
        out, report = run(data)

        assert len(report.messages) == 3
        expected = bytearray(data)
        expected[5] = 0x41
        expected[len(program_dump) + 5] = 0x41
        expected[len(program_dump) + len(pair_dump) + 5] = 0x41
        assert out == bytes(expected)
        assert [m.offset for m in report.messages] == [0, len(program_dump), len(program_dump) + len(pair_dump)]

    def test_on_message_callback(self, program_dump, pair_dump):
        seen = []
        run(program_dump + pair_dump, on_message=seen.append)

        assert [m.index for m in seen] == [0, 1]
        assert seen[1].programs == [10, 11]

    def test_resync_discards_partial_message(self, program_dump):
        fragment = bytes([0xF0, 0x00, 0x20, 0x29, 0x01, 0x40, 0x11, 0x22])
        out, report = run(fragment + program_dump)

        assert len(out) == len(program_dump)
        assert 0x11 not in out[:8]
        assert out[6:] == program_dump[6:]
        assert report.discarded_fragments == 1

    def test_bytes_between_messages_ignored(self, program_dump):
        out, report = run(program_dump + bytes([0x00, 0x12]) + program_dump)

        assert len(report.messages) == 2
        assert len(out) == 2 * len(program_dump)

    def test_small_read_chunks(self, program_dump, pair_dump):
        converter = AStationToVStationConverter()
        converter.READ_CHUNK = 3
        sink = io.BytesIO()
        converter.process_stream(io.BytesIO(program_dump + pair_dump), sink)

        assert len(converter.report.messages) == 2
        assert len(sink.getvalue()) == len(program_dump) + len(pair_dump)

    def test_empty_input(self):
        out, report = run(b"")

        assert out == b""
        assert report.message_count == 0


class TestValidation:
    """Test cases for header validation."""

    def test_not_sysex(self, program_dump):
        converter = AStationToVStationConverter()
        sink = io.BytesIO()

        with pytest.raises(NotSysexFile) as exc_info:
            converter.process_stream(io.BytesIO(b"MThd" + program_dump), sink)

        assert exc_info.value.first_byte == ord("M")
        assert sink.getvalue() == b""

    def test_already_converted(self, make_message):
        converter = AStationToVStationConverter()
        sink = io.BytesIO()

        with pytest.raises(AlreadyConverted):
            converter.process_stream(io.BytesIO(make_message(family=0x41)), sink)

        assert sink.getvalue() == b""

    def test_converted_output_is_rejected(self, program_dump):
        out, _ = run(program_dump)

        with pytest.raises(AlreadyConverted):
            run(out)

    def test_manufacturer_checked_first(self, make_message):
        data = make_message(manufacturer=(0x00, 0x21, 0x29), device_type=0x05, family=0x33)

        with pytest.raises(BadManufacturerId) as exc_info:
            run(data)

        assert exc_info.value.offset == 2
        assert exc_info.value.actual == 0x21
        assert exc_info.value.expected == 0x20

    def test_bad_device_type(self, make_message):
        with pytest.raises(BadDeviceType) as exc_info:
            run(make_message(device_type=0x02, family=0x33))

        assert exc_info.value.actual == 0x02
        assert exc_info.value.expected == 0x01

    def test_unknown_family(self, make_message):
        with pytest.raises(UnknownDeviceFamily) as exc_info:
            run(make_message(family=0x42))

        assert exc_info.value.actual == 0x42
        assert exc_info.value.expected == 0x40
        assert "42" in str(exc_info.value)

    def test_short_message(self):
        # Header valid through the family byte, then ends
        with pytest.raises(MessageTooShort) as exc_info:
            run(bytes([0xF0, 0x00, 0x20, 0x29, 0x01, 0x40, 0xF7]))

        assert exc_info.value.offset == 7

    def test_truncated_header_hits_end_marker(self):
        with pytest.raises(BadDeviceType) as exc_info:
            run(bytes([0xF0, 0x00, 0x20, 0x29, 0xF7]))

        assert exc_info.value.actual == 0xF7

    def test_short_program_header(self):
        # Valid through offset 8 but no bank/program bytes
        data = bytes([0xF0, 0x00, 0x20, 0x29, 0x01, 0x40, 0x00, 0x01, 0x01, 0xF7])

        with pytest.raises(MessageTooShort):
            run(data)

    def test_earlier_messages_stay_written(self, program_dump, make_message):
        converter = AStationToVStationConverter()
        sink = io.BytesIO()

        with pytest.raises(UnknownDeviceFamily):
            converter.process_stream(io.BytesIO(program_dump + make_message(family=0x10)), sink)

        assert len(sink.getvalue()) == len(program_dump)

    def test_message_too_long(self):
        data = bytes([0xF0]) + bytes(300)

        with pytest.raises(MessageTooLong):
            run(data)

    def test_terminated_message_too_long(self):
        with pytest.raises(MessageTooLong) as exc_info:
            run(build_message(programs=3))

        assert exc_info.value.limit == 270
        assert str(exc_info.value) == "Message exceeds 270 bytes"


class TestErrorPolicy:
    """Test cases for keep-going, trailing data and write failures."""

    def test_keep_going_skips_bad_messages(self, program_dump, pair_dump, make_message):
        bad = make_message(family=0x41)
        out, report = run(program_dump + bad + pair_dump, keep_going=True)

        assert len(report.messages) == 2
        assert len(report.failures) == 1
        assert report.failures[0].index == 1
        assert report.failures[0].offset == len(program_dump)
        assert isinstance(report.failures[0].error, AlreadyConverted)
        assert not report.ok
        assert len(out) == len(program_dump) + len(pair_dump)

    def test_keep_going_still_checks_first_byte(self, program_dump):
        with pytest.raises(NotSysexFile):
            run(b"\x00" + program_dump, keep_going=True)

    def test_trailing_message_dropped(self, program_dump):
        out, report = run(program_dump + program_dump[:20])

        assert len(out) == len(program_dump)
        assert report.dropped_trailing_bytes == 20

    def test_trailing_message_strict(self, program_dump):
        with pytest.raises(TruncatedMessage) as exc_info:
            run(program_dump + program_dump[:20], strict_trailing=True)

        assert exc_info.value.length == 20

    def test_write_error(self, program_dump):
        converter = AStationToVStationConverter()
        sink = FailingSink(accept=1)

        with pytest.raises(WriteError):
            converter.process_stream(io.BytesIO(program_dump * 2), sink)

        assert sink.chunks[0][5] == 0x41

    def test_short_write(self, program_dump):
        converter = AStationToVStationConverter()

        with pytest.raises(WriteError):
            converter.process_stream(io.BytesIO(program_dump), ShortSink())


class TestFileConversion:
    """Test cases for the file helpers."""

    def test_convert_file(self, astation_file, tmp_path):
        output = tmp_path / "out.syx"
        report = convert_a_station_to_v_station(astation_file, output)

        data = output.read_bytes()
        source = astation_file.read_bytes()
        assert len(data) == len(source)
        assert report.message_count == 2
        assert report.bytes_written == len(source)
        assert data[5] == 0x41

    def test_no_output_on_failure(self, vstation_file, tmp_path):
        output = tmp_path / "out.syx"

        with pytest.raises(AlreadyConverted):
            convert_a_station_to_v_station(vstation_file, output)

        assert not output.exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AStationToVStationConverter().convert(tmp_path / "missing.syx")

    def test_convert_bytes(self):
        data = build_message(program=3)
        converter = AStationToVStationConverter()

        out = converter.convert_bytes(data)

        assert out[5] == 0x41
        assert converter.report.messages[0].programs == [3]
