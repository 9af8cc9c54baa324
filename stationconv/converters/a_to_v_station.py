"""
A-Station to V-Station dump converter.

Rewrites Novation A-Station SysEx dumps so the V-Station (and K-Station)
will load them. The conversion process, per message:
1. Frame the message between F0 and F7 (a new F0 always restarts)
2. Verify the Novation manufacturer ID and the Station device type
3. Verify the device family is A-Station
4. Replace the family byte with the K-Station/V-Station ID
5. Report the dump type and program slots
6. Write the message, otherwise unchanged

The first failing check aborts the whole run unless keep_going is set,
in which case the failing message is left out and recorded in the report.
"""

import io
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from stationconv.formats.station.sysex_parser import (
    A_STATION_ID,
    DEVICE_TYPE,
    K_STATION_ID,
    MAX_MESSAGE_SIZE,
    NOVATION_ID,
    OFFSET_DEVICE_TYPE,
    OFFSET_FAMILY,
    OFFSET_MANUFACTURER,
    SYSEX_END,
    SYSEX_START,
    StationMessage,
)
from stationconv.models.report import ConversionReport, MessageFailure, MessageReport
from stationconv.utils.validation import (
    MESSAGE_ERRORS,
    AlreadyConverted,
    BadDeviceType,
    BadManufacturerId,
    MessageTooLong,
    NotSysexFile,
    TruncatedMessage,
    UnknownDeviceFamily,
    WriteError,
)


class AStationToVStationConverter:
    """
    Converter from A-Station SysEx dumps to K-Station/V-Station dumps.

    Attributes:
        keep_going: Skip messages that fail validation instead of aborting
        strict_trailing: Raise TruncatedMessage for an unterminated last message
        on_message: Called with a MessageReport for every converted message
        report: Report of the most recent run
    """

    SOURCE_FAMILY = A_STATION_ID
    TARGET_FAMILY = K_STATION_ID
    MAX_MESSAGE_SIZE = MAX_MESSAGE_SIZE

    # Read size; framing is byte by byte regardless
    READ_CHUNK = 4096

    def __init__(
        self,
        keep_going: bool = False,
        strict_trailing: bool = False,
        on_message: Optional[Callable[[MessageReport], None]] = None,
    ):
        self.keep_going = keep_going
        self.strict_trailing = strict_trailing
        self.on_message = on_message
        self.report = ConversionReport()

    def process_stream(
        self, source: BinaryIO, sink: BinaryIO, source_name: str = "input"
    ) -> ConversionReport:
        """
        Convert every message read from source and write it to sink.

        Args:
            source: Binary stream with the A-Station dump
            sink: Binary stream receiving the converted dump
            source_name: Name used in error messages

        Returns:
            ConversionReport for the run

        Raises:
            ConversionError: On the first invalid message (see keep_going)
        """
        self.report = ConversionReport(source=source_name)

        buffer: Optional[bytearray] = None
        start = 0
        position = 0

        while True:
            chunk = source.read(self.READ_CHUNK)
            if not chunk:
                break

            for byte in chunk:
                if position == 0 and byte != SYSEX_START:
                    raise NotSysexFile(byte, source_name)

                if byte == SYSEX_START:
                    if buffer:
                        self.report.discarded_fragments += 1
                    buffer = bytearray()
                    start = position

                position += 1

                if buffer is None:
                    # Between messages
                    continue

                if len(buffer) >= self.MAX_MESSAGE_SIZE:
                    raise MessageTooLong(self.MAX_MESSAGE_SIZE)
                buffer.append(byte)

                if byte == SYSEX_END:
                    self._process_message(StationMessage(buffer, offset=start), sink)
                    buffer = None

        if buffer:
            if self.strict_trailing:
                raise TruncatedMessage(len(buffer))
            self.report.dropped_trailing_bytes = len(buffer)

        return self.report

    def validate(self, message: StationMessage) -> None:
        """
        Check the fixed header of one message, in wire order.

        Raises:
            BadManufacturerId: Offsets 1-3 are not 00 20 29
            BadDeviceType: Offset 4 is not 01
            AlreadyConverted: Offset 5 already holds the target family
            UnknownDeviceFamily: Offset 5 is neither family
            MessageTooShort: The message ends inside the header
        """
        for i, expected in enumerate(NOVATION_ID):
            offset = OFFSET_MANUFACTURER + i
            actual = message.byte_at(offset)
            if actual != expected:
                raise BadManufacturerId(offset, actual, expected)

        if message.device_type != DEVICE_TYPE:
            raise BadDeviceType(OFFSET_DEVICE_TYPE, message.device_type, DEVICE_TYPE)

        family = message.family
        if family == self.TARGET_FAMILY:
            raise AlreadyConverted(self.report.message_count)
        if family != self.SOURCE_FAMILY:
            raise UnknownDeviceFamily(OFFSET_FAMILY, family, self.SOURCE_FAMILY)

    def _process_message(self, message: StationMessage, sink: BinaryIO) -> None:
        """Validate, patch, report and emit one complete message."""
        index = self.report.message_count

        try:
            self.validate(message)
            message.family = self.TARGET_FAMILY
            entry = MessageReport.from_message(index, message)
        except MESSAGE_ERRORS as e:
            if not self.keep_going:
                raise
            self.report.failures.append(MessageFailure(index, message.offset, e))
            return

        self.report.messages.append(entry)
        if self.on_message is not None:
            self.on_message(entry)

        self._write(sink, bytes(message))

    def _write(self, sink: BinaryIO, data: bytes) -> None:
        try:
            written = sink.write(data)
        except OSError as e:
            raise WriteError(str(e)) from e

        if written is not None and written != len(data):
            raise WriteError(f"wrote {written} of {len(data)} bytes")

        self.report.bytes_written += len(data)

    def convert_bytes(self, data: Union[bytes, bytearray], source_name: str = "input") -> bytes:
        """
        Convert a dump held in memory.

        Args:
            data: Raw A-Station dump

        Returns:
            Converted dump bytes; details are left in self.report
        """
        sink = io.BytesIO()
        self.process_stream(io.BytesIO(bytes(data)), sink, source_name)
        return sink.getvalue()

    def convert(self, filepath: Union[str, Path]) -> bytes:
        """
        Convert a .syx file.

        Args:
            filepath: Path to the A-Station dump

        Returns:
            Converted dump bytes
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            return self.convert_bytes(f.read(), str(filepath))


def convert_a_station_to_v_station(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    keep_going: bool = False,
    strict_trailing: bool = False,
    on_message: Optional[Callable[[MessageReport], None]] = None,
) -> ConversionReport:
    """
    Convenience function to convert an A-Station dump file.

    The output file is only created once the whole dump has converted.

    Args:
        input_path: Path to the A-Station .syx file
        output_path: Path for the V-Station .syx file

    Returns:
        ConversionReport for the run
    """
    converter = AStationToVStationConverter(
        keep_going=keep_going, strict_trailing=strict_trailing, on_message=on_message
    )
    data = converter.convert(input_path)

    try:
        with open(output_path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise WriteError(str(e)) from e

    return converter.report
