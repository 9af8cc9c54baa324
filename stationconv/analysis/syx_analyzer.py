"""
Station SysEx file analyzer.

Inspects a dump without converting it:
- Message boundaries and sizes
- Header checks (manufacturer, device type, family)
- Dump type and program slots
- Whether the dump can be converted for the V-Station
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from stationconv.formats.station.sysex_parser import (
    A_STATION_ID,
    DEVICE_TYPE,
    MAX_MESSAGE_SIZE,
    NOVATION_ID,
    StationMessage,
    split_messages,
)
from stationconv.models.report import MessageReport
from stationconv.utils.validation import MessageTooShort


@dataclass
class MessageInfo:
    """Information about a single SysEx message."""

    index: int
    offset: int
    size: int
    manufacturer_ok: bool
    device_type_ok: bool
    family: Optional[int]
    family_name: str
    dump_type: str
    notice: str = ""
    size_ok: bool = True
    convertible: bool = False


@dataclass
class SyxAnalysis:
    """Complete analysis of a Station .syx file."""

    filepath: str
    file_size: int
    starts_with_sysex: bool
    messages: List[MessageInfo] = field(default_factory=list)
    family_counts: Dict[str, int] = field(default_factory=dict)
    trailing_bytes: int = 0

    @property
    def message_count(self) -> int:
        return len(self.messages)

    @property
    def convertible(self) -> bool:
        """True when every message is a well-formed A-Station dump."""
        return (
            self.starts_with_sysex
            and bool(self.messages)
            and all(m.convertible for m in self.messages)
        )


class SyxAnalyzer:
    """
    Analyzer for Station SysEx dumps.

    Example:
        analysis = SyxAnalyzer().analyze_file("astation.syx")
        print(f"{analysis.message_count} messages, convertible={analysis.convertible}")
    """

    def __init__(self):
        self.data: bytes = b""

    def analyze_file(self, filepath: Union[str, Path]) -> SyxAnalysis:
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            return self.analyze_bytes(f.read(), str(filepath))

    def analyze_bytes(self, data: bytes, filepath: str = "<bytes>") -> SyxAnalysis:
        self.data = bytes(data)
        messages, trailing = split_messages(self.data)

        analysis = SyxAnalysis(
            filepath=filepath,
            file_size=len(self.data),
            starts_with_sysex=bool(self.data) and self.data[0] == 0xF0,
            trailing_bytes=trailing,
        )

        for index, message in enumerate(messages):
            analysis.messages.append(self._analyze_message(index, message))

        analysis.family_counts = dict(Counter(m.family_name for m in analysis.messages))
        return analysis

    def _analyze_message(self, index: int, message: StationMessage) -> MessageInfo:
        try:
            manufacturer_ok = message.manufacturer_id == NOVATION_ID
            device_type_ok = message.device_type == DEVICE_TYPE
            family = message.family
        except MessageTooShort:
            return MessageInfo(
                index=index,
                offset=message.offset,
                size=len(message),
                manufacturer_ok=False,
                device_type_ok=False,
                family=None,
                family_name="Truncated",
                dump_type="-",
            )

        info = MessageInfo(
            index=index,
            offset=message.offset,
            size=len(message),
            manufacturer_ok=manufacturer_ok,
            device_type_ok=device_type_ok,
            family=family,
            family_name=message.family_name,
            dump_type="-",
            size_ok=len(message) <= MAX_MESSAGE_SIZE,
        )

        try:
            dump_type = message.dump_type
            info.dump_type = dump_type.name if dump_type is not None else f"0x{message.message_type:02X}"
            info.notice = MessageReport.from_message(index, message).describe() or ""
        except MessageTooShort:
            info.notice = "header truncated"
            return info

        if not info.size_ok:
            info.notice = f"too long ({len(message)} > {MAX_MESSAGE_SIZE} bytes)"

        info.convertible = (
            manufacturer_ok and device_type_ok and info.size_ok and family == A_STATION_ID
        )
        return info
