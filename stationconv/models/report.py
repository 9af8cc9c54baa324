"""
Conversion report models.

A ConversionReport collects what happened to every message in a dump:
the decoded program metadata of converted messages and, in keep-going
mode, the messages that were skipped.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from stationconv.formats.station.sysex_parser import BankMode, DumpType, StationMessage


@dataclass
class MessageReport:
    """
    Informational decode of one converted message.

    Attributes:
        index: Message number within the dump (0-based)
        offset: Position of the F0 byte in the input
        length: Message length including F0 and F7
        dump_type: Decoded message type, None when unrecognised
        bank_mode: Bank mode byte (program dumps only)
        bank: Bank number, when the dump names one
        programs: Program slots covered by the dump
    """

    index: int
    offset: int
    length: int
    dump_type: Optional[DumpType] = None
    bank_mode: Optional[int] = None
    bank: Optional[int] = None
    programs: List[int] = field(default_factory=list)

    @classmethod
    def from_message(cls, index: int, message: StationMessage) -> "MessageReport":
        """Decode only the bytes that the message type makes meaningful."""
        report = cls(index=index, offset=message.offset, length=len(message))
        report.dump_type = message.dump_type

        if report.dump_type == DumpType.PROGRAM:
            report.bank_mode = message.bank_mode
            if report.bank_mode == BankMode.CURRENT_BANK:
                report.programs = message.program_numbers
            elif report.bank_mode == BankMode.EXPLICIT_BANK:
                report.bank = message.bank
                report.programs = message.program_numbers
        elif report.dump_type == DumpType.PROGRAM_PAIR:
            # The K/V-Station ignore the destination bank control for pairs
            report.bank_mode = message.bank_mode
            report.bank = message.bank
            report.programs = message.program_numbers

        return report

    def describe(self) -> Optional[str]:
        """Human readable notice, or None when there is nothing to report."""
        if self.dump_type == DumpType.CURRENT_SOUND:
            return "Current sound (edit buffer) dump"

        if self.dump_type == DumpType.PROGRAM and self.programs:
            if self.bank is None:
                return f"Current selected bank, PROGRAM NUMBER={self.programs[0]}"
            return f"PROGRAM BANK={self.bank}, PROGRAM NUMBER={self.programs[0]}"

        if self.dump_type == DumpType.PROGRAM_PAIR:
            return (
                f"PROGRAM BANK={self.bank}, "
                f"PROGRAM NUMBER={self.programs[0]} and {self.programs[1]}"
            )

        return None


@dataclass
class MessageFailure:
    """A message skipped in keep-going mode."""

    index: int
    offset: int
    error: Exception

    @property
    def reason(self) -> str:
        return str(self.error)


@dataclass
class ConversionReport:
    """Outcome of converting one dump."""

    source: str = "input"
    messages: List[MessageReport] = field(default_factory=list)
    failures: List[MessageFailure] = field(default_factory=list)
    discarded_fragments: int = 0
    dropped_trailing_bytes: int = 0
    bytes_written: int = 0

    @property
    def message_count(self) -> int:
        return len(self.messages) + len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures
