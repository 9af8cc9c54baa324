"""
Novation A-Station / K-Station / V-Station SysEx message layout.

Program dump format:
    F0 00 20 29 01 FF xx TT BM xx xx BK PN [program data...] F7

Where:
    - 00 20 29: Novation manufacturer ID
    - 01: Device type (Station synths)
    - FF: Device family (0x40 = A-Station, 0x41 = K-Station / V-Station)
    - TT: Message type (0x00 current sound, 0x01 program, 0x02 program pair)
    - BM: Bank mode (0 = currently selected bank, 1 = explicit bank)
    - BK: Bank number
    - PN: Program number
    - program data: 128 bytes per program

The K-Station reads A-Station dumps and the V-Station reads K-Station
dumps, but the V-Station rejects the A-Station family byte. A-Station
leaves data byte 126 (effects select / keyboard octave) at 0x00, which
K/V-Station read as "Delay selected", so the family byte is the only
difference that matters.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple, Union

from stationconv.utils.validation import MessageTooShort

SYSEX_START = 0xF0
SYSEX_END = 0xF7

NOVATION_ID = (0x00, 0x20, 0x29)
DEVICE_TYPE = 0x01
A_STATION_ID = 0x40
K_STATION_ID = 0x41  # shared by K-Station and V-Station

# Header offsets
OFFSET_MANUFACTURER = 1
OFFSET_DEVICE_TYPE = 4
OFFSET_FAMILY = 5
OFFSET_MESSAGE_TYPE = 7
OFFSET_BANK_MODE = 8
OFFSET_BANK = 11
OFFSET_PROGRAM_NUMBER = 12
OFFSET_PROGRAM = 13

PROGRAM_SIZE = 128
# Largest message is a program pair dump
MAX_MESSAGE_SIZE = PROGRAM_SIZE * 2 + OFFSET_PROGRAM + 1

FAMILY_NAMES = {
    A_STATION_ID: "A-Station",
    K_STATION_ID: "K-Station/V-Station",
}


class DumpType(IntEnum):
    """Station SysEx message types (offset 7)."""

    CURRENT_SOUND = 0x00  # Sent from the edit buffer
    PROGRAM = 0x01
    PROGRAM_PAIR = 0x02


class BankMode(IntEnum):
    """Bank addressing mode (offset 8)."""

    CURRENT_BANK = 0
    EXPLICIT_BANK = 1


@dataclass
class StationMessage:
    """
    One Station SysEx message, owned as a mutable byte buffer.

    All header access goes through byte_at(), which raises
    MessageTooShort instead of reading past the end.

    Attributes:
        raw: Message bytes, F0 through F7 inclusive
        offset: Position of the F0 byte in the source stream
    """

    raw: bytearray = field(default_factory=bytearray)
    offset: int = 0

    def __post_init__(self):
        if not isinstance(self.raw, bytearray):
            self.raw = bytearray(self.raw)

    def __len__(self) -> int:
        return len(self.raw)

    def __bytes__(self) -> bytes:
        return bytes(self.raw)

    def byte_at(self, offset: int) -> int:
        if offset >= len(self.raw):
            raise MessageTooShort(offset, len(self.raw))
        return self.raw[offset]

    @property
    def manufacturer_id(self) -> Tuple[int, int, int]:
        return tuple(self.byte_at(OFFSET_MANUFACTURER + i) for i in range(3))

    @property
    def device_type(self) -> int:
        return self.byte_at(OFFSET_DEVICE_TYPE)

    @property
    def family(self) -> int:
        return self.byte_at(OFFSET_FAMILY)

    @family.setter
    def family(self, value: int) -> None:
        self.byte_at(OFFSET_FAMILY)
        self.raw[OFFSET_FAMILY] = value

    @property
    def family_name(self) -> str:
        return FAMILY_NAMES.get(self.family, "Unknown")

    @property
    def message_type(self) -> int:
        return self.byte_at(OFFSET_MESSAGE_TYPE)

    @property
    def dump_type(self) -> Optional[DumpType]:
        """Decoded message type, or None for values outside DumpType."""
        try:
            return DumpType(self.message_type)
        except ValueError:
            return None

    @property
    def bank_mode(self) -> int:
        return self.byte_at(OFFSET_BANK_MODE)

    @property
    def bank(self) -> int:
        return self.byte_at(OFFSET_BANK)

    @property
    def program_number(self) -> int:
        return self.byte_at(OFFSET_PROGRAM_NUMBER)

    @property
    def program_numbers(self) -> List[int]:
        """Program slots covered by this dump."""
        if self.dump_type == DumpType.PROGRAM_PAIR:
            # No bank boundary handling: the pair covers p and p + 1 as sent
            return [self.program_number, self.program_number + 1]
        return [self.program_number]

    @property
    def is_complete(self) -> bool:
        return (
            len(self.raw) >= 2
            and self.raw[0] == SYSEX_START
            and self.raw[-1] == SYSEX_END
        )


def split_messages(data: Union[bytes, bytearray]) -> Tuple[List[StationMessage], int]:
    """
    Split a byte stream into SysEx messages.

    A start marker always begins a new message, discarding any unfinished
    one. Bytes outside F0..F7 are skipped.

    Args:
        data: Raw dump contents

    Returns:
        (messages, number of trailing bytes left without an end marker)
    """
    messages = []
    start = None

    for i, byte in enumerate(data):
        if byte == SYSEX_START:
            start = i
        elif byte == SYSEX_END and start is not None:
            messages.append(StationMessage(bytearray(data[start : i + 1]), offset=start))
            start = None

    trailing = len(data) - start if start is not None else 0
    return messages, trailing
