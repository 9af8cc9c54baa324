"""Novation Station SysEx format handlers."""

from stationconv.formats.station.sysex_parser import (
    BankMode,
    DumpType,
    StationMessage,
    split_messages,
)

__all__ = ["BankMode", "DumpType", "StationMessage", "split_messages"]
