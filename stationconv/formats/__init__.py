"""Format handlers for Novation Station dumps."""

from stationconv.formats.station import StationMessage, DumpType, BankMode

__all__ = ["StationMessage", "DumpType", "BankMode"]
