"""
stationconv - Novation A-Station to V-Station SysEx dump converter.

The K-Station reads A-Station dumps and the V-Station reads K-Station
dumps, but the V-Station refuses A-Station dumps. This library rewrites
the device family byte of every message so the V-Station accepts them.

Example usage:
    from stationconv import AStationToVStationConverter

    converter = AStationToVStationConverter(on_message=lambda r: print(r.describe()))
    data = converter.convert("astation.syx")
    with open("vstation.syx", "wb") as f:
        f.write(data)
"""

__version__ = "0.1.0"
__author__ = "stationconv Contributors"

from stationconv.converters.a_to_v_station import (
    AStationToVStationConverter,
    convert_a_station_to_v_station,
)
from stationconv.formats.station.sysex_parser import BankMode, DumpType, StationMessage
from stationconv.models.report import ConversionReport, MessageReport
from stationconv.utils.validation import ConversionError

__all__ = [
    "AStationToVStationConverter",
    "convert_a_station_to_v_station",
    "BankMode",
    "DumpType",
    "StationMessage",
    "ConversionReport",
    "MessageReport",
    "ConversionError",
]
