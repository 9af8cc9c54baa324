"""
Dump converters for Novation Station synths.

Example:
    from stationconv.converters import convert_a_station_to_v_station

    # Make an A-Station dump loadable by the V-Station
    convert_a_station_to_v_station("astation.syx", "vstation.syx")
"""

from stationconv.converters.a_to_v_station import (
    AStationToVStationConverter,
    convert_a_station_to_v_station,
)

__all__ = ["AStationToVStationConverter", "convert_a_station_to_v_station"]
