#!/usr/bin/env python3
"""
Example: Convert every A-Station dump in a folder for the V-Station

Dumps that are already K-Station/V-Station dumps are skipped.
"""

import sys

sys.path.insert(0, "..")

from pathlib import Path
from stationconv.converters import convert_a_station_to_v_station
from stationconv.utils.validation import AlreadyConverted, ConversionError


def main():
    source_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(".")
    output_dir = source_dir / "vstation"
    output_dir.mkdir(exist_ok=True)

    for syx_file in sorted(source_dir.glob("*.syx")):
        output = output_dir / syx_file.name
        try:
            report = convert_a_station_to_v_station(syx_file, output)
        except AlreadyConverted:
            print(f"  Skipped: {syx_file.name} (already a V-Station dump)")
            continue
        except ConversionError as e:
            print(f"  Failed:  {syx_file.name}: {e}")
            continue

        programs = [p for m in report.messages for p in m.programs]
        print(f"  Created: {output} ({len(report.messages)} messages, programs {programs})")


if __name__ == "__main__":
    main()
