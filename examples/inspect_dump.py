#!/usr/bin/env python3
"""
Example: Print what a Station dump contains before converting it
"""

import sys

sys.path.insert(0, "..")

from stationconv.analysis import SyxAnalyzer


def main():
    analysis = SyxAnalyzer().analyze_file(sys.argv[1])

    print(f"File: {analysis.filepath} ({analysis.file_size} bytes)")
    for msg in analysis.messages:
        print(f"  #{msg.index} @0x{msg.offset:04X} {msg.family_name:20s} {msg.notice}")
    print(f"Convertible: {analysis.convertible}")


if __name__ == "__main__":
    main()
