"""
Hex dump display utilities.
"""

from rich.console import Console
from rich.panel import Panel

from stationconv.formats.station.sysex_parser import (
    OFFSET_BANK,
    OFFSET_BANK_MODE,
    OFFSET_FAMILY,
    OFFSET_MESSAGE_TYPE,
    OFFSET_PROGRAM,
    OFFSET_PROGRAM_NUMBER,
)

console = Console()

# Header bytes worth a colour
HEADER_STYLES = {
    OFFSET_FAMILY: "bold yellow",
    OFFSET_MESSAGE_TYPE: "magenta",
    OFFSET_BANK_MODE: "magenta",
    OFFSET_BANK: "green",
    OFFSET_PROGRAM_NUMBER: "green",
}


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
    max_lines: int = 4,
) -> None:
    """Display a message hex dump with the header fields highlighted."""

    lines = []
    end = min(len(data), max_lines * bytes_per_line)

    for offset in range(0, end, bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]

        hex_parts = []
        for i, b in enumerate(chunk):
            pos = offset + i
            if i == 8:
                hex_parts.append(" ")  # Extra space at midpoint
            style = HEADER_STYLES.get(pos)
            if style is None and pos < OFFSET_PROGRAM:
                style = "cyan"
            hex_parts.append(f"[{style}]{b:02X}[/{style}]" if style else f"{b:02X}")

        addr = start_offset + offset
        lines.append(f"[dim]{addr:08X}[/dim]  " + " ".join(hex_parts))

    if len(data) > end:
        remaining = len(data) - end
        lines.append(f"[dim]... {remaining} more bytes ...[/dim]")

    console.print(Panel("\n".join(lines), title=title, border_style="blue", expand=False))
