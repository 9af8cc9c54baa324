"""
Info command - inspect a Station dump without converting it.
"""

from dataclasses import asdict
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.hex_view import display_hex_dump
from cli.display.tables import display_syx_info
from stationconv.analysis.syx_analyzer import SyxAnalysis, SyxAnalyzer
from stationconv.formats.station.sysex_parser import split_messages

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="Station dump file to analyze (.syx)"),
    messages: bool = typer.Option(
        True, "--messages/--no-messages", "-m", help="Show individual SysEx messages"
    ),
    hex: bool = typer.Option(False, "--hex", "-x", help="Show hex dump of each message header"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """
    Display dump file information.

    Shows for every message:

    - Offset and size
    - Manufacturer ID and device type checks
    - Device family (A-Station or K-Station/V-Station)
    - Dump type, bank and program numbers

    Examples:

        stationconv info astation.syx

        stationconv info astation.syx --hex

        stationconv info astation.syx --json
    """
    if not file.is_file():
        console.print(f"[red]Error: File not found: {escape(str(file))}[/red]")
        raise typer.Exit(1)

    analyzer = SyxAnalyzer()
    analysis = analyzer.analyze_file(file)

    if json_output:
        _output_json(analysis)
        return

    display_syx_info(analysis, show_messages=messages)

    if hex:
        for message in split_messages(analyzer.data)[0]:
            display_hex_dump(
                bytes(message),
                title=f"Message @ 0x{message.offset:04X}",
                start_offset=message.offset,
            )


def _output_json(analysis: SyxAnalysis) -> None:
    """Output analysis as JSON."""
    data = asdict(analysis)
    data["message_count"] = analysis.message_count
    data["convertible"] = analysis.convertible
    console.print_json(data=data)


if __name__ == "__main__":
    app()
