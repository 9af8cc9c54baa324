"""
Send command - convert a dump and transmit it to a Station synth over MIDI.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table
from rich import box

from cli.commands.convert import check_source, print_notice
from stationconv.converters.a_to_v_station import AStationToVStationConverter
from stationconv.formats.station.sysex_parser import split_messages
from stationconv.utils.midi_ports import find_output_port, list_output_ports, send_sysex
from stationconv.utils.validation import ConversionError

console = Console()
err_console = Console(stderr=True)
app = typer.Typer()


@app.command()
def send(
    source: Path = typer.Argument(..., help="A-Station dump file (.syx)"),
    port: Optional[str] = typer.Option(None, "--port", "-p", help="MIDI output port name"),
    delay: int = typer.Option(50, "--delay", "-d", help="Delay between messages in ms"),
    no_convert: bool = typer.Option(
        False, "--no-convert", help="Send the file as is (already a K/V-Station dump)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tracebacks on errors"),
) -> None:
    """
    Convert an A-Station dump in memory and send it to a MIDI output.

    Examples:

        stationconv send astation.syx --port "USB MIDI"

        stationconv send vstation.syx --no-convert --delay 100
    """
    check_source(source)

    with open(source, "rb") as f:
        data = f.read()

    if not no_convert:
        converter = AStationToVStationConverter(on_message=print_notice)
        try:
            data = converter.convert_bytes(data, str(source))
        except ConversionError as e:
            err_console.print(f"[red]\\[ERR] {escape(str(e))}[/red]")
            if verbose:
                err_console.print_exception()
            raise typer.Exit(1)

    messages = [bytes(m) for m in split_messages(data)[0]]
    if not messages:
        err_console.print("[red]\\[ERR] No SysEx messages to send[/red]")
        raise typer.Exit(1)

    port_name = find_output_port(port)
    if port_name is None:
        err_console.print("[red]\\[ERR] No matching MIDI output port found[/red]")
        for name in list_output_ports():
            err_console.print(f"  - {escape(name)}")
        raise typer.Exit(1)

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Sending to {escape(port_name)}", total=len(messages))
        sent = send_sysex(
            port_name,
            messages,
            delay_ms=delay,
            on_sent=lambda index, raw: progress.advance(task),
        )

    console.print(f"[green]Sent:[/green] {sent} message(s) to {escape(port_name)}")


@app.command()
def ports() -> None:
    """List available MIDI output ports."""
    names = list_output_ports()

    if not names:
        console.print("[yellow]No MIDI output ports found[/yellow]")
        return

    table = Table(title="MIDI Outputs", box=box.ROUNDED, header_style="bold cyan")
    table.add_column("#", style="dim", width=3)
    table.add_column("Port")
    for i, name in enumerate(names):
        table.add_row(str(i), escape(name))
    console.print(table)


if __name__ == "__main__":
    app()
