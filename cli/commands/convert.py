"""
Convert command - make an A-Station dump loadable by the V-Station.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.tables import display_failures
from stationconv.converters.a_to_v_station import convert_a_station_to_v_station
from stationconv.models.report import MessageReport
from stationconv.utils.validation import ConversionError

console = Console()
err_console = Console(stderr=True)
app = typer.Typer()


def print_notice(entry: MessageReport) -> None:
    """Print the informational notice of one converted message."""
    notice = entry.describe()
    if notice:
        console.print(f"[blue]\\[INFO][/blue] {notice}")


def default_output_path(source: Path) -> Path:
    return source.with_name(f"{source.stem}_vstation.syx")


def check_source(source: Path) -> None:
    """Exit early for missing files and Standard MIDI Files."""
    if not source.exists():
        err_console.print(f"[red]\\[ERR] File not found: {escape(str(source))}[/red]")
        raise typer.Exit(1)

    if not source.is_file():
        err_console.print(f"[red]\\[ERR] Not a file: {escape(str(source))}[/red]")
        raise typer.Exit(1)

    if source.suffix.lower() in (".mid", ".midi"):
        err_console.print(f"[red]\\[ERR] {escape(str(source))} is a Standard MIDI File[/red]")
        err_console.print("[dim]\\[Note] Supported only *.syx files, SMF(*.mid) is not supported.[/dim]")
        raise typer.Exit(1)


@app.command()
def convert(
    source: Path = typer.Argument(..., help="A-Station dump file (.syx)"),
    output: Optional[Path] = typer.Argument(
        None, help="V-Station dump file (default: <source>_vstation.syx)"
    ),
    keep_going: bool = typer.Option(
        False, "--keep-going", "-k", help="Skip invalid messages instead of aborting"
    ),
    strict_trailing: bool = typer.Option(
        False, "--strict-trailing", help="Fail when the last message has no end marker"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print per-message notices"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tracebacks on errors"),
) -> None:
    """
    Convert an A-Station SysEx dump for the V-Station (or K-Station).

    Every message is checked for the Novation manufacturer ID, the Station
    device type and the A-Station family byte, which is then replaced with
    the K-Station/V-Station ID. All other bytes are copied unchanged.

    Examples:

        stationconv convert INPUT.syx OUTPUT.syx

        stationconv convert bank.syx --keep-going
    """
    check_source(source)
    output_path = output or default_output_path(source)

    try:
        report = convert_a_station_to_v_station(
            source,
            output_path,
            keep_going=keep_going,
            strict_trailing=strict_trailing,
            on_message=None if quiet else print_notice,
        )
    except ConversionError as e:
        err_console.print(f"[red]\\[ERR] {escape(str(e))}[/red]")
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1)

    if report.dropped_trailing_bytes:
        console.print(
            f"[yellow]Warning: dropped {report.dropped_trailing_bytes} trailing bytes "
            f"without end marker[/yellow]"
        )

    if report.discarded_fragments:
        console.print(
            f"[yellow]Warning: discarded {report.discarded_fragments} unterminated "
            f"message fragment(s)[/yellow]"
        )

    if report.message_count == 0:
        console.print("[yellow]Warning: no SysEx messages found[/yellow]")

    console.print(f"[green]Converted:[/green] {escape(str(source))} -> {escape(str(output_path))}")
    console.print(
        f"[dim]{len(report.messages)} message(s), {report.bytes_written} bytes written[/dim]"
    )

    if not report.ok:
        display_failures(report)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
