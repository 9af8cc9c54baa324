"""
stationconv - Novation A-Station to V-Station SysEx dump converter.

A small CLI tool for converting and inspecting Station synth dumps.
"""

import typer
from rich.console import Console

from cli.commands.convert import convert
from cli.commands.info import info
from cli.commands.send import ports, send
from stationconv import __version__

console = Console()

# Main app
app = typer.Typer(
    name="stationconv",
    help="Convert Novation A-Station SysEx dumps for the V-Station.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="convert")(convert)
app.command(name="info")(info)
app.command(name="send")(send)
app.command(name="ports")(ports)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]stationconv[/bold] version {__version__}")
    console.print("[dim]Novation A-Station to V-Station SysEx dump converter[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
) -> None:
    """
    stationconv - Make A-Station dumps loadable by the V-Station.

    The K-Station reads A-Station dumps and the V-Station reads K-Station
    dumps, but the V-Station cannot read A-Station dumps. This tool
    rewrites the device family byte so it can.

    [bold]Quick Start:[/bold]

        stationconv convert INPUT.syx OUTPUT.syx   # Convert a dump
        stationconv info INPUT.syx                 # Inspect a dump

    [bold]MIDI Commands:[/bold]

        stationconv ports                          # List MIDI outputs
        stationconv send INPUT.syx --port NAME     # Convert and transmit

    Use --help with any command for more details.
    """
    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
