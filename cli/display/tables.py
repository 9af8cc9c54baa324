"""
Rich table displays for dump analysis and conversion results.
"""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from stationconv.analysis.syx_analyzer import SyxAnalysis
from stationconv.models.report import ConversionReport


console = Console()


def _check(ok: bool) -> str:
    return "[green]OK[/green]" if ok else "[red]BAD[/red]"


def display_syx_info(analysis: SyxAnalysis, show_messages: bool = True) -> None:
    """Display Station .syx analysis with Rich formatting."""

    if analysis.convertible:
        status = "[green]A-Station dump, ready to convert[/green]"
    elif analysis.family_counts.get("K-Station/V-Station"):
        status = "[yellow]Contains K-Station/V-Station dumps[/yellow]"
    else:
        status = "[red]Not convertible[/red]"

    families = ", ".join(f"{name} x{count}" for name, count in analysis.family_counts.items())

    header_content = f"""[bold]File:[/bold] {escape(analysis.filepath)}
[bold]Size:[/bold] {analysis.file_size} bytes
[bold]Messages:[/bold] {analysis.message_count}
[bold]Families:[/bold] {families or "N/A"}
[bold]Status:[/bold] {status}"""

    if analysis.trailing_bytes:
        header_content += (
            f"\n[bold]Trailing:[/bold] [yellow]{analysis.trailing_bytes} bytes "
            f"without end marker[/yellow]"
        )

    console.print(
        Panel(
            header_content,
            title="[bold blue]Station SysEx Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    if not show_messages or not analysis.messages:
        return

    table = Table(title="Messages", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Size", width=5)
    table.add_column("ID", width=4)
    table.add_column("Type", width=4)
    table.add_column("Family", style="cyan", width=20)
    table.add_column("Dump", width=14)
    table.add_column("Program")

    for msg in analysis.messages:
        table.add_row(
            str(msg.index),
            f"0x{msg.offset:04X}",
            str(msg.size) if msg.size_ok else f"[red]{msg.size}[/red]",
            _check(msg.manufacturer_ok),
            _check(msg.device_type_ok),
            msg.family_name,
            msg.dump_type,
            msg.notice,
        )

    console.print(table)


def display_failures(report: ConversionReport) -> None:
    """Display messages skipped in keep-going mode."""
    if not report.failures:
        return

    table = Table(title="Skipped Messages", box=box.ROUNDED, show_header=True, header_style="bold red")
    table.add_column("#", style="dim", width=4)
    table.add_column("Offset", style="dim", width=8)
    table.add_column("Reason")

    for failure in report.failures:
        table.add_row(str(failure.index), f"0x{failure.offset:04X}", escape(failure.reason))

    console.print(table)
