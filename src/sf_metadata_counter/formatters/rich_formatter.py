"""Rich terminal formatter for count reports."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models import CountContext, MetadataReport
from .base import BaseFormatter


def _members(count: int) -> str:
    return f"{count} member" if count == 1 else f"{count} members"


class RichFormatter(BaseFormatter):
    """Summary panel followed by the alphabetical breakdown table."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, report: MetadataReport, context: CountContext) -> None:
        self.console.print(self.summary_panel(report, context))
        if report.type_count:
            self.console.print(self.breakdown_table(report))
        else:
            self.console.print("[yellow]No metadata components found.[/yellow]")

    def format(self, report: MetadataReport, context: CountContext) -> str:
        # Rich output goes directly to console; return empty string
        self.render(report, context)
        return ""

    def summary_panel(self, report: MetadataReport, context: CountContext) -> Panel:
        lines = [
            f"Total metadata types:   [bold]{report.type_count}[/bold]",
            f"Total metadata members: [bold]{report.total}[/bold]",
        ]
        if context.source_root is not None:
            lines.append(f"[dim]{context.source_root.path} ({context.layout})[/dim]")
        return Panel(
            "\n".join(lines),
            title="[bold cyan]Summary[/bold cyan]",
            expand=False,
        )

    def breakdown_table(self, report: MetadataReport) -> Table:
        table = Table(
            title="Detailed Metadata Type Count",
            show_header=True,
            show_lines=False,
            pad_edge=True,
        )
        table.add_column("Type", min_width=24)
        table.add_column("Count", justify="right")
        for type_name, count in report.breakdown():
            table.add_row(type_name, _members(count))
        return table
