"""``report``: per-type breakdown of the component count."""

from pathlib import Path
from typing import Optional

import typer

from ..formatters import RichFormatter, get_formatter
from ..models import CountContext
from . import app
from ._common import EXIT_ERROR, console, err_console, get_config, resolve_source_root, run_count


@app.command()
def report(
    ctx: typer.Context,
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich, json, csv, quiet",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the report to a file instead of stdout (json/csv/quiet only)",
        dir_okay=False,
    ),
):
    """
    Show the alphabetical breakdown of components per metadata type.

    [bold cyan]Examples:[/bold cyan]

      sf-metadata-counter report

      sf-metadata-counter report --format csv -o counts.csv
    """
    try:
        formatter = get_formatter(fmt)
    except ValueError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(EXIT_ERROR)

    if output is not None and fmt == "rich":
        err_console.print("[red]--output needs --format json, csv or quiet[/red]")
        raise typer.Exit(EXIT_ERROR)

    source = resolve_source_root(ctx)
    result = run_count(source, get_config(ctx))
    context = CountContext(source_root=source)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        text = formatter.format(result, context)
        output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
        console.print(f"[green]Report written to[/green] {output}")
        return

    if isinstance(formatter, RichFormatter):
        formatter.console = console
    formatter.render(result, context)
