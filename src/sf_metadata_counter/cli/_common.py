"""Shared CLI helpers."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ..classification import classify
from ..config import CounterConfig
from ..exceptions import (
    ProjectNotFoundError,
    ScanError,
    SourceDirectoryNotFoundError,
)
from ..locator import locate_source_root
from ..models import MetadataReport, SourceRoot

console = Console()
err_console = Console(stderr=True)

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def candidate_dirs(ctx: typer.Context) -> List[Path]:
    obj = ctx.ensure_object(dict)
    return list(obj.get("paths") or [Path.cwd()])


def get_config(ctx: typer.Context) -> CounterConfig:
    obj = ctx.ensure_object(dict)
    config = obj.get("config")
    return config if config is not None else CounterConfig()


def resolve_source_root(ctx: typer.Context) -> SourceRoot:
    """Locate the source root or exit with a specific message."""
    try:
        return locate_source_root(candidate_dirs(ctx))
    except ProjectNotFoundError as e:
        err_console.print(f"[yellow]Not a Salesforce project:[/yellow] {e}")
        raise typer.Exit(EXIT_NOT_FOUND)
    except SourceDirectoryNotFoundError as e:
        err_console.print(f"[yellow]No source directory:[/yellow] {e}")
        raise typer.Exit(EXIT_NOT_FOUND)


def run_count(source: SourceRoot, config: CounterConfig) -> MetadataReport:
    """Count once or exit with the scan failure."""
    try:
        return classify(source, config)
    except ScanError as e:
        err_console.print(f"[red]Failed to count metadata:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)


def format_total(total: int, delta: Optional[int] = None) -> str:
    """Status-line rendering of the total, e.g. ``SF Components: 42 (+3)``."""
    text = f"[bold]SF Components:[/bold] {total}"
    if delta:
        color = "green" if delta > 0 else "red"
        text += f" [{color}]({delta:+d})[/{color}]"
    return text
