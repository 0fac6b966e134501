"""Root callback and the ``count`` command."""

from pathlib import Path
from typing import List, Optional

import typer

from ..config import load_config
from ..exceptions import MetadataCounterError
from ..logging_config import setup_logging
from . import app
from ._common import (
    EXIT_ERROR,
    console,
    err_console,
    format_total,
    get_config,
    resolve_source_root,
    run_count,
)


@app.callback(invoke_without_command=True, no_args_is_help=False)
def main(
    ctx: typer.Context,
    path: Optional[List[Path]] = typer.Option(
        None,
        "-C",
        "--path",
        help="Candidate project directory; repeat to try several (default: current directory)",
        file_okay=False,
        dir_okay=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="TOML config file",
        exists=True,
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Threads used to list top-level folders",
        min=1,
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
):
    """
    Count Salesforce metadata components.

    Without a subcommand the total is printed, like [bold]count[/bold].

    [bold cyan]Examples:[/bold cyan]

      sf-metadata-counter

      sf-metadata-counter report --format json

      sf-metadata-counter -C ./org-a -C ./org-b watch
    """
    if version:
        from .. import __version__

        console.print(
            f"[bold cyan]sf-metadata-counter[/bold cyan] version [green]{__version__}[/green]"
        )
        raise typer.Exit(0)

    try:
        settings = load_config(config_file=config, verbose=verbose, quiet=quiet, workers=workers)
    except MetadataCounterError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_ERROR)

    # SFMC_VERBOSITY and the config file count unless -v/-q say otherwise
    setup_logging(settings.verbosity, str(log_file) if log_file else None)

    obj = ctx.ensure_object(dict)
    obj["paths"] = list(path) if path else [Path.cwd()]
    obj["config"] = settings

    if ctx.invoked_subcommand is None:
        count(ctx)


@app.command()
def count(ctx: typer.Context):
    """Count components once and print the total."""
    config = get_config(ctx)
    source = resolve_source_root(ctx)
    report = run_count(source, config)
    if config.show_summary_indicator:
        console.print(format_total(report.total))
    else:
        console.print(str(report.total))
