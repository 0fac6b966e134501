"""``watch``: keep the count current while files change."""

import queue

import typer

from ..formatters import RichFormatter
from ..models import CountContext
from ..watch import MetadataWatcher, ReportState
from . import app
from ._common import console, err_console, format_total, get_config, resolve_source_root


@app.command()
def watch(ctx: typer.Context):
    """
    Count once, then recount after file-tree changes (debounced).

    Honours [bold]auto_refresh[/bold] and [bold]show_summary_indicator[/bold]
    from the config file or SFMC_* environment variables.
    """
    config = get_config(ctx)
    source = resolve_source_root(ctx)
    context = CountContext(source_root=source)
    formatter = RichFormatter(console=console)

    state = ReportState()
    messages: queue.Queue = queue.Queue(maxsize=16)
    state.add_listener(messages)
    watcher = MetadataWatcher(source, state, config)

    with console.status("[cyan]Counting metadata..."):
        watcher.run_scan()

    if not watcher.enabled:
        _drain(messages, state, formatter, context, config.show_summary_indicator)
        console.print("[yellow]Auto refresh is disabled; not watching for changes.[/yellow]")
        raise typer.Exit(0)

    watcher.start()
    console.print(f"[bold]Watching[/bold] {source.path}")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        while True:
            try:
                msg = messages.get(timeout=0.5)
            except queue.Empty:
                continue
            _handle(msg, state, formatter, context, config.show_summary_indicator)
    except KeyboardInterrupt:
        console.print("\n[dim]Stopping...[/dim]")
    finally:
        watcher.stop()
        state.remove_listener(messages)


def _drain(messages, state, formatter, context, show_summary) -> None:
    while True:
        try:
            msg = messages.get_nowait()
        except queue.Empty:
            return
        _handle(msg, state, formatter, context, show_summary)


def _handle(msg, state, formatter, context, show_summary) -> None:
    kind = msg.get("type")
    if kind == "report":
        current = state.get_report()
        if current is None:
            return
        delta = msg.get("changes", {}).get("total_delta")
        if show_summary:
            console.print(format_total(current.total, delta))
        formatter.render(current, context)
    elif kind == "error":
        previous = state.get_report()
        kept = f" (showing last count: {previous.total})" if previous is not None else ""
        err_console.print(f"[red]Count failed:[/red] {msg.get('message')}{kept}")
