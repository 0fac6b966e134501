"""``locate``: show which project and source tree would be counted."""

import typer

from . import app
from ._common import console, resolve_source_root


@app.command()
def locate(ctx: typer.Context):
    """Print the project root, source root and layout."""
    source = resolve_source_root(ctx)
    console.print(f"Project root: [blue]{source.project_root}[/blue]")
    console.print(f"Source root:  [blue]{source.path}[/blue]")
    console.print(f"Layout:       [yellow]{source.layout}[/yellow]")
