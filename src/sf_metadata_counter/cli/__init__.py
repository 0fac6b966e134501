"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="sf-metadata-counter",
    help="Count Salesforce metadata components in a project source tree",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .count import main as _main_callback  # noqa: F401, E402
from .count import count as _count  # noqa: F401, E402
from .locate import locate as _locate  # noqa: F401, E402
from .report import report as _report  # noqa: F401, E402
from .watch import watch as _watch  # noqa: F401, E402
