"""
Logging for sf-metadata-counter.

Diagnostics go to stderr through rich so they never mix with the counts,
tables and JSON written to stdout. The level follows ``CounterConfig.verbosity``.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "sf_metadata_counter"

VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

# watchfiles logs every raw change batch at INFO
WATCHFILES_LOGGER = "watchfiles"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stderr rich handler (and optionally a file handler) to the
    package logger.

    Calling it again replaces the handlers installed by the previous call,
    so one process can run several commands without duplicated output.

    Args:
        verbosity: "quiet" (errors only), "normal" (warnings) or "verbose" (debug)
        log_file: Optional path that receives the same records as plain text

    Returns:
        The ``sf_metadata_counter`` logger

    Raises:
        ValueError: If verbosity is not a known level name
    """
    level = VERBOSITY_LEVELS.get(verbosity)
    if level is None:
        raise ValueError(
            f"verbosity must be one of {', '.join(VERBOSITY_LEVELS)}, got {verbosity!r}"
        )
    verbose = level == logging.DEBUG

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(file_handler)

    logger.setLevel(level)
    logger.propagate = False

    logging.getLogger(WATCHFILES_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``sf_metadata_counter`` namespace.

    ``get_logger(__name__)`` inside the package returns the module's own
    logger; any other name is nested below the package logger.
    """
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
