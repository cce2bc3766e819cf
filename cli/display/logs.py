"""
Logging setup for the CLI.
"""

import logging

from rich.logging import RichHandler


def configure_logging(debug: bool = False, verbose: bool = False) -> None:
    """
    Route log records through Rich.

    debug shows every decoded record, verbose shows stage summaries,
    otherwise only warnings and errors are shown.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )
