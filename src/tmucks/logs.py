"""Logging setup for the command surface and the TUI."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from textual.logging import TextualHandler

LOGGER_NAME = "tmucks"


def setup_logging(verbose: bool = False, *, tui: bool = False) -> logging.Logger:
    """Configure the ``tmucks`` logger and return it.

    One-shot commands log to stderr through rich.  The TUI owns the terminal,
    so its records are routed to the Textual devtools console instead.
    Calling this again replaces the previously installed handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)

    handler: logging.Handler
    if tui:
        handler = TextualHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
