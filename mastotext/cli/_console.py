"""Shared Rich console instance and helpers."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Route mastotext logging through Rich on stderr."""
    logger = logging.getLogger("mastotext")
    logger.handlers = [RichHandler(console=err_console, show_time=False, show_path=False)]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
