"""Logging configuration. Everything goes to stderr; stdout carries the MCP protocol."""

import logging

from rich.console import Console
from rich.logging import RichHandler

stderr_console = Console(stderr=True)


def configure_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """
    Route all log records to stderr through Rich.

    Args:
        level: Name of the root log level (e.g. ``"INFO"``).
        verbose: Force DEBUG regardless of ``level``.
    """
    numeric_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING)
    handler = RichHandler(
        console=stderr_console,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    logging.basicConfig(
        level=numeric_level,
        format="%(name)s - %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logging.getLogger(__name__).debug("Log level set to %s", logging.getLevelName(numeric_level))
