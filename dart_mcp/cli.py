"""Command line entry point: ``dart-mcp``."""

import asyncio
import logging
import sys
from typing import Optional, Tuple

import click

from . import __version__
from .config import load_config
from .server import serve

logger = logging.getLogger(__name__)


@click.command(help="Serve the Dart/Flutter toolchain as MCP tools over stdio.")
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log diagnostics to stderr (same as DART_MCP_VERBOSE=1).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Root log level (default from LOGLEVEL, else WARNING).",
)
@click.option(
    "--dart",
    "dart_executable",
    default=None,
    help="dart executable to run (default from DART_MCP_DART_EXECUTABLE, else 'dart').",
)
@click.option(
    "--search-roots/--no-search-roots",
    default=None,
    help="Fall back to detected project roots when a relative path does not exist.",
)
@click.option(
    "--root",
    "roots",
    multiple=True,
    type=click.Path(file_okay=False),
    help="Extra directory to scan for Dart projects at startup. Repeatable.",
)
@click.version_option(version=__version__, prog_name="dart-mcp")
def cli(
    verbose: bool,
    log_level: Optional[str],
    dart_executable: Optional[str],
    search_roots: Optional[bool],
    roots: Tuple[str, ...],
):
    config = load_config()
    config = config.with_overrides(
        verbose=verbose or None,
        log_level=log_level.upper() if log_level else None,
        dart_executable=dart_executable,
        search_roots=search_roots,
        extra_root_dirs=[*config.extra_root_dirs, *roots] if roots else None,
    )
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Server stopped by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.critical("Critical error during server startup or shutdown: %s", e, exc_info=True)
        sys.exit(1)


def main() -> None:
    cli()
