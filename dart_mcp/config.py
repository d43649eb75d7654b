"""
Configuration for the Dart MCP Server.

Settings come from the environment (optionally seeded from a ``.env`` file in
the working directory). None of them change the content of a tool response;
they only select the executable, the optional path-search fallback and how
much diagnostic logging goes to stderr.
"""

import importlib.metadata
import logging
import os
from dataclasses import dataclass, field, replace
from typing import List, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from . import __version__

logger = logging.getLogger(__name__)

PACKAGE_NAME = "dart-mcp-server"

ENV_VERBOSE = "DART_MCP_VERBOSE"
ENV_LOG_LEVEL = "LOGLEVEL"
ENV_DART_EXECUTABLE = "DART_MCP_DART_EXECUTABLE"
ENV_SEARCH_ROOTS = "DART_MCP_SEARCH_ROOTS"
ENV_ROOT_DIRS = "DART_MCP_ROOT_DIRS"

DEFAULT_DART_EXECUTABLE = "dart"
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ServerConfig:
    """Process-wide settings consumed by the server and its tools."""
    verbose: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    dart_executable: str = DEFAULT_DART_EXECUTABLE
    search_roots: bool = False
    extra_root_dirs: List[str] = field(default_factory=list)

    def with_overrides(self, **overrides) -> "ServerConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _is_truthy(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in _TRUTHY


def load_config(env: Optional[Mapping[str, str]] = None, use_dotenv: bool = True) -> ServerConfig:
    """
    Build a ServerConfig from environment variables.

    Args:
        env: Mapping to read from instead of ``os.environ``. When given, no
            ``.env`` file is loaded.
        use_dotenv: Load a ``.env`` file into the process environment first.

    Returns:
        The resulting configuration.
    """
    if env is None:
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)
        env = os.environ

    verbose = _is_truthy(env.get(ENV_VERBOSE))
    log_level = env.get(ENV_LOG_LEVEL, "").strip().upper()
    if not log_level:
        log_level = "DEBUG" if verbose else DEFAULT_LOG_LEVEL
    if logging.getLevelName(log_level) == f"Level {log_level}":
        logger.warning("Unknown log level %r; falling back to %s", log_level, DEFAULT_LOG_LEVEL)
        log_level = DEFAULT_LOG_LEVEL

    dart_executable = env.get(ENV_DART_EXECUTABLE, "").strip() or DEFAULT_DART_EXECUTABLE
    root_dirs = [d for d in env.get(ENV_ROOT_DIRS, "").split(os.pathsep) if d.strip()]

    return ServerConfig(
        verbose=verbose,
        log_level=log_level,
        dart_executable=dart_executable,
        search_roots=_is_truthy(env.get(ENV_SEARCH_ROOTS)),
        extra_root_dirs=root_dirs,
    )


def get_version() -> str:
    """Installed package version, or the in-tree version when not installed."""
    try:
        return importlib.metadata.version(PACKAGE_NAME)
    except importlib.metadata.PackageNotFoundError:
        logger.debug("Package metadata not found; using %s", __version__)
        return __version__


_active_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """The active configuration, loaded from the environment on first use."""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
    return _active_config


def set_config(config: Optional[ServerConfig]) -> None:
    """Install ``config`` as the active configuration (``None`` resets it)."""
    global _active_config
    _active_config = config
