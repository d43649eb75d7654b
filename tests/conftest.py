"""Project-level pytest configuration hooks."""

import os

import pytest

from dart_mcp.config import ServerConfig, set_config

_DART_MCP_ENV = (
    "DART_MCP_VERBOSE",
    "DART_MCP_DART_EXECUTABLE",
    "DART_MCP_SEARCH_ROOTS",
    "DART_MCP_ROOT_DIRS",
    "LOGLEVEL",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Start every test from default settings, independent of the developer's environment.

    Installing an explicit config also keeps ``get_config`` from reading a
    ``.env`` file during tests.
    """
    for name in _DART_MCP_ENV:
        monkeypatch.delenv(name, raising=False)
    set_config(ServerConfig())
    yield
    set_config(None)


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """A scratch directory that is also the process working directory."""
    monkeypatch.chdir(tmp_path)
    # getcwd() returns the real path, which differs from tmp_path where /tmp is a symlink.
    return os.getcwd()
