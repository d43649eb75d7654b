"""Dart MCP Server: the Dart/Flutter toolchain exposed as MCP tools."""

__version__ = "1.0.0"

SERVER_NAME = "dart-mcp-server"
