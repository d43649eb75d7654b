"""
Server module for the Dart MCP Server.

Builds the low-level MCP server, registers the dart tools on it and runs it
over stdio. stdout belongs to the protocol; diagnostics go to stderr.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import SERVER_NAME
from .config import ServerConfig, get_version, set_config
from .logging_setup import configure_logging
from .project_roots import ProjectRootRegistry, default_registry, detect_project_roots
from .tools import definitions
from .tools.handlers import HANDLERS, Handler

logger = logging.getLogger(__name__)

INITIALIZATION_MESSAGE = """
Dart MCP Server: the Dart/Flutter toolchain as MCP tools.

Each tool runs one `dart` subcommand and returns its output:
dart-analyze, dart-compile, dart-create, dart-doc, dart-fix, dart-format,
dart-info, dart-package (pub), dart-run, dart-test.

Relative paths are resolved against the server's working directory, or against
'workingDir' for the tools that accept one. Prefer absolute paths.
A result with isError=true carries the text dart wrote to stderr.
"""


def _error_result(text: str) -> types.CallToolResult:
    return types.CallToolResult(
        isError=True,
        content=[types.TextContent(type="text", text=text)],
    )


async def dispatch_tool_call(
    name: str,
    arguments: Optional[Dict[str, Any]],
    handlers: Mapping[str, Handler] = HANDLERS,
) -> types.CallToolResult:
    """Route a validated tool call to its handler."""
    handler = handlers.get(name)
    if handler is None:
        logger.warning("Call for unknown tool: %s", name)
        return _error_result(f"Unknown tool: {name}")

    logger.info("Handling %s tool call", name)
    logger.debug("Arguments for %s: %s", name, arguments)
    try:
        return await handler(dict(arguments or {}))
    except Exception as e:
        logger.exception("Error in %s: %s", name, e)
        return _error_result(f"Tool error: {e}")


def create_server(tools: Optional[List[types.Tool]] = None) -> Server:
    """
    Create the MCP server with the dart tools registered.

    Args:
        tools: Tool definitions to expose (default: all dart tools).

    Returns:
        A server ready to be run on a transport.
    """
    tools = list(definitions.DART_TOOLS if tools is None else tools)
    version = get_version()
    logger.info("Creating %s (version %s)", SERVER_NAME, version)

    server = Server(SERVER_NAME, version=version, instructions=INITIALIZATION_MESSAGE)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        return await dispatch_tool_call(name, arguments)

    logger.info("Registered %d tools: %s", len(tools), ", ".join(tool.name for tool in tools))
    return server


async def serve(config: ServerConfig, registry: Optional[ProjectRootRegistry] = None) -> None:
    """Configure the process and serve MCP over stdio until the client disconnects."""
    configure_logging(config.log_level, config.verbose)
    set_config(config)

    registry = registry if registry is not None else default_registry()
    detect_project_roots(registry, search_dirs=config.extra_root_dirs)

    server = create_server()
    logger.info("Running %s with stdio transport...", SERVER_NAME)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        logger.info("%s shutting down...", SERVER_NAME)
