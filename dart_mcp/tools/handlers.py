# dart_mcp/tools/handlers.py

"""
MCP tool handlers for executing dart CLI commands via the runner module.

Each function corresponds to a dart subcommand exposed as an MCP tool.
It receives schema-validated arguments, applies defaults, resolves path
parameters, builds the argument list in the order the subcommand expects and
formats the result for MCP.
"""

import logging
import os
from typing import Any, Awaitable, Callable, Dict, List, Optional

import mcp.types as types

from .definitions import DEFAULT_CREATE_TEMPLATE
from .paths import to_absolute_path, to_absolute_paths
from .runner import DartResult, run_dart_command

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any]], Awaitable[types.CallToolResult]]

# --- Helper Functions ---

def _format_result(dart_result: DartResult, command_name: str) -> types.CallToolResult:
    """Formats a DartResult into an MCP CallToolResult."""
    is_error = dart_result.failed
    if is_error:
        logger.info("dart %s reported an error (exit code %s)", command_name, dart_result.exit_code)
    else:
        logger.info("dart %s succeeded.", command_name)
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=dart_result.output)],
        isError=is_error,
    )


def _string_list(arguments: Dict[str, Any], key: str) -> List[str]:
    return list(arguments.get(key) or [])


def _resolve_optional(path: Optional[str], working_dir: Optional[str] = None) -> Optional[str]:
    return to_absolute_path(path, working_dir) if path else None


async def _execute(command_name: str, cmd_args: List[str], cwd: Optional[str] = None) -> types.CallToolResult:
    logger.debug("Executing dart %s with arguments: %s", command_name, cmd_args)
    dart_result = await run_dart_command(command_name, cmd_args, cwd)
    return _format_result(dart_result, command_name)

# --- Tool Handlers ---

async def handle_dart_analyze(arguments: Dict[str, Any]) -> types.CallToolResult:
    """
    Handles 'dart-analyze': ``dart analyze [path] [options...]``.

    Expected keys: 'path' (optional), 'options' (optional).
    """
    path = _resolve_optional(arguments.get("path"))
    cmd_args = ([path] if path else []) + _string_list(arguments, "options")
    return await _execute("analyze", cmd_args)


async def handle_dart_compile(arguments: Dict[str, Any]) -> types.CallToolResult:
    """
    Handles 'dart-compile': ``dart compile <format> <path> [-o output] [options...]``.

    Expected keys: 'format', 'path', 'output' (optional), 'options' (optional).
    """
    cmd_args = [arguments["format"], to_absolute_path(arguments["path"])]
    output = _resolve_optional(arguments.get("output"))
    if output:
        cmd_args.extend(["-o", output])
    cmd_args.extend(_string_list(arguments, "options"))
    return await _execute("compile", cmd_args)


async def handle_dart_create(arguments: Dict[str, Any]) -> types.CallToolResult:
    """
    Handles 'dart-create': ``dart create -t <template> [options...] <directory>``.

    The project directory is ``output/projectName`` when 'output' is given,
    otherwise ``projectName`` relative to the working directory. The
    directory name becomes the project name.
    """
    template = arguments.get("template") or DEFAULT_CREATE_TEMPLATE
    project_name = arguments["projectName"]
    output = arguments.get("output")
    target = os.path.join(output, project_name) if output else project_name

    cmd_args = ["-t", template]
    cmd_args.extend(_string_list(arguments, "options"))
    cmd_args.append(to_absolute_path(target))
    return await _execute("create", cmd_args)


async def handle_dart_doc(arguments: Dict[str, Any]) -> types.CallToolResult:
    """Handles 'dart-doc': ``dart doc [path] [--output dir] [options...]``."""
    path = _resolve_optional(arguments.get("path"))
    output = _resolve_optional(arguments.get("output"))
    cmd_args = [path] if path else []
    if output:
        cmd_args.extend(["--output", output])
    cmd_args.extend(_string_list(arguments, "options"))
    return await _execute("doc", cmd_args)


async def handle_dart_fix(arguments: Dict[str, Any]) -> types.CallToolResult:
    """Handles 'dart-fix': ``dart fix [path] --apply|--dry-run [options...]``."""
    path = _resolve_optional(arguments.get("path"))
    apply = arguments.get("apply", True)
    cmd_args = [path] if path else []
    cmd_args.append("--apply" if apply else "--dry-run")
    cmd_args.extend(_string_list(arguments, "options"))
    return await _execute("fix", cmd_args)


async def handle_dart_format(arguments: Dict[str, Any]) -> types.CallToolResult:
    """Handles 'dart-format': ``dart format <paths...> [--set-exit-if-changed] [options...]``."""
    cmd_args = to_absolute_paths(_string_list(arguments, "paths"))
    if arguments.get("setExitIfChanged", False):
        cmd_args.append("--set-exit-if-changed")
    cmd_args.extend(_string_list(arguments, "options"))
    return await _execute("format", cmd_args)


async def handle_dart_info(arguments: Dict[str, Any]) -> types.CallToolResult:
    """Handles 'dart-info': ``dart info [options...]``."""
    return await _execute("info", _string_list(arguments, "options"))


async def handle_dart_package(arguments: Dict[str, Any]) -> types.CallToolResult:
    """
    Handles 'dart-package': ``dart pub <command> [args...]``.

    Runs in 'workingDir' (resolved against the server's working directory)
    when given.
    """
    working_dir = _resolve_optional(arguments.get("workingDir"))
    cmd_args = [arguments["command"]] + _string_list(arguments, "args")
    return await _execute("pub", cmd_args, working_dir)


async def handle_dart_run(arguments: Dict[str, Any]) -> types.CallToolResult:
    """
    Handles 'dart-run': ``dart run <script> [args...]``.

    The script is resolved against 'workingDir' when given; the process
    runs there too.
    """
    working_dir = arguments.get("workingDir")
    script = to_absolute_path(arguments["script"], working_dir)
    cmd_args = [script] + _string_list(arguments, "args")
    return await _execute("run", cmd_args, _resolve_optional(working_dir))


async def handle_dart_test(arguments: Dict[str, Any]) -> types.CallToolResult:
    """Handles 'dart-test': ``dart test [path] [options...]``, run in 'workingDir' if given."""
    working_dir = arguments.get("workingDir")
    path = _resolve_optional(arguments.get("path"), working_dir)
    cmd_args = ([path] if path else []) + _string_list(arguments, "options")
    return await _execute("test", cmd_args, _resolve_optional(working_dir))


HANDLERS: Dict[str, Handler] = {
    "dart-analyze": handle_dart_analyze,
    "dart-compile": handle_dart_compile,
    "dart-create": handle_dart_create,
    "dart-doc": handle_dart_doc,
    "dart-fix": handle_dart_fix,
    "dart-format": handle_dart_format,
    "dart-info": handle_dart_info,
    "dart-package": handle_dart_package,
    "dart-run": handle_dart_run,
    "dart-test": handle_dart_test,
}
