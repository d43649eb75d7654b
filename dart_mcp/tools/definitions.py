"""
Tool definitions for the Dart MCP Server.

One tool per ``dart`` subcommand. Each has a name, a description and a JSON
schema for its parameters; the MCP SDK validates incoming calls against the
schema before a handler runs.
"""

from typing import Dict, List

import mcp.types as types

OPTIONS_PROPERTY = {
    "type": "array",
    "items": {"type": "string"},
}

COMPILE_FORMATS = ["exe", "aot-snapshot", "jit-snapshot", "kernel", "js"]
CREATE_TEMPLATES = ["console", "package", "server-shelf", "web"]
PUB_COMMANDS = [
    "get", "upgrade", "outdated", "add", "remove", "publish",
    "deps", "downgrade", "cache", "run", "global",
]

DEFAULT_CREATE_TEMPLATE = "package"

TOOL_DESCRIPTIONS: Dict[str, str] = {
    "dart-analyze": "Analyze Dart code in a directory",
    "dart-compile": "Compile Dart to various formats",
    "dart-create": "Create a new Dart project",
    "dart-doc": "Generate API documentation for Dart projects",
    "dart-fix": "Apply automated fixes to Dart source code",
    "dart-format": "Idiomatically format Dart source code",
    "dart-info": "Show diagnostic information about the installed tooling",
    "dart-package": "Work with packages (pub commands)",
    "dart-run": "Run a Dart program",
    "dart-test": "Run tests for a project",
}

# Relative paths are resolved against the server's working directory
# (or the tool's workingDir, where it has one).
_PATH_NOTE = "Relative paths are resolved to absolute paths before dart runs."


def _options(description: str) -> dict:
    return {**OPTIONS_PROPERTY, "description": description}


DART_ANALYZE = types.Tool(
    name="dart-analyze",
    description=f"{TOOL_DESCRIPTIONS['dart-analyze']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Directory or file to analyze"},
            "options": _options("Additional options for the dart analyze command"),
        },
        "additionalProperties": False,
    },
)

DART_COMPILE = types.Tool(
    name="dart-compile",
    description=f"{TOOL_DESCRIPTIONS['dart-compile']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "format": {
                "type": "string",
                "enum": COMPILE_FORMATS,
                "description": "Output format for the compilation",
            },
            "path": {"type": "string", "description": "Path to the Dart file to compile"},
            "output": {"type": "string", "description": "Output file path"},
            "options": _options("Additional compilation options"),
        },
        "required": ["format", "path"],
        "additionalProperties": False,
    },
)

DART_CREATE = types.Tool(
    name="dart-create",
    description=f"{TOOL_DESCRIPTIONS['dart-create']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "template": {
                "type": "string",
                "enum": CREATE_TEMPLATES,
                "default": DEFAULT_CREATE_TEMPLATE,
                "description": "Template to use for project generation",
            },
            "projectName": {"type": "string", "description": "Name of the project to create"},
            "output": {
                "type": "string",
                "description": "Directory in which to create the project directory",
            },
            "options": _options("Additional project creation options"),
        },
        "required": ["projectName"],
        "additionalProperties": False,
    },
)

DART_DOC = types.Tool(
    name="dart-doc",
    description=f"{TOOL_DESCRIPTIONS['dart-doc']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Directory containing the Dart package to document"},
            "output": {"type": "string", "description": "Output directory for the generated documentation"},
            "options": _options("Additional documentation options"),
        },
        "additionalProperties": False,
    },
)

DART_FIX = types.Tool(
    name="dart-fix",
    description=f"{TOOL_DESCRIPTIONS['dart-fix']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Directory or file to apply fixes to"},
            "apply": {
                "type": "boolean",
                "default": True,
                "description": "Whether to apply the suggested fixes (false runs a dry run)",
            },
            "options": _options("Additional fix options"),
        },
        "additionalProperties": False,
    },
)

DART_FORMAT = types.Tool(
    name="dart-format",
    description=f"{TOOL_DESCRIPTIONS['dart-format']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "paths": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Files or directories to format",
            },
            "setExitIfChanged": {
                "type": "boolean",
                "default": False,
                "description": "Return exit code 1 if there are any formatting changes",
            },
            "options": _options("Additional format options"),
        },
        "required": ["paths"],
        "additionalProperties": False,
    },
)

DART_INFO = types.Tool(
    name="dart-info",
    description=TOOL_DESCRIPTIONS["dart-info"],
    inputSchema={
        "type": "object",
        "properties": {
            "options": _options("Additional info options"),
        },
        "additionalProperties": False,
    },
)

DART_PACKAGE = types.Tool(
    name="dart-package",
    description=f"{TOOL_DESCRIPTIONS['dart-package']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "enum": PUB_COMMANDS,
                "description": "Pub subcommand to execute",
            },
            "args": _options("Arguments for the pub subcommand"),
            "workingDir": {"type": "string", "description": "Working directory for the command"},
        },
        "required": ["command"],
        "additionalProperties": False,
    },
)

DART_RUN = types.Tool(
    name="dart-run",
    description=f"{TOOL_DESCRIPTIONS['dart-run']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "script": {"type": "string", "description": "Path to the Dart script to run"},
            "args": _options("Arguments to pass to the script"),
            "workingDir": {"type": "string", "description": "Working directory for the command"},
        },
        "required": ["script"],
        "additionalProperties": False,
    },
)

DART_TEST = types.Tool(
    name="dart-test",
    description=f"{TOOL_DESCRIPTIONS['dart-test']}. {_PATH_NOTE}",
    inputSchema={
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "Path to the test file or directory"},
            "options": _options("Additional test options"),
            "workingDir": {"type": "string", "description": "Working directory for the command"},
        },
        "additionalProperties": False,
    },
)

DART_TOOLS: List[types.Tool] = [
    DART_ANALYZE,
    DART_COMPILE,
    DART_CREATE,
    DART_DOC,
    DART_FIX,
    DART_FORMAT,
    DART_INFO,
    DART_PACKAGE,
    DART_RUN,
    DART_TEST,
]

TOOLS_BY_NAME: Dict[str, types.Tool] = {tool.name: tool for tool in DART_TOOLS}
