"""
Subprocess runner for the ``dart`` toolchain binary.

Every tool call spawns exactly one ``dart <subcommand> ...`` process and waits
for it. Failures of any kind come back as a DartResult whose ``stderr`` is
non-empty; nothing raises past ``run_dart_command`` except cancellation, which
is only re-raised once the process has exited.
"""

import asyncio
import dataclasses
import logging
import os
import shlex
import shutil
from typing import List, Optional, Sequence

from ..config import get_config

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class DartResult:
    """Captured outcome of one ``dart`` invocation."""
    stdout: str
    stderr: str
    exit_code: Optional[int] = None

    @property
    def failed(self) -> bool:
        return bool(self.stderr)

    @property
    def output(self) -> str:
        """The text shown to the caller: stdout when there is any, else stderr."""
        return self.stdout or self.stderr


def build_command(executable: str, subcommand: str, args: Optional[Sequence[str]] = None) -> List[str]:
    return [executable, subcommand, *(args or [])]


def _locate_executable(executable: str) -> Optional[str]:
    if os.path.dirname(executable):
        return executable if os.path.exists(executable) else None
    return shutil.which(executable)


async def _communicate_to_completion(process: asyncio.subprocess.Process, subcommand: str):
    """Collect the process output; a cancelled caller still waits for the child to exit."""
    communicate = asyncio.ensure_future(process.communicate())
    try:
        return await asyncio.shield(communicate)
    except asyncio.CancelledError:
        logger.warning("dart %s cancelled; waiting for process %s to exit", subcommand, process.pid)
        await asyncio.shield(communicate)
        raise


def _spawn_failure(message: str) -> DartResult:
    logger.error(message)
    return DartResult(stdout="", stderr=message, exit_code=None)


async def run_dart_command(
    subcommand: str,
    args: Optional[Sequence[str]] = None,
    cwd: Optional[str] = None,
    executable: Optional[str] = None,
) -> DartResult:
    """
    Executes ``dart <subcommand> <args...>`` as an asynchronous subprocess.

    Args:
        subcommand: The toolchain subcommand, e.g. ``"analyze"``.
        args: Arguments in the order the subcommand expects them.
        cwd: Working directory for the process (default: current directory).
        executable: Binary to run instead of the configured one.

    Returns:
        A DartResult. On a clean run stdout and stderr are returned exactly as
        captured, whatever the exit code. A non-zero exit with an empty stderr
        gets a description of the failure as stderr. If the process could not
        be started, stdout is empty and stderr describes why.
    """
    executable = executable or get_config().dart_executable
    cmd_list = build_command(executable, subcommand, args)
    command_str = shlex.join(cmd_list)
    logger.info("Running dart command: %s", command_str)
    logger.debug("Working directory: %s", cwd or os.getcwd())

    resolved_executable = _locate_executable(executable)
    if not resolved_executable:
        return _spawn_failure(
            f"Dart executable '{executable}' not found. Install the Dart SDK or set DART_MCP_DART_EXECUTABLE."
        )
    cmd_list[0] = resolved_executable

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd_list,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
        stdout_bytes, stderr_bytes = await _communicate_to_completion(process, subcommand)
    except FileNotFoundError as e:
        missing = e.filename or resolved_executable
        return _spawn_failure(f"Failed to start '{command_str}': no such file or directory: {missing}")
    except OSError as e:
        return _spawn_failure(f"Failed to start '{command_str}': {e}")
    except Exception as e:
        logger.exception("An unexpected error occurred while running dart command: %s", command_str)
        return DartResult(stdout="", stderr=f"Unexpected error: {e}", exit_code=None)

    # Decode the output, handling potential encoding issues
    stdout = stdout_bytes.decode("utf-8", errors="replace")
    stderr = stderr_bytes.decode("utf-8", errors="replace")
    exit_code = process.returncode

    if exit_code == 0:
        logger.info("dart %s succeeded (exit code 0)", subcommand)
        if stderr:
            logger.warning("dart %s wrote to stderr despite succeeding:\n%s", subcommand, stderr)
        return DartResult(stdout=stdout, stderr=stderr, exit_code=exit_code)

    logger.warning("dart %s failed (exit code %d)", subcommand, exit_code)
    if not stderr:
        stderr = f"Command failed with exit code {exit_code}: {command_str}"
    return DartResult(stdout=stdout, stderr=stderr, exit_code=exit_code)
