"""Shell execution of rendered CPI commands."""

import logging
import os
import subprocess
from dataclasses import dataclass

from omni_agent.cpi.errors import OutputDecodeError, ProcessSpawnError

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


@dataclass(frozen=True)
class ProcessOutcome:
    """Exit status and decoded output of a finished command."""

    exit_status: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.exit_status == 0


def shell_argv(command_line: str) -> list[str]:
    """Interpreter invocation for the host platform."""
    if IS_WINDOWS:
        return ["cmd", "/C", command_line]
    return ["sh", "-c", command_line]


def _decode(data: bytes, stream: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise OutputDecodeError(f"failed to parse {stream} as UTF-8: {e}") from e


def run_shell(command_line: str) -> ProcessOutcome:
    """Run one command line through the host shell and wait for it to finish.

    There is no timeout: a command that never exits blocks the caller
    indefinitely.

    Raises:
        ProcessSpawnError: If the shell itself cannot be started.
        OutputDecodeError: If stdout or stderr is not valid UTF-8.
    """
    argv = shell_argv(command_line)
    logger.debug(f"Executing: {argv}")
    try:
        completed = subprocess.run(argv, capture_output=True)
    except OSError as e:
        logger.error(f"Failed to launch '{argv[0]}': {e}")
        raise ProcessSpawnError(f"failed to launch '{argv[0]}': {e}") from e

    return ProcessOutcome(
        exit_status=completed.returncode,
        stdout=_decode(completed.stdout, "stdout"),
        stderr=_decode(completed.stderr, "stderr"),
    )
