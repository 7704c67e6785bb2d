"""CPI execution engine.

Resolves a command to its configured action, renders the templates with the
command's parameters and runs them through the host shell:

1. the main command runs first; a non-zero exit stops everything;
2. post-exec commands run one by one in declared order, rendered against the
   same parameters; the first failure stops the chain (earlier steps are not
   rolled back);
3. on success the main command's stdout is the result.

The engine holds no mutable state, so ``execute`` may be called from any
number of threads at once. Nothing serializes two commands that target the
same container.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from omni_agent.cpi.commands import CpiCommandType, extract_params
from omni_agent.cpi.config_store import load_cpi_config
from omni_agent.cpi.errors import NonZeroExit, PostExecFailure
from omni_agent.cpi.executor import ProcessOutcome, run_shell
from omni_agent.cpi.template import render

logger = logging.getLogger(__name__)

Runner = Callable[[str], ProcessOutcome]


@dataclass(frozen=True)
class ExecutionResult:
    """Successful outcome of one CPI command."""

    tag: str
    command: str
    output: str

    def json(self) -> Any:
        """Parse the output as JSON.

        Raises:
            json.JSONDecodeError: If the output is not a single JSON document.
        """
        return json.loads(self.output)


class CpiEngine:
    """Runs CPI commands described by a JSON configuration file."""

    def __init__(
        self,
        config_path: Union[str, Path],
        runner: Optional[Runner] = None,
        max_concurrent: int = 4,
    ):
        """Initialize the engine.

        Args:
            config_path: Path to the CPI file. It is re-read for every command.
            runner: Callable executing one command line. Defaults to the host shell.
            max_concurrent: Upper bound on commands running at once through
                ``execute_async``.
        """
        self.config_path = Path(config_path)
        self.runner = runner or run_shell
        self.max_concurrent = max_concurrent
        self._slots: Optional[asyncio.Semaphore] = None

    def execute(self, command: CpiCommandType) -> ExecutionResult:
        """Run a command and its post-exec chain.

        Returns:
            ExecutionResult carrying the main command's stdout.

        Raises:
            ConfigNotFound, ConfigParseError: If the CPI file can't be used.
            ActionNotDefined: If the command's tag has no action.
            ProcessSpawnError, OutputDecodeError: If the shell can't run or its
                output isn't text.
            NonZeroExit: If the main command fails.
            PostExecFailure: If a post-exec command fails.
        """
        action = load_cpi_config(self.config_path).resolve(command.tag)
        params = extract_params(command)
        logger.info(f"Executing CPI action '{command.tag}'")

        command_line = render(action.command, params)
        outcome = self.runner(command_line)
        if not outcome.success:
            logger.error(
                f"CPI action '{command.tag}' exited with {outcome.exit_status}: {outcome.stderr.strip()}"
            )
            raise NonZeroExit(outcome.stderr, outcome.exit_status)

        for index, template in enumerate(action.post_exec):
            post_outcome = self.runner(render(template, params))
            if not post_outcome.success:
                logger.error(
                    f"Post-exec step {index} of '{command.tag}' exited with "
                    f"{post_outcome.exit_status}: {post_outcome.stderr.strip()}"
                )
                raise PostExecFailure(index, post_outcome.stderr, post_outcome.exit_status)

        if action.post_exec:
            logger.debug(f"Post-exec commands of '{command.tag}' executed successfully")

        return ExecutionResult(tag=command.tag, command=command_line, output=outcome.stdout)

    async def execute_async(self, command: CpiCommandType) -> ExecutionResult:
        """Run ``execute`` on a worker thread, bounded by ``max_concurrent``.

        The awaiting task is suspended until the subprocess chain finishes;
        there is no timeout and cancelling the task does not stop the process.
        """
        if self._slots is None:
            self._slots = asyncio.Semaphore(self.max_concurrent)
        async with self._slots:
            return await asyncio.to_thread(self.execute, command)
