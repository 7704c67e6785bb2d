"""Command Provider Interface: config-driven shell command execution."""

from omni_agent.cpi.commands import (
    COMMAND_TYPES,
    CpiCommandBase,
    CpiCommandType,
    CreateContainer,
    DeleteContainer,
    InspectContainer,
    ListContainers,
    RestartContainer,
    StartContainer,
    StopContainer,
    command_from_tag,
    extract_params,
)
from omni_agent.cpi.config_store import (
    ActionConfig,
    ActionConfigSet,
    default_cpi_path,
    load_cpi_config,
)
from omni_agent.cpi.errors import (
    ActionNotDefined,
    ConfigNotFound,
    ConfigParseError,
    CpiError,
    NonZeroExit,
    OutputDecodeError,
    PostExecFailure,
    ProcessSpawnError,
)
from omni_agent.cpi.executor import ProcessOutcome, run_shell
from omni_agent.cpi.orchestrator import CpiEngine, ExecutionResult
from omni_agent.cpi.template import render

__all__ = [
    "COMMAND_TYPES",
    "ActionConfig",
    "ActionConfigSet",
    "ActionNotDefined",
    "ConfigNotFound",
    "ConfigParseError",
    "CpiCommandBase",
    "CpiCommandType",
    "CpiEngine",
    "CpiError",
    "CreateContainer",
    "DeleteContainer",
    "ExecutionResult",
    "InspectContainer",
    "ListContainers",
    "NonZeroExit",
    "OutputDecodeError",
    "PostExecFailure",
    "ProcessOutcome",
    "ProcessSpawnError",
    "RestartContainer",
    "StartContainer",
    "StopContainer",
    "command_from_tag",
    "default_cpi_path",
    "extract_params",
    "load_cpi_config",
    "render",
    "run_shell",
]
