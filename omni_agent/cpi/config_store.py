"""Loader for CPI configuration files.

A CPI file maps command tags to shell command templates:

    {
      "actions": {
        "start_container": {
          "command": "docker start {name}",
          "post_exec": ["docker inspect {name}"]
        }
      }
    }

The file is read on every call to ``load_cpi_config`` so edits take effect on
the next command without restarting the agent.
"""

import json
import logging
import platform
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError

from omni_agent.cpi.errors import ActionNotDefined, ConfigNotFound, ConfigParseError

logger = logging.getLogger(__name__)

CPI_DIR = Path("CPIs")

# Per-platform CPI files; anything not listed uses the POSIX file.
PLATFORM_CPI_FILES = {
    "Windows": "cpi-container-windows.json",
}
DEFAULT_CPI_FILE = "cpi-container.json"


class ActionConfig(BaseModel):
    """One action of a CPI file."""

    command: str = Field(..., description="Main command template")
    post_exec: list[str] = Field(
        default_factory=list,
        description="Templates run in order after the main command succeeds",
    )


class ActionConfigSet(BaseModel):
    """All actions of a CPI file, keyed by command tag."""

    actions: dict[str, ActionConfig]

    def resolve(self, tag: str) -> ActionConfig:
        """Get the action configured for a command tag.

        Raises:
            ActionNotDefined: If the tag has no entry under ``actions``.
        """
        try:
            return self.actions[tag]
        except KeyError:
            raise ActionNotDefined(tag) from None


def default_cpi_path(system: Optional[str] = None) -> Path:
    """Conventional CPI file for the current (or given) platform."""
    system = system or platform.system()
    return CPI_DIR / PLATFORM_CPI_FILES.get(system, DEFAULT_CPI_FILE)


def load_cpi_config(path: Union[str, Path]) -> ActionConfigSet:
    """Read and validate a CPI file.

    Args:
        path: Path to the CPI JSON file.

    Returns:
        Validated ActionConfigSet.

    Raises:
        ConfigNotFound: If the file cannot be read.
        ConfigParseError: If the file is not JSON or lacks a valid ``actions`` object.
    """
    cpi_file = Path(path)
    try:
        content = cpi_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read CPI file {cpi_file}: {e}")
        raise ConfigNotFound(str(cpi_file), str(e)) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse CPI file {cpi_file}: {e}")
        raise ConfigParseError(f"failed to deserialize json in {cpi_file}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("actions"), dict):
        raise ConfigParseError(f"'actions' was not defined in {cpi_file}")

    try:
        return ActionConfigSet.model_validate(data)
    except ValidationError as e:
        logger.error(f"CPI file validation failed for {cpi_file}: {e}")
        raise ConfigParseError(f"invalid action definition in {cpi_file}: {e}") from e
