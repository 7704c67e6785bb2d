"""Configuration loader for omni_agent.

Reads YAML configuration file and validates it using Pydantic models.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from omni_agent.cpi.config_store import default_cpi_path
from omni_agent.models import AgentConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yml"


def load_config(config_path: Optional[str] = None) -> AgentConfig:
    """Load and validate configuration from YAML file.

    Environment variables HOST, PORT and OMNI_CPI_FILE override the file.

    Args:
        config_path: Path to config file. If None, reads from CONFIG_FILE
            environment variable or defaults to 'config.yml' in current directory.
            A missing default file yields the built-in defaults.

    Returns:
        Validated AgentConfig object.

    Raises:
        FileNotFoundError: If an explicitly requested config file does not exist.
        ValidationError: If config file does not match expected schema.
        yaml.YAMLError: If config file is not valid YAML.
    """
    explicit = config_path is not None or "CONFIG_FILE" in os.environ
    if config_path is None:
        config_path = os.getenv("CONFIG_FILE", DEFAULT_CONFIG_FILE)

    config_file = Path(config_path)

    if config_file.exists():
        logger.info(f"Loading configuration from {config_path}")
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML: {e}")
            raise
    elif explicit:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    else:
        logger.info(f"No {config_path} found, using default configuration")
        data = None

    if data is None:
        data = {}

    try:
        config = AgentConfig(**data)
    except ValidationError as e:
        logger.error(f"Configuration validation failed: {e}")
        raise

    return _apply_env_overrides(config)


def _apply_env_overrides(config: AgentConfig) -> AgentConfig:
    host = os.getenv("HOST")
    if host:
        config.host = host

    port = os.getenv("PORT")
    if port:
        config.port = int(port)

    cpi_file = os.getenv("OMNI_CPI_FILE")
    if cpi_file:
        config.cpi.path = cpi_file

    if config.cpi.path is None:
        config.cpi.path = str(default_cpi_path())

    return config


def configure_logging(level: str) -> None:
    """Apply the configured level to the root logger and the agent's loggers."""
    logging.getLogger().setLevel(level)
    logging.getLogger("omni_agent").setLevel(level)
