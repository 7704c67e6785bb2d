"""Global state management and FastAPI dependencies for omni_agent."""

from typing import Optional

from fastapi import HTTPException, status

from omni_agent.cpi import CpiEngine
from omni_agent.docker_client import DockerClient
from omni_agent.models import AgentConfig

# Global state (private)
_config: Optional[AgentConfig] = None
_cpi_engine: Optional[CpiEngine] = None
_docker_client: Optional[DockerClient] = None


# State setters (for lifespan.py)
def set_config(config: Optional[AgentConfig]):
    """Set the global configuration."""
    global _config
    _config = config


def set_cpi_engine(engine: Optional[CpiEngine]):
    """Set the global CPI engine."""
    global _cpi_engine
    _cpi_engine = engine


def set_docker_client(client: Optional[DockerClient]):
    """Set the global Docker client."""
    global _docker_client
    _docker_client = client


# FastAPI Dependencies (for endpoints)
def get_config() -> AgentConfig:
    """Get loaded configuration.

    Raises:
        HTTPException: If configuration is not loaded.
    """
    if _config is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Configuration not loaded",
        )
    return _config


def get_cpi_engine() -> CpiEngine:
    """Get the CPI engine.

    Raises:
        HTTPException: If the engine is not initialized.
    """
    if _cpi_engine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="CPI engine not initialized",
        )
    return _cpi_engine


def get_docker_client() -> DockerClient:
    """Get Docker client.

    Raises:
        HTTPException: If Docker client is not available.
    """
    if _docker_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Docker client not available. Ensure Docker socket is mounted.",
        )
    return _docker_client


def get_docker_client_or_none() -> Optional[DockerClient]:
    """Get Docker client without raising HTTPException (for health checks)."""
    return _docker_client
