"""Lifespan management for FastAPI app."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from omni_agent.config import configure_logging, load_config
from omni_agent.cpi import CpiEngine
from omni_agent.docker_client import DockerClient
from omni_agent.state import (
    get_docker_client_or_none,
    set_config,
    set_cpi_engine,
    set_docker_client,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Loads configuration and initializes the CPI engine and Docker client on startup.
    Cleans up on shutdown.
    """
    # Startup
    logger.info("Starting omni agent...")
    try:
        config = load_config()
        configure_logging(config.log_level)
        set_config(config)

        engine = CpiEngine(config.cpi.path, max_concurrent=config.cpi.max_concurrent_commands)
        set_cpi_engine(engine)
        logger.info(f"Using CPI file {config.cpi.path}")

        # Docker SDK is optional: CPI commands only need the docker executable
        if config.docker.enabled:
            try:
                set_docker_client(DockerClient(base_url=config.docker.base_url))
            except Exception as e:
                logger.warning(f"Docker client initialization failed (Docker operations will be unavailable): {e}")
                set_docker_client(None)

        logger.info(f"Omni agent initialized, listening on {config.host}:{config.port}")
    except Exception as e:
        logger.error(f"Failed to initialize omni agent: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down omni agent...")
    docker_client = get_docker_client_or_none()
    if docker_client:
        docker_client.close()
    set_docker_client(None)
    set_cpi_engine(None)
    set_config(None)
    logger.info("Omni agent shut down")
