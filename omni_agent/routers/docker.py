"""Docker endpoints router."""

import logging

import docker
from fastapi import APIRouter, Depends, HTTPException, status

from omni_agent.models import (
    DockerContainerInfo,
    DockerContainerListResponse,
    DockerContainerLogsResponse,
    DockerContainerStats,
    DockerContainerStatus,
    DockerImageListResponse,
    DockerVersionResponse,
)
from omni_agent.state import get_docker_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/docker", tags=["docker"])


def _not_found(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Docker container '{name}' not found",
    )


def _unavailable(message: str, e: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"{message}: {str(e)}",
    )


@router.get("/containers", response_model=DockerContainerListResponse)
async def list_docker_containers(
    all: bool = False,
    docker_client=Depends(get_docker_client),
) -> DockerContainerListResponse:
    """Get list of all Docker containers."""
    try:
        containers = docker_client.list_containers(all=all)
        return DockerContainerListResponse(
            containers=[DockerContainerInfo(**container) for container in containers]
        )
    except docker.errors.DockerException as e:
        logger.error(f"Failed to list Docker containers: {e}")
        raise _unavailable("Failed to list containers", e)


@router.get("/containers/{name}/status", response_model=DockerContainerStatus)
async def get_docker_container_status(
    name: str,
    docker_client=Depends(get_docker_client),
) -> DockerContainerStatus:
    """Get detailed status of a Docker container."""
    try:
        return DockerContainerStatus(**docker_client.get_container_status(name))
    except docker.errors.NotFound:
        raise _not_found(name)
    except docker.errors.DockerException as e:
        logger.error(f"Failed to get container status for '{name}': {e}")
        raise _unavailable("Failed to get container status", e)


@router.get("/containers/{name}/logs", response_model=DockerContainerLogsResponse)
async def get_docker_container_logs(
    name: str,
    tail: int = 100,
    docker_client=Depends(get_docker_client),
) -> DockerContainerLogsResponse:
    """Get logs from a Docker container."""
    try:
        logs = docker_client.get_container_logs(name, tail=tail)
        return DockerContainerLogsResponse(container=name, logs=logs, tail=tail)
    except docker.errors.NotFound:
        raise _not_found(name)
    except docker.errors.DockerException as e:
        logger.error(f"Failed to get logs for container '{name}': {e}")
        raise _unavailable("Failed to get container logs", e)


@router.get("/containers/{name}/stats", response_model=DockerContainerStats)
async def get_docker_container_stats(
    name: str,
    docker_client=Depends(get_docker_client),
) -> DockerContainerStats:
    """Get one CPU, memory and network sample for a Docker container."""
    try:
        return DockerContainerStats(**docker_client.get_container_stats(name))
    except docker.errors.NotFound:
        raise _not_found(name)
    except docker.errors.DockerException as e:
        logger.error(f"Failed to get stats for container '{name}': {e}")
        raise _unavailable("Failed to get container stats", e)


@router.get("/images", response_model=DockerImageListResponse)
async def list_docker_images(docker_client=Depends(get_docker_client)) -> DockerImageListResponse:
    """Get tags of all local Docker images."""
    try:
        return DockerImageListResponse(images=docker_client.list_images())
    except docker.errors.DockerException as e:
        logger.error(f"Failed to list Docker images: {e}")
        raise _unavailable("Failed to list images", e)


@router.get("/version", response_model=DockerVersionResponse)
async def get_docker_version(docker_client=Depends(get_docker_client)) -> DockerVersionResponse:
    """Get Docker engine version."""
    try:
        return DockerVersionResponse(**docker_client.get_version())
    except docker.errors.DockerException as e:
        logger.error(f"Failed to get Docker version: {e}")
        raise _unavailable("Failed to get Docker version", e)
