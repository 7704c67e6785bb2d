"""Pydantic models for omni_agent API and configuration."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from omni_agent.cpi.commands import ContainerName, EnvName, EnvValue, ImageRef, PortMapping


class CpiSettings(BaseModel):
    """CPI engine settings."""

    path: Optional[str] = Field(
        None, description="Path to the CPI JSON file. Defaults to the platform's file in ./CPIs"
    )
    max_concurrent_commands: int = Field(
        4, ge=1, description="Maximum number of CPI commands running at once"
    )


class DockerSettings(BaseModel):
    """Docker SDK settings."""

    enabled: bool = Field(True, description="Connect to the Docker daemon on startup")
    base_url: Optional[str] = Field(
        None,
        description="Docker daemon URL. Defaults to the environment (DOCKER_HOST or local socket)",
        examples=["unix://var/run/docker.sock"],
    )


class AgentConfig(BaseModel):
    """Root configuration model."""

    host: str = Field("0.0.0.0", description="Address the API listens on")
    port: int = Field(8081, description="Port the API listens on")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO", description="Logging level of the agent and uvicorn"
    )
    cpi: CpiSettings = Field(default_factory=CpiSettings)
    docker: DockerSettings = Field(default_factory=DockerSettings)


# API Request/Response Models


class DeployContainerRequest(BaseModel):
    """Request body for POST /containers/deploy."""

    image: ImageRef = Field(..., description="Image to run")
    name: ContainerName = Field(..., description="Container name")
    ports: list[PortMapping] = Field(
        default_factory=list, description="Port mappings (host:container)", examples=[["80:80"]]
    )
    env: dict[EnvName, EnvValue] = Field(
        default_factory=dict, description="Environment variables", examples=[{"MODE": "prod"}]
    )


class CpiActionResponse(BaseModel):
    """Response for CPI-backed container operations."""

    action: str = Field(..., description="CPI action tag", examples=["start_container"])
    name: Optional[str] = Field(None, description="Container name the action targeted")
    command: str = Field(..., description="Rendered main command", examples=["docker start web"])
    output: str = Field(..., description="Standard output of the main command")
    data: Optional[Any] = Field(
        None, description="Output parsed as JSON, when the output is JSON"
    )


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = Field("healthy", description="Agent status")
    version: str = Field(..., description="Agent version")
    docker: bool = Field(..., description="Whether the Docker daemon is reachable")
    cpi_path: str = Field(..., description="CPI file used for container operations")


# Docker Container Models


class DockerContainerInfo(BaseModel):
    """Docker container information."""

    id: str = Field(..., description="Container ID", examples=["abc123def456"])
    name: str = Field(..., description="Container name", examples=["web"])
    status: str = Field(..., description="Container status", examples=["running"])
    image: str = Field(..., description="Container image", examples=["nginx:latest"])
    created: str = Field(..., description="Container creation timestamp")
    ports: list[str] = Field(default_factory=list, description="Published ports", examples=[["0.0.0.0:80->80/tcp"]])


class DockerContainerStatus(BaseModel):
    """Detailed Docker container status."""

    id: str = Field(..., description="Container ID")
    name: str = Field(..., description="Container name")
    status: str = Field(..., description="Container status")
    state: str = Field(..., description="Container state (running, exited, etc.)")
    running: bool = Field(..., description="Whether container is running")
    restarting: bool = Field(..., description="Whether container is restarting")
    paused: bool = Field(..., description="Whether container is paused")
    image: str = Field(..., description="Container image")
    created: str = Field(..., description="Container creation timestamp")
    started_at: Optional[str] = Field(None, description="Container start timestamp")
    finished_at: Optional[str] = Field(None, description="Container finish timestamp")
    exit_code: Optional[int] = Field(None, description="Container exit code if stopped")
    env: dict[str, str] = Field(default_factory=dict, description="Container environment")


class DockerContainerListResponse(BaseModel):
    """Response for GET /docker/containers."""

    containers: list[DockerContainerInfo] = Field(..., description="List of Docker containers")


class DockerContainerLogsResponse(BaseModel):
    """Response for GET /docker/containers/{name}/logs."""

    container: str = Field(..., description="Container name")
    logs: str = Field(..., description="Container logs")
    tail: int = Field(..., description="Number of log lines returned")


class DockerContainerStats(BaseModel):
    """Response for GET /docker/containers/{name}/stats."""

    id: str = Field(..., description="Container ID")
    name: str = Field(..., description="Container name")
    timestamp: int = Field(..., description="Unix timestamp of the sample")
    cpu_usage: float = Field(..., description="CPU usage in percent of one host")
    memory_usage: int = Field(..., description="Memory usage in bytes")
    memory_limit: int = Field(..., description="Memory limit in bytes")
    network_rx_bytes: int = Field(..., description="Bytes received over all interfaces")
    network_tx_bytes: int = Field(..., description="Bytes sent over all interfaces")


class DockerImageListResponse(BaseModel):
    """Response for GET /docker/images."""

    images: list[str] = Field(..., description="Image tags", examples=[["nginx:latest"]])


class DockerVersionResponse(BaseModel):
    """Response for GET /docker/version."""

    version: str = Field(..., description="Docker engine version")
    api_version: str = Field(..., description="Docker API version")
    os: str = Field("", description="Daemon operating system")
    arch: str = Field("", description="Daemon architecture")
