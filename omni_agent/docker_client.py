"""Docker client for container queries."""

import logging
import time
from typing import Optional

import docker
from docker.errors import DockerException, NotFound

logger = logging.getLogger(__name__)


def _image_tag(container) -> str:
    tags = container.image.tags if container.image else []
    if tags:
        return tags[0]
    return container.attrs.get("Config", {}).get("Image", "")


def _published_ports(container) -> list[str]:
    """Format port bindings as ``host_ip:host_port->port/proto``."""
    ports = container.attrs.get("NetworkSettings", {}).get("Ports") or {}
    published = []
    for container_port, bindings in ports.items():
        if not bindings:
            published.append(container_port)
            continue
        for binding in bindings:
            published.append(f"{binding.get('HostIp', '')}:{binding.get('HostPort', '')}->{container_port}")
    return published


def _parse_env(env: Optional[list[str]]) -> dict[str, str]:
    parsed = {}
    for entry in env or []:
        key, _, value = entry.partition("=")
        parsed[key] = value
    return parsed


def cpu_percent(stats: dict) -> float:
    """CPU usage percentage from one Docker stats sample."""
    cpu = stats.get("cpu_stats", {})
    precpu = stats.get("precpu_stats", {})
    cpu_delta = cpu.get("cpu_usage", {}).get("total_usage", 0) - precpu.get(
        "cpu_usage", {}
    ).get("total_usage", 0)
    system_delta = cpu.get("system_cpu_usage", 0) - precpu.get("system_cpu_usage", 0)
    online_cpus = cpu.get("online_cpus") or len(cpu.get("cpu_usage", {}).get("percpu_usage") or []) or 1
    if cpu_delta <= 0 or system_delta <= 0:
        return 0.0
    return cpu_delta / system_delta * online_cpus * 100.0


class DockerClient:
    """Client for interacting with Docker daemon via Docker socket."""

    def __init__(self, base_url: Optional[str] = None):
        """Initialize Docker client.

        Args:
            base_url: Docker daemon socket URL. Defaults to the environment
                (DOCKER_HOST or the platform's local socket).
        """
        try:
            if base_url:
                self.client = docker.DockerClient(base_url=base_url)
            else:
                self.client = docker.from_env()
            # Test connection
            self.client.ping()
            logger.info("Docker client initialized successfully")
        except DockerException as e:
            logger.error(f"Failed to initialize Docker client: {e}")
            raise

    def ping(self) -> bool:
        """Check whether the daemon answers."""
        try:
            return bool(self.client.ping())
        except DockerException as e:
            logger.warning(f"Docker daemon ping failed: {e}")
            return False

    def list_containers(self, all: bool = False) -> list[dict]:
        """List all containers.

        Args:
            all: If True, include stopped containers.

        Returns:
            List of container dictionaries with basic info.
        """
        try:
            containers = self.client.containers.list(all=all)
            return [
                {
                    "id": container.id,
                    "name": container.name,
                    "status": container.status,
                    "image": _image_tag(container),
                    "created": container.attrs["Created"],
                    "ports": _published_ports(container),
                }
                for container in containers
            ]
        except DockerException as e:
            logger.error(f"Failed to list containers: {e}")
            raise

    def get_container(self, container_name: str):
        """Get a container by name or ID.

        Raises:
            NotFound: If container not found.
        """
        try:
            return self.client.containers.get(container_name)
        except NotFound:
            logger.warning(f"Container '{container_name}' not found")
            raise
        except DockerException as e:
            logger.error(f"Failed to get container '{container_name}': {e}")
            raise

    def get_container_status(self, container_name: str) -> dict:
        """Get detailed status of a container.

        Args:
            container_name: Container name or ID.

        Returns:
            Dictionary with container status information.

        Raises:
            NotFound: If container not found.
        """
        try:
            container = self.get_container(container_name)
            container.reload()
            state = container.attrs["State"]

            return {
                "id": container.id,
                "name": container.name,
                "status": container.status,
                "state": state["Status"],
                "running": container.status == "running",
                "restarting": state.get("Restarting", False),
                "paused": state.get("Paused", False),
                "image": _image_tag(container),
                "created": container.attrs["Created"],
                "started_at": state.get("StartedAt", ""),
                "finished_at": state.get("FinishedAt", ""),
                "exit_code": state.get("ExitCode"),
                "env": _parse_env(container.attrs.get("Config", {}).get("Env")),
            }
        except NotFound:
            raise
        except DockerException as e:
            logger.error(f"Failed to get container status for '{container_name}': {e}")
            raise

    def get_container_logs(self, container_name: str, tail: int = 100) -> str:
        """Get the last ``tail`` lines of container logs.

        Raises:
            NotFound: If container not found.
        """
        try:
            container = self.get_container(container_name)
            logs = container.logs(tail=tail, timestamps=True)
            return logs.decode("utf-8", errors="replace") if isinstance(logs, bytes) else logs
        except NotFound:
            raise
        except DockerException as e:
            logger.error(f"Failed to get logs for container '{container_name}': {e}")
            raise

    def get_container_stats(self, container_name: str) -> dict:
        """Take one resource usage sample of a container.

        Raises:
            NotFound: If container not found.
        """
        try:
            container = self.get_container(container_name)
            stats = container.stats(stream=False)
        except NotFound:
            raise
        except DockerException as e:
            logger.error(f"Failed to get stats for container '{container_name}': {e}")
            raise

        memory = stats.get("memory_stats", {})
        networks = stats.get("networks") or {}
        return {
            "id": container.id,
            "name": container.name,
            "timestamp": int(time.time()),
            "cpu_usage": cpu_percent(stats),
            "memory_usage": memory.get("usage", 0),
            "memory_limit": memory.get("limit", 0),
            "network_rx_bytes": sum(n.get("rx_bytes", 0) for n in networks.values()),
            "network_tx_bytes": sum(n.get("tx_bytes", 0) for n in networks.values()),
        }

    def list_images(self) -> list[str]:
        """List tags of all local images."""
        try:
            return [tag for image in self.client.images.list() for tag in image.tags]
        except DockerException as e:
            logger.error(f"Failed to list images: {e}")
            raise

    def get_version(self) -> dict:
        """Get Docker engine version information."""
        try:
            version = self.client.version()
        except DockerException as e:
            logger.error(f"Failed to get Docker version: {e}")
            raise
        return {
            "version": version.get("Version", ""),
            "api_version": version.get("ApiVersion", ""),
            "os": version.get("Os", ""),
            "arch": version.get("Arch", ""),
        }

    def close(self) -> None:
        """Close the Docker client connection."""
        if hasattr(self, "client"):
            self.client.close()
