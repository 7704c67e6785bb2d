"""Routers for omni agent API."""

from omni_agent.routers import containers, docker, root

__all__ = ["containers", "docker", "root"]
