"""Container lifecycle endpoints backed by the CPI engine.

Each endpoint builds a CPI command and hands it to the engine; the shell
command that actually runs comes from the CPI file. CPI failures propagate to
the application's ``CpiError`` handler.
"""

import json
import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Path

from omni_agent.cpi import (
    CpiCommandType,
    CpiEngine,
    CreateContainer,
    DeleteContainer,
    InspectContainer,
    ListContainers,
    RestartContainer,
    StartContainer,
    StopContainer,
)
from omni_agent.cpi.commands import CONTAINER_NAME_PATTERN
from omni_agent.models import CpiActionResponse, DeployContainerRequest
from omni_agent.state import get_cpi_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/containers", tags=["containers"])

ContainerNameParam = Annotated[str, Path(pattern=CONTAINER_NAME_PATTERN, description="Container name")]


def parse_output(output: str) -> Optional[Any]:
    """Parse command output as JSON.

    Accepts a single JSON document or one JSON document per line (the format
    of ``docker ps --format '{{json .}}'``). Returns None for anything else.
    """
    text = output.strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass
    try:
        return [json.loads(line) for line in text.splitlines() if line.strip()]
    except json.JSONDecodeError:
        return None


async def _run(engine: CpiEngine, command: CpiCommandType, name: Optional[str] = None) -> CpiActionResponse:
    result = await engine.execute_async(command)
    return CpiActionResponse(
        action=result.tag,
        name=name,
        command=result.command,
        output=result.output,
        data=parse_output(result.output),
    )


@router.get(
    "",
    response_model=CpiActionResponse,
    summary="List containers",
    description="Run the 'list_containers' CPI action",
)
async def list_containers(engine=Depends(get_cpi_engine)) -> CpiActionResponse:
    return await _run(engine, ListContainers())


@router.post(
    "/deploy",
    response_model=CpiActionResponse,
    summary="Deploy a container",
    description="Create and run a container through the 'create_container' CPI action",
)
async def deploy_container(
    request: DeployContainerRequest,
    engine=Depends(get_cpi_engine),
) -> CpiActionResponse:
    """Deploy a container from an image.

    Example Request:
        ```json
        {
          "image": "nginx:latest",
          "name": "web",
          "ports": ["80:80"],
          "env": {"MODE": "prod"}
        }
        ```
    """
    logger.info(f"Deploying container '{request.name}' from image '{request.image}'")
    command = CreateContainer(
        image=request.image,
        name=request.name,
        ports=request.ports,
        env=request.env,
    )
    return await _run(engine, command, name=request.name)


@router.get(
    "/{name}",
    response_model=CpiActionResponse,
    summary="Inspect a container",
    description="Run the 'inspect_container' CPI action",
)
async def inspect_container(
    name: ContainerNameParam, engine=Depends(get_cpi_engine)
) -> CpiActionResponse:
    return await _run(engine, InspectContainer(name=name), name=name)


@router.post("/{name}/start", response_model=CpiActionResponse, summary="Start a container")
async def start_container(
    name: ContainerNameParam, engine=Depends(get_cpi_engine)
) -> CpiActionResponse:
    return await _run(engine, StartContainer(name=name), name=name)


@router.post("/{name}/stop", response_model=CpiActionResponse, summary="Stop a container")
async def stop_container(
    name: ContainerNameParam, engine=Depends(get_cpi_engine)
) -> CpiActionResponse:
    return await _run(engine, StopContainer(name=name), name=name)


@router.post("/{name}/restart", response_model=CpiActionResponse, summary="Restart a container")
async def restart_container(
    name: ContainerNameParam, engine=Depends(get_cpi_engine)
) -> CpiActionResponse:
    return await _run(engine, RestartContainer(name=name), name=name)


@router.post("/{name}/delete", response_model=CpiActionResponse, summary="Delete a container")
async def delete_container(
    name: ContainerNameParam, engine=Depends(get_cpi_engine)
) -> CpiActionResponse:
    return await _run(engine, DeleteContainer(name=name), name=name)
