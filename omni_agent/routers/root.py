"""Root and health endpoints router."""

from fastapi import APIRouter, Depends

from omni_agent import __version__
from omni_agent.models import HealthResponse
from omni_agent.state import get_config, get_docker_client_or_none

router = APIRouter(tags=["root"])


@router.get(
    "/",
    summary="API Information",
    description="Get API information and links to documentation",
    response_description="API metadata and documentation links",
)
async def root():
    """Root endpoint with API information and documentation links.

    Returns:
        API metadata including version and links to interactive documentation.
    """
    return {
        "message": "Omni Agent API",
        "version": __version__,
        "docs": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_schema": "/openapi.json",
        },
        "description": "Lightweight agent for managing Docker containers",
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report agent health, Docker reachability and the CPI file in use",
)
async def health(config=Depends(get_config)) -> HealthResponse:
    docker_client = get_docker_client_or_none()
    return HealthResponse(
        version=__version__,
        docker=docker_client is not None and docker_client.ping(),
        cpi_path=str(config.cpi.path),
    )
