"""FastAPI application for the omni agent REST API."""

import logging

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from omni_agent import __version__
from omni_agent.cpi import ActionNotDefined, CpiError, NonZeroExit, PostExecFailure
from omni_agent.lifespan import lifespan
from omni_agent.models import ErrorResponse
from omni_agent.routers import containers, docker, root

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Omni Agent API",
    description="""
    REST API for managing Docker containers on this host.

    Lifecycle operations are executed through the Command Provider Interface
    (CPI): a JSON file maps every operation to a shell command template, so the
    same agent can drive Docker on Linux or Docker Desktop on Windows by
    swapping the file.

    ## Features

    * Deploy, start, stop, restart, delete, inspect and list containers (CPI)
    * Docker container status, logs and resource stats
    * Local image listing

    ## Documentation

    * **Swagger UI**: Available at `/docs` (interactive API testing)
    * **ReDoc**: Available at `/redoc` (alternative documentation)
    * **OpenAPI Schema**: Available at `/openapi.json`
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    tags_metadata=[
        {
            "name": "root",
            "description": "Root endpoint, API information and health",
        },
        {
            "name": "containers",
            "description": "Container lifecycle operations executed through the CPI file.",
        },
        {
            "name": "docker",
            "description": "Docker daemon queries. List containers, get status, logs, stats and images.",
        },
    ],
)

# Add CORS middleware to allow requests from the UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(root.router)
app.include_router(containers.router)
app.include_router(docker.router)


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Custom exception handler for HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.detail or "Unknown error").model_dump(),
    )


@app.exception_handler(CpiError)
async def cpi_exception_handler(request, exc: CpiError):
    """Map CPI engine failures to HTTP responses.

    An unknown action is a bad request; every other failure is a server error.
    """
    if isinstance(exc, ActionNotDefined):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    detail = None
    if isinstance(exc, NonZeroExit):
        detail = f"exit status {exc.exit_status}"
    elif isinstance(exc, PostExecFailure):
        detail = f"post-exec step {exc.index}, exit status {exc.exit_status}"

    logger.error(f"CPI command failed for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=str(exc).strip() or type(exc).__name__, detail=detail).model_dump(),
    )
