"""
BIM OData Service - Main Application Entry Point.

FastAPI application exposing per-model BIM metadata as a flat,
queryable Elements collection under an OData-style service root.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import get_settings
from app.core.exceptions import ODataServiceException
from app.core.responses import create_error_response
from app.api.odata.router import router as odata_router
from app.api.v1.router import api_router
from app.services.metrics import MetricsMiddleware

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.PROJECT_NAME}")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    logger.info(f"Default project: {settings.DEFAULT_PROJECT_ID}")
    logger.info(f"Model fetch timeout: {settings.MODEL_FETCH_TIMEOUT}s")
    logger.info(f"OData service root: {settings.ODATA_PREFIX}/")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
## BIM OData Service

Read-only query layer over file-backed BIM model metadata.

### Features
- **Elements entity set**: every object of every model in a project as a flat record
- **Query options**: `$filter` (eq, contains, startswith), `$select`, `$top`, `$skip`
- **Partial failure tolerance**: models that fail to load are skipped
- **Pluggable storage**: local filesystem, S3/MinIO, Azure Blob
    """,
    version=__version__,
    openapi_tags=[
        {"name": "odata", "description": "OData service root and Elements entity set"},
        {"name": "projects", "description": "Project documents"},
        {"name": "health", "description": "Service health checks and metrics"},
    ],
    lifespan=lifespan,
)

# CORS middleware for cross-origin requests (viewer front-ends)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# Metrics middleware for request tracking
app.add_middleware(MetricsMiddleware)


@app.exception_handler(ODataServiceException)
async def service_exception_handler(request: Request, exc: ODataServiceException) -> JSONResponse:
    """
    Global exception handler for service exceptions.
    Returns standardized error responses.
    """
    return create_error_response(
        error=exc.error,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error but returns a sanitized response.
    """
    logger.exception(f"Unexpected error: {exc}")
    return create_error_response(
        error="internal_error",
        message="An unexpected error occurred",
        status_code=500,
    )


# Include routers
app.include_router(odata_router, prefix=settings.ODATA_PREFIX, tags=["odata"])
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with service information."""
    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
        "odata": f"{settings.ODATA_PREFIX}/",
        "api": settings.API_V1_PREFIX,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8080,
        reload=settings.DEBUG,
    )
