"""
Health and metrics endpoints.
No authentication is applied to these routes.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.core.exceptions import StorageException
from app.dependencies import Storage
from app.services.metadata_provider import DocumentKind, document_path
from app.services.metrics import get_metrics_collector

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(storage: Storage):
    """
    Service health check endpoint.

    Returns:
        {"status": "ok"} when the metadata store is reachable
        {"status": "degraded", "issues": [...]} when there are issues
    """
    issues = []
    warnings = []

    index_path = document_path(DocumentKind.PROJECTS_INDEX)
    try:
        if not await storage.exists(index_path):
            warnings.append(f"Projects index missing: {index_path}")
    except StorageException as e:
        logger.warning(f"Health check could not reach storage: {e.message}")
        issues.append(f"Storage: {e.message}")

    if issues:
        return {
            "status": "degraded",
            "storage": storage.name,
            "issues": issues,
        }

    response = {
        "status": "ok",
        "storage": storage.name,
    }

    if warnings:
        response["warnings"] = warnings

    return response


@router.get("/metrics")
async def metrics():
    """
    Request and aggregation metrics as JSON.
    """
    return get_metrics_collector().get_metrics()


@router.get("/metrics/prometheus", response_class=PlainTextResponse)
async def metrics_prometheus():
    """
    Prometheus text exposition format endpoint.
    Compatible with Prometheus scraping.
    """
    return PlainTextResponse(
        content=get_metrics_collector().to_prometheus(),
        media_type="text/plain; version=0.0.4; charset=utf-8",
    )
