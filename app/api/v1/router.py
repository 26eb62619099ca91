"""
API v1 Router - Aggregates the REST helper endpoints.
Base Path: /api/v1
"""

from fastapi import APIRouter

from app.api.v1 import health, projects

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
