"""
Project endpoints.
Read-only access to the project documents the Elements set is built from.
"""

from fastapi import APIRouter

from app.core.exceptions import DocumentParseException, ProjectNotFoundException, StorageException
from app.dependencies import Provider
from app.schemas.error import ErrorResponse
from app.schemas.project import (
    ObjectPropertiesResponse,
    ProjectDescriptor,
    ProjectListResponse,
    ProjectSummary,
)

router = APIRouter()


@router.get("", response_model=ProjectListResponse)
async def list_projects(provider: Provider):
    """
    List projects from the projects index.

    Entries without an id are ignored.
    """
    index = await provider.get_projects()
    projects = [
        ProjectSummary.model_validate(entry)
        for entry in index.get("projects") or []
        if isinstance(entry, dict) and isinstance(entry.get("id"), str) and entry["id"]
    ]
    return ProjectListResponse(projects=projects, total=len(projects))


@router.get(
    "/{project_id}",
    response_model=ProjectDescriptor,
    responses={404: {"model": ErrorResponse}},
)
async def get_project(project_id: str, provider: Provider):
    """Get a project descriptor with its model references."""
    try:
        return await provider.get_project(project_id)
    except DocumentParseException:
        raise ProjectNotFoundException(project_id, reason="parse_failure")
    except StorageException as e:
        if e.status_code == 404:
            raise ProjectNotFoundException(project_id)
        raise


@router.get(
    "/{project_id}/models/{model_id}/objects/{object_id}",
    response_model=ObjectPropertiesResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def get_object_properties(
    project_id: str,
    model_id: str,
    object_id: str,
    provider: Provider,
):
    """
    Get the property sets of one object.

    Served from projects/{projectId}/models/{modelId}/props/{objectId}.json.
    """
    properties = await provider.get_object_properties(project_id, model_id, object_id)
    return ObjectPropertiesResponse(
        projectId=project_id,
        modelId=model_id,
        objectId=object_id,
        properties=properties,
    )
