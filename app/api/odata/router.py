"""
OData service root.

Exposes the Elements entity set with $filter, $select, $top and $skip,
plus the service document and the $metadata schema.
"""

from fastapi import APIRouter, Query

from app.config import get_settings
from app.core.responses import create_odata_response, create_xml_response
from app.dependencies import Elements
from app.schemas.error import ErrorResponse
from app.schemas.odata import (
    ENTITY_SET,
    METADATA_DOCUMENT,
    ElementCollectionResponse,
    ServiceDocument,
    build_service_document,
)
from app.services.element_service import resolve_project_id
from app.services.query_engine import QueryOptions

router = APIRouter()
settings = get_settings()


@router.get("", include_in_schema=False)
@router.get(
    "/",
    summary="OData service document",
    responses={200: {"model": ServiceDocument}},
)
async def service_document():
    """List the entity sets exposed by the service root."""
    return create_odata_response(build_service_document(f"{settings.ODATA_PREFIX}/"))


@router.get(
    "/$metadata",
    summary="OData metadata document",
    responses={200: {"content": {"application/xml": {}}}},
)
async def metadata_document():
    """CSDL schema of the Element entity."""
    return create_xml_response(METADATA_DOCUMENT)


@router.get(
    f"/{ENTITY_SET}",
    summary="Query elements",
    responses={
        200: {"model": ElementCollectionResponse},
        404: {"model": ErrorResponse},
    },
)
async def list_elements(
    service: Elements,
    filter: str | None = Query(
        default=None,
        alias="$filter",
        description="eq, contains() or startswith(); projectId eq '<id>' picks the project",
    ),
    select: str | None = Query(
        default=None,
        alias="$select",
        description="Comma-separated field list",
    ),
    top: str | None = Query(default=None, alias="$top", description="Maximum number of elements"),
    skip: str | None = Query(default=None, alias="$skip", description="Number of elements to skip"),
):
    """
    Aggregate every model of a project into flat elements and query them.

    The project comes from a "projectId eq '<id>'" clause in $filter and
    defaults to the configured project. "@odata.count" is the number of
    aggregated elements before $filter, $select, $skip and $top apply.
    """
    project_id = resolve_project_id(filter)
    options = QueryOptions.from_params(filter=filter, select=select, top=top, skip=skip)

    envelope = await service.query(project_id, options)

    return create_odata_response(envelope.to_dict())
