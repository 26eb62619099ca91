"""
Pydantic schemas for OData JSON payloads.
Used for OpenAPI documentation of the service root and collections.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.odata.edm import ENTITY_SET

ELEMENTS_CONTEXT = f"$metadata#{ENTITY_SET}"


class ElementRecord(BaseModel):
    """
    Element entity as returned in a collection.

    Every field is present unless $select narrows the projection.
    """

    id: str | None = None
    projectId: str | None = None
    modelId: str | None = None
    name: str | None = None
    type: str | None = None
    parent: str | None = None
    attributes: str | None = Field(
        default=None,
        description="Object attributes serialized as a JSON string",
    )


class ElementCollectionResponse(BaseModel):
    """
    Elements collection envelope.

    "@odata.count" is the size of the aggregated collection before
    $filter, $select, $skip and $top are applied.
    """

    model_config = ConfigDict(populate_by_name=True)

    context: str = Field(default=ELEMENTS_CONTEXT, alias="@odata.context")
    count: int = Field(..., alias="@odata.count")
    value: list[ElementRecord] = Field(
        ...,
        description="Elements after filtering, projection and paging",
    )


class EntitySetInfo(BaseModel):
    name: str
    kind: str = "EntitySet"
    url: str


class ServiceDocument(BaseModel):
    """OData service document listing the exposed entity sets."""

    model_config = ConfigDict(populate_by_name=True)

    context: str = Field(default="$metadata", alias="@odata.context")
    service_root: str = Field(..., alias="@odata.serviceRoot")
    value: list[EntitySetInfo]


def build_service_document(service_root: str) -> dict[str, Any]:
    """Build the service document for a service root such as "/odata/"."""
    document = ServiceDocument(
        service_root=service_root,
        value=[EntitySetInfo(name=ENTITY_SET, url=ENTITY_SET)],
    )
    return document.model_dump(by_alias=True)
