"""
Pydantic schemas for documents and responses.
"""

from app.schemas.project import (
    ModelReference,
    ProjectDescriptor,
    ProjectSummary,
    ProjectListResponse,
    ObjectPropertiesResponse,
)
from app.schemas.odata import (
    ElementCollectionResponse,
    ElementRecord,
    ServiceDocument,
)
from app.schemas.error import ErrorResponse

__all__ = [
    # Project schemas
    "ModelReference",
    "ProjectDescriptor",
    "ProjectSummary",
    "ProjectListResponse",
    "ObjectPropertiesResponse",
    # OData schemas
    "ElementCollectionResponse",
    "ElementRecord",
    "ServiceDocument",
    # Error schemas
    "ErrorResponse",
]
