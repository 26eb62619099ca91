"""
OData schema module.
Entity data model ($metadata) and JSON payload shapes for the service root.
"""

from app.schemas.odata.edm import (
    ELEMENT_FIELDS,
    ENTITY_SET,
    METADATA_DOCUMENT,
)
from app.schemas.odata.envelope import (
    ELEMENTS_CONTEXT,
    ElementCollectionResponse,
    ElementRecord,
    ServiceDocument,
    build_service_document,
)

__all__ = [
    "ELEMENT_FIELDS",
    "ENTITY_SET",
    "METADATA_DOCUMENT",
    "ELEMENTS_CONTEXT",
    "ElementCollectionResponse",
    "ElementRecord",
    "ServiceDocument",
    "build_service_document",
]
