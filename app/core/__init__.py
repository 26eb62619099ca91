"""Core utilities and exceptions for the BIM OData service."""

from app.core.exceptions import (
    ODataServiceException,
    StorageException,
    DocumentNotFoundException,
    DocumentParseException,
    ProjectNotFoundException,
)

__all__ = [
    "ODataServiceException",
    "StorageException",
    "DocumentNotFoundException",
    "DocumentParseException",
    "ProjectNotFoundException",
]
