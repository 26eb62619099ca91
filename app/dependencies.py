"""
FastAPI dependency injection functions.
Provides common dependencies used across endpoints.
"""

from typing import Annotated

from fastapi import Depends

from app.services.element_service import ElementService
from app.services.metadata_provider import MetadataProvider
from app.storage import StorageBackend, get_storage


def get_metadata_provider(
    storage: Annotated[StorageBackend, Depends(get_storage)],
) -> MetadataProvider:
    """Metadata provider bound to the configured storage backend."""
    return MetadataProvider(storage)


def get_element_service(
    provider: Annotated[MetadataProvider, Depends(get_metadata_provider)],
) -> ElementService:
    """Element service for a single request."""
    return ElementService(provider)


# Type aliases for cleaner endpoint signatures
Storage = Annotated[StorageBackend, Depends(get_storage)]
Provider = Annotated[MetadataProvider, Depends(get_metadata_provider)]
Elements = Annotated[ElementService, Depends(get_element_service)]
