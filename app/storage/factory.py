"""
Storage backend factory.
Selects the metadata store from configuration.
"""

import logging
from functools import lru_cache

from app.config import get_settings
from app.storage.base import StorageBackend
from app.storage.local import LocalStorageBackend
from app.storage.s3 import S3StorageBackend
from app.storage.azure import AzureStorageBackend

logger = logging.getLogger(__name__)

_BACKENDS: dict[str, type[StorageBackend]] = {
    "local": LocalStorageBackend,
    "s3": S3StorageBackend,
    "azure": AzureStorageBackend,
}


@lru_cache
def get_storage_backend() -> StorageBackend:
    """
    Get the configured storage backend.

    Uses LRU cache to ensure only one instance is created.
    Backend selection is based on the STORAGE_BACKEND setting.

    Raises:
        ValueError: If unknown storage backend is configured
    """
    backend = get_settings().STORAGE_BACKEND.lower()

    backend_cls = _BACKENDS.get(backend)
    if backend_cls is None:
        raise ValueError(f"Unknown storage backend: {backend}")

    logger.info(f"Using {backend} storage backend")
    return backend_cls()


def get_storage() -> StorageBackend:
    """
    Dependency function for FastAPI.

    Usage:
        @router.get("/Elements")
        async def elements(storage: StorageBackend = Depends(get_storage)):
            ...
    """
    return get_storage_backend()
