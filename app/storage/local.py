"""
Local filesystem storage backend.
Reads metadata documents from a data directory on the local filesystem.
"""

from pathlib import Path

import aiofiles

from app.config import get_settings
from app.core.exceptions import DocumentNotFoundException, StorageException
from app.storage.base import StorageBackend

settings = get_settings()


class LocalStorageBackend(StorageBackend):
    """
    Local filesystem storage implementation.

    Documents are read from under the configured LOCAL_STORAGE_PATH
    directory. Suitable for development and single-node deployments.
    """

    name = "local"

    def __init__(self, base_path: str | None = None):
        """
        Initialize local storage backend.

        Args:
            base_path: Base directory for storage. Defaults to settings.LOCAL_STORAGE_PATH
        """
        self.base_path = Path(base_path or settings.LOCAL_STORAGE_PATH).resolve()
        # Ensure base directory exists
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, path: str) -> Path | None:
        """Get full filesystem path for a storage path, or None if it escapes the base."""
        full_path = (self.base_path / path).resolve()
        if not full_path.is_relative_to(self.base_path):
            return None
        return full_path

    async def download_bytes(self, path: str) -> bytes:
        """Download entire file as bytes."""
        full_path = self._get_full_path(path)

        if full_path is None or not full_path.is_file():
            raise DocumentNotFoundException(path)

        try:
            async with aiofiles.open(full_path, "rb") as f:
                return await f.read()

        except OSError as e:
            raise StorageException(
                message=f"Failed to read file: {str(e)}",
                details={"path": path},
            )

    async def exists(self, path: str) -> bool:
        """Check if a file exists."""
        full_path = self._get_full_path(path)
        return full_path is not None and full_path.is_file()

    def get_url(self, path: str) -> str:
        """Get URL/path for file access."""
        # For local storage, return the relative path
        return f"/data/{path}"
