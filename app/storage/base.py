"""
Abstract storage backend interface.
Defines the read contract for all metadata store implementations.
"""

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    All storage implementations (Local, S3, Azure) must implement
    these methods to ensure consistent behavior across backends.
    Metadata documents are addressed by a relative, slash-separated
    path such as "projects/{projectId}/index.json".
    """

    name: str = "abstract"

    @abstractmethod
    async def download_bytes(self, path: str) -> bytes:
        """
        Download entire file as bytes.

        Args:
            path: Path to the file in storage

        Returns:
            Complete file content as bytes

        Raises:
            DocumentNotFoundException: If the file does not exist
            StorageException: If the download fails for other reasons
        """
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """
        Check if a file exists in storage.

        Args:
            path: Path to check

        Returns:
            True if file exists, False otherwise
        """
        pass

    @abstractmethod
    def get_url(self, path: str) -> str:
        """
        Get a URL for accessing the file.

        For local storage, this returns a relative path.
        For cloud storage, this may return a signed URL.

        Args:
            path: Path to the file

        Returns:
            URL or path to access the file
        """
        pass
