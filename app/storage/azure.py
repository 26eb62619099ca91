"""
Azure Blob Storage backend.
Supports Azure Blob Storage for Azure-based deployments.
"""

import asyncio

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient

from app.config import get_settings
from app.core.exceptions import DocumentNotFoundException, StorageException
from app.storage.base import StorageBackend

settings = get_settings()


class AzureStorageBackend(StorageBackend):
    """
    Azure Blob Storage implementation.

    Configured via AZURE_* environment variables. Blob client calls are
    blocking and run in worker threads.
    """

    name = "azure"

    def __init__(
        self,
        connection_string: str | None = None,
        container_name: str | None = None,
        blob_service_client: BlobServiceClient | None = None,
    ):
        """
        Initialize Azure Blob storage backend.

        Args:
            connection_string: Azure Storage connection string
            container_name: Blob container name
            blob_service_client: Pre-built service client (mainly for tests)
        """
        self.connection_string = connection_string or settings.AZURE_STORAGE_CONNECTION_STRING
        self.container_name = container_name or settings.AZURE_CONTAINER_NAME

        if blob_service_client is not None:
            self.blob_service_client = blob_service_client
            return

        if not self.connection_string:
            raise StorageException(
                message="Azure connection string not configured",
                details={"required": "AZURE_STORAGE_CONNECTION_STRING"},
            )

        # Create blob service client
        self.blob_service_client = BlobServiceClient.from_connection_string(
            self.connection_string
        )

    def _get_blob_client(self, path: str):
        """Get blob client for a path."""
        return self.blob_service_client.get_blob_client(
            container=self.container_name,
            blob=path,
        )

    def _read_blob(self, path: str) -> bytes:
        return self._get_blob_client(path).download_blob().readall()

    async def download_bytes(self, path: str) -> bytes:
        """Download entire blob as bytes."""
        try:
            return await asyncio.to_thread(self._read_blob, path)

        except ResourceNotFoundError:
            raise DocumentNotFoundException(path, details={"container": self.container_name})
        except AzureError as e:
            raise StorageException(
                message=f"Failed to download blob from Azure: {str(e)}",
                details={"path": path, "container": self.container_name},
            )

    async def exists(self, path: str) -> bool:
        """Check if a blob exists."""
        try:
            return await asyncio.to_thread(self._get_blob_client(path).exists)
        except AzureError as e:
            raise StorageException(
                message=f"Failed to check blob existence: {str(e)}",
                details={"path": path, "container": self.container_name},
            )

    def get_url(self, path: str) -> str:
        """Get URL for blob access."""
        blob_client = self._get_blob_client(path)
        return blob_client.url
