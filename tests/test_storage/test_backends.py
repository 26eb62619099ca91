"""
Tests for storage backends.
"""

import io
from unittest.mock import MagicMock

import boto3
import pytest
from azure.core.exceptions import AzureError, ResourceNotFoundError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from app.core.exceptions import DocumentNotFoundException, StorageException
from app.storage import azure as azure_module
from app.storage.azure import AzureStorageBackend
from app.storage.local import LocalStorageBackend
from app.storage.s3 import S3StorageBackend


class TestLocalStorageBackend:
    """Tests for local filesystem storage."""

    @pytest.fixture
    def storage(self, tmp_path) -> LocalStorageBackend:
        """Create a local storage backend for testing."""
        root = tmp_path / "root"
        (root / "projects" / "P1").mkdir(parents=True)
        (root / "projects" / "P1" / "index.json").write_bytes(b'{"models": []}')
        return LocalStorageBackend(base_path=str(root))

    @pytest.mark.asyncio
    async def test_download_bytes(self, storage: LocalStorageBackend):
        """Test reading a document."""
        result = await storage.download_bytes("projects/P1/index.json")

        assert result == b'{"models": []}'

    @pytest.mark.asyncio
    async def test_download_missing(self, storage: LocalStorageBackend):
        """Test reading a missing document raises not found."""
        with pytest.raises(DocumentNotFoundException) as exc_info:
            await storage.download_bytes("projects/P2/index.json")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details["path"] == "projects/P2/index.json"

    @pytest.mark.asyncio
    async def test_download_directory_is_not_found(self, storage: LocalStorageBackend):
        """Test a directory path is not a document."""
        with pytest.raises(DocumentNotFoundException):
            await storage.download_bytes("projects/P1")

    @pytest.mark.asyncio
    async def test_path_escaping_base_is_not_found(self, storage: LocalStorageBackend, tmp_path):
        """Test paths resolving outside the base directory are refused."""
        (tmp_path / "outside.json").write_text("{}")

        with pytest.raises(DocumentNotFoundException):
            await storage.download_bytes("../outside.json")
        assert not await storage.exists("../outside.json")

    @pytest.mark.asyncio
    async def test_exists(self, storage: LocalStorageBackend):
        """Test file existence check."""
        assert await storage.exists("projects/P1/index.json")
        assert not await storage.exists("projects/P1/models/m/metadata.json")

    def test_get_url(self, storage: LocalStorageBackend):
        """Test getting file URL."""
        assert storage.get_url("projects/P1/index.json") == "/data/projects/P1/index.json"

    def test_creates_base_directory(self, tmp_path):
        """Test the base directory is created when absent."""
        LocalStorageBackend(base_path=str(tmp_path / "new" / "root"))

        assert (tmp_path / "new" / "root").is_dir()


class TestS3StorageBackend:
    """Tests for the S3 backend against a stubbed client."""

    @pytest.fixture
    def s3_client(self):
        return boto3.client(
            "s3",
            region_name="us-east-1",
            aws_access_key_id="test",
            aws_secret_access_key="test",
        )

    @pytest.fixture
    def storage(self, s3_client) -> S3StorageBackend:
        return S3StorageBackend(bucket_name="bim-test", client=s3_client)

    @pytest.mark.asyncio
    async def test_download_bytes(self, storage: S3StorageBackend, s3_client):
        content = b'{"metaObjects": {}}'
        with Stubber(s3_client) as stubber:
            stubber.add_response(
                "get_object",
                {"Body": StreamingBody(io.BytesIO(content), len(content))},
                {"Bucket": "bim-test", "Key": "projects/P1/models/m/metadata.json"},
            )

            result = await storage.download_bytes("projects/P1/models/m/metadata.json")

        assert result == content

    @pytest.mark.asyncio
    async def test_download_missing_key(self, storage: S3StorageBackend, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_client_error(
                "get_object",
                service_error_code="NoSuchKey",
                http_status_code=404,
            )

            with pytest.raises(DocumentNotFoundException) as exc_info:
                await storage.download_bytes("projects/P1/index.json")

        assert exc_info.value.details["bucket"] == "bim-test"

    @pytest.mark.asyncio
    async def test_download_access_denied(self, storage: S3StorageBackend, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_client_error(
                "get_object",
                service_error_code="AccessDenied",
                http_status_code=403,
            )

            with pytest.raises(StorageException) as exc_info:
                await storage.download_bytes("projects/P1/index.json")

        assert not isinstance(exc_info.value, DocumentNotFoundException)
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_exists(self, storage: S3StorageBackend, s3_client):
        with Stubber(s3_client) as stubber:
            stubber.add_response("head_object", {"ContentLength": 2})
            stubber.add_client_error(
                "head_object",
                service_error_code="404",
                http_status_code=404,
            )

            assert await storage.exists("projects/index.json")
            assert not await storage.exists("projects/missing.json")


class TestAzureStorageBackend:
    """Tests for the Azure backend against a mocked service client."""

    @pytest.fixture
    def blob_client(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def storage(self, blob_client) -> AzureStorageBackend:
        service_client = MagicMock()
        service_client.get_blob_client.return_value = blob_client
        return AzureStorageBackend(container_name="bim-test", blob_service_client=service_client)

    @pytest.mark.asyncio
    async def test_download_bytes(self, storage: AzureStorageBackend, blob_client):
        blob_client.download_blob.return_value.readall.return_value = b'{"projects": []}'

        result = await storage.download_bytes("projects/index.json")

        assert result == b'{"projects": []}'
        storage.blob_service_client.get_blob_client.assert_called_with(
            container="bim-test",
            blob="projects/index.json",
        )

    @pytest.mark.asyncio
    async def test_download_missing_blob(self, storage: AzureStorageBackend, blob_client):
        blob_client.download_blob.side_effect = ResourceNotFoundError("BlobNotFound")

        with pytest.raises(DocumentNotFoundException) as exc_info:
            await storage.download_bytes("projects/P1/index.json")

        assert exc_info.value.status_code == 404
        assert exc_info.value.details["container"] == "bim-test"

    @pytest.mark.asyncio
    async def test_download_service_error(self, storage: AzureStorageBackend, blob_client):
        blob_client.download_blob.side_effect = AzureError("connection reset")

        with pytest.raises(StorageException) as exc_info:
            await storage.download_bytes("projects/P1/index.json")

        assert not isinstance(exc_info.value, DocumentNotFoundException)
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_exists(self, storage: AzureStorageBackend, blob_client):
        blob_client.exists.side_effect = [True, False]

        assert await storage.exists("projects/index.json")
        assert not await storage.exists("projects/missing.json")

    @pytest.mark.asyncio
    async def test_exists_service_error(self, storage: AzureStorageBackend, blob_client):
        blob_client.exists.side_effect = AzureError("forbidden")

        with pytest.raises(StorageException):
            await storage.exists("projects/index.json")

    def test_requires_connection_string(self, monkeypatch):
        monkeypatch.setattr(azure_module.settings, "AZURE_STORAGE_CONNECTION_STRING", None)

        with pytest.raises(StorageException):
            AzureStorageBackend()
