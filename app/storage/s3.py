"""
S3-compatible storage backend.
Supports AWS S3 and S3-compatible services like MinIO.
"""

import asyncio

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from app.config import get_settings
from app.core.exceptions import DocumentNotFoundException, StorageException
from app.storage.base import StorageBackend

settings = get_settings()

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3StorageBackend(StorageBackend):
    """
    S3-compatible object storage implementation.

    Supports AWS S3 and S3-compatible services like MinIO.
    Configured via S3_* environment variables. The bucket is expected
    to exist already; this backend never writes.
    """

    name = "s3"

    def __init__(
        self,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        bucket_name: str | None = None,
        region: str | None = None,
        client=None,
    ):
        """
        Initialize S3 storage backend.

        Args:
            endpoint_url: S3 endpoint URL (for MinIO, custom S3-compatible services)
            access_key: AWS access key ID
            secret_key: AWS secret access key
            bucket_name: S3 bucket name
            region: AWS region
            client: Pre-built boto3 S3 client (mainly for tests)
        """
        self.endpoint_url = endpoint_url or settings.S3_ENDPOINT_URL
        self.access_key = access_key or settings.S3_ACCESS_KEY
        self.secret_key = secret_key or settings.S3_SECRET_KEY
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        self.region = region or settings.S3_REGION

        if client is not None:
            self.client = client
            return

        config = Config(
            signature_version="s3v4",
            retries={"max_attempts": 3, "mode": "standard"},
        )

        self.client = boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
            region_name=self.region,
            config=config,
        )

    def _read_object(self, path: str) -> bytes:
        response = self.client.get_object(
            Bucket=self.bucket_name,
            Key=path,
        )
        return response["Body"].read()

    async def download_bytes(self, path: str) -> bytes:
        """
        Download entire object as bytes.

        The blocking boto3 call runs in a worker thread so the event loop
        stays free and callers can bound the wait with asyncio.wait_for.
        """
        try:
            return await asyncio.to_thread(self._read_object, path)

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code in _NOT_FOUND_CODES:
                raise DocumentNotFoundException(path, details={"bucket": self.bucket_name})
            raise StorageException(
                message=f"Failed to download object from S3: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )

    async def exists(self, path: str) -> bool:
        """Check if an object exists."""
        try:
            await asyncio.to_thread(
                self.client.head_object,
                Bucket=self.bucket_name,
                Key=path,
            )
            return True
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code")
            if error_code in _NOT_FOUND_CODES:
                return False
            raise StorageException(
                message=f"Failed to check object existence: {str(e)}",
                details={"path": path, "bucket": self.bucket_name},
            )

    def get_url(self, path: str) -> str:
        """Generate a presigned URL for object access."""
        try:
            url = self.client.generate_presigned_url(
                "get_object",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": path,
                },
                ExpiresIn=3600,  # 1 hour
            )
            return url
        except ClientError:
            # Fallback to direct URL construction
            if self.endpoint_url:
                return f"{self.endpoint_url}/{self.bucket_name}/{path}"
            return f"s3://{self.bucket_name}/{path}"
