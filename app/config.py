"""
Configuration management for the BIM OData service.
Uses pydantic-settings for environment-based configuration.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    API_V1_PREFIX: str = "/api/v1"
    ODATA_PREFIX: str = "/odata"
    PROJECT_NAME: str = "BIM OData Service"
    DEBUG: bool = False

    # Project used when $filter carries no projectId clause
    DEFAULT_PROJECT_ID: str = "WestRiversideHospital"

    # Aggregation
    MODEL_FETCH_TIMEOUT: float = 10.0  # seconds, per document
    MAX_CONCURRENT_MODEL_FETCHES: int = 8

    # Storage Backend Selection
    STORAGE_BACKEND: Literal["local", "s3", "azure"] = "local"

    # Local Storage Settings
    LOCAL_STORAGE_PATH: str = "./data"

    # S3/MinIO Settings
    S3_ENDPOINT_URL: str | None = None
    S3_ACCESS_KEY: str | None = None
    S3_SECRET_KEY: str | None = None
    S3_BUCKET_NAME: str = "bim-metadata"
    S3_REGION: str = "us-east-1"

    # Azure Blob Settings
    AZURE_STORAGE_CONNECTION_STRING: str | None = None
    AZURE_CONTAINER_NAME: str = "bim-metadata"

    # CORS
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
