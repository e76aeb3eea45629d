# src/vault_api/settings.py
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_DEPLOYMENT_MODES = ["local-dev", "aws-mock", "aws-prod"]
LOCAL_MODES = ["local-dev", "aws-mock"]
MOTO_SERVER_URL = "http://localhost:5000"


@dataclass(frozen=True)
class ObjectStoreConfig:
    """Static configuration injected into the object store client."""
    bucket_name: str
    download_expiry_seconds: int = 300
    server_side_encryption: Optional[str] = "AES256"


@dataclass(frozen=True)
class MetadataIndexConfig:
    """Static configuration injected into the metadata index adapter."""
    table_name: str


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from vault_api.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="file-vault-api",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("AWS_DEFAULT_REGION", "AWS_REGION", "aws_region"),
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_ACCESS_KEY_ID", "aws_access_key_id"),
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_SECRET_ACCESS_KEY", "aws_secret_access_key"),
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("AWS_ENDPOINT_URL", "aws_endpoint_url"),
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="cloudvault-primary",
        validation_alias=AliasChoices("S3_PRIMARY_BUCKET", "S3_BUCKET_NAME", "s3_bucket_name"),
        description="Versioned S3 bucket holding every user's files"
    )

    download_url_expiry_seconds: int = Field(
        default=300,
        gt=0,
        description="Lifetime of presigned download URLs"
    )

    server_side_encryption: Optional[str] = Field(
        default="AES256",
        description="SSE algorithm applied to uploads and restores; empty disables it"
    )

    # DynamoDB Configuration
    dynamodb_table: str = Field(
        default="FileMetadata",
        validation_alias=AliasChoices("DYNAMODB_TABLE", "dynamodb_table"),
        description="DynamoDB table caching per-file metadata"
    )

    # Network behaviour of store calls
    store_connect_timeout: float = Field(default=5.0, gt=0)
    store_read_timeout: float = Field(default=30.0, gt=0)
    store_max_attempts: int = Field(
        default=1,
        ge=1,
        description="Total attempts per AWS call (1 disables SDK retries)"
    )

    # Upload / listing limits
    max_upload_bytes: int = Field(
        default=50 * 1024 * 1024,
        gt=0,
        description="Largest accepted upload (50 MB)"
    )

    enrichment_workers: int = Field(
        default=8,
        ge=1,
        description="Thread pool size for per-file metadata enrichment"
    )

    # HTTP surface
    owner_header: str = Field(
        default="X-Authenticated-User",
        description="Header the authenticating gateway uses to forward the user id"
    )

    cors_origins: List[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("deployment_mode", mode="before")
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Map legacy mode names and validate the result."""
        if v:
            mode_mapping = {
                "local-mock": "local-dev",
                "cloud": "aws-prod",
            }
            v = mode_mapping.get(v, v)
        if v not in VALID_DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_DEPLOYMENT_MODES}")
        return v

    @field_validator("server_side_encryption", mode="before")
    @classmethod
    def empty_encryption_means_none(cls, v):
        return v or None

    @field_validator("log_level")
    @classmethod
    def upper_case_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def apply_local_mode_defaults(self) -> "Settings":
        """Point local modes at a moto server with mock credentials unless told otherwise."""
        if self.deployment_mode in LOCAL_MODES:
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = MOTO_SERVER_URL
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        # In production the execution role supplies credentials
        return self

    def object_store_config(self) -> ObjectStoreConfig:
        return ObjectStoreConfig(
            bucket_name=self.s3_bucket_name,
            download_expiry_seconds=self.download_url_expiry_seconds,
            server_side_encryption=self.server_side_encryption,
        )

    def metadata_index_config(self) -> MetadataIndexConfig:
        return MetadataIndexConfig(table_name=self.dynamodb_table)

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=(".env", ".env.local-dev", ".env.aws-mock", ".env.aws-prod"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
