# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Application configuration via environment variables and .env files."""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from simple_on_disk_cache.backends.base import (
    DirectoryToPersistTo,
    MountedDirectory,
    S3Directory,
)
from simple_on_disk_cache.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SIMPLE_ON_DISK_CACHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
    )

    # Mounted directory
    directory_path: Path | None = None

    # S3
    s3_bucket: str = ""
    s3_prefix: str = ""
    s3_region: str | None = None
    s3_endpoint_url: str | None = None

    # Expiration
    default_expiration_seconds: int | None = 5 * 60

    @field_validator("default_expiration_seconds", mode="before")
    @classmethod
    def _parse_default_expiration(cls, v: object) -> object:
        if isinstance(v, str) and v.strip().lower() in ("none", "null", "never"):
            return None
        return v

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    def directory(self) -> DirectoryToPersistTo:
        """Build the directory to persist to from the configured values."""
        if self.s3_bucket:
            return S3Directory(
                bucket=self.s3_bucket,
                prefix=self.s3_prefix,
                region=self.s3_region,
                endpoint_url=self.s3_endpoint_url,
            )
        if self.directory_path is not None:
            return MountedDirectory(path=self.directory_path)
        raise ConfigurationError(
            "No cache directory configured: set SIMPLE_ON_DISK_CACHE_DIRECTORY_PATH "
            "or SIMPLE_ON_DISK_CACHE_S3_BUCKET"
        )


def get_settings() -> Settings:
    return Settings()
