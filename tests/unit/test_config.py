# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for environment-driven configuration."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from simple_on_disk_cache.backends.base import MountedDirectory, S3Directory
from simple_on_disk_cache.cache.manager import create_cache_from_settings
from simple_on_disk_cache.core.config import Settings, get_settings
from simple_on_disk_cache.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    for name in (
        "DIRECTORY_PATH",
        "S3_BUCKET",
        "S3_PREFIX",
        "S3_REGION",
        "S3_ENDPOINT_URL",
        "DEFAULT_EXPIRATION_SECONDS",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(f"SIMPLE_ON_DISK_CACHE_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.directory_path is None
        assert settings.default_expiration_seconds == 300
        assert settings.log_level == "INFO"
        assert settings.log_format == "json"

    def test_mounted_directory(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("SIMPLE_ON_DISK_CACHE_DIRECTORY_PATH", str(tmp_path))
        assert get_settings().directory() == MountedDirectory(path=tmp_path)

    def test_s3_directory_wins(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("SIMPLE_ON_DISK_CACHE_DIRECTORY_PATH", str(tmp_path))
        monkeypatch.setenv("SIMPLE_ON_DISK_CACHE_S3_BUCKET", "bucket")
        monkeypatch.setenv("SIMPLE_ON_DISK_CACHE_S3_PREFIX", "cache")
        directory = get_settings().directory()
        assert isinstance(directory, S3Directory)
        assert directory.bucket == "bucket"
        assert directory.prefix == "cache"

    def test_no_directory(self) -> None:
        with pytest.raises(ConfigurationError, match="No cache directory configured"):
            Settings().directory()

    @pytest.mark.parametrize("raw", ["never", "None", "null"])
    def test_never_expiring_default(self, monkeypatch, raw) -> None:
        monkeypatch.setenv("SIMPLE_ON_DISK_CACHE_DEFAULT_EXPIRATION_SECONDS", raw)
        assert Settings().default_expiration_seconds is None

    def test_env_file(self, tmp_path) -> None:
        Path(".env").write_text(
            "SIMPLE_ON_DISK_CACHE_DIRECTORY_PATH=/var/cache/app\n"
            "SIMPLE_ON_DISK_CACHE_DEFAULT_EXPIRATION_SECONDS=60\n",
            encoding="utf-8",
        )
        settings = Settings()
        assert settings.directory_path == Path("/var/cache/app")
        assert settings.default_expiration_seconds == 60

    def test_create_cache_from_settings(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("SIMPLE_ON_DISK_CACHE_DIRECTORY_PATH", str(tmp_path))
        monkeypatch.setenv("SIMPLE_ON_DISK_CACHE_DEFAULT_EXPIRATION_SECONDS", "30")
        cache = create_cache_from_settings()
        assert cache.default_expiration == timedelta(seconds=30)
