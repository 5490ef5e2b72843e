# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""S3-compatible object storage backend using ``boto3``.

boto3 is synchronous, so every call is pushed to a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from simple_on_disk_cache.backends.base import DirectoryBackend, S3Directory

logger = logging.getLogger("simple_on_disk_cache.backends.s3")

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _is_not_found(error: ClientError) -> bool:
    code = str(error.response.get("Error", {}).get("Code", ""))
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in _NOT_FOUND_CODES or status == 404


class S3DirectoryBackend(DirectoryBackend):
    """Persist blobs as objects under ``<prefix>/<key>`` in an S3 bucket.

    Args:
        directory: The bucket and prefix to persist to.
        client: Optional pre-built boto3 S3 client.  One is created from the
            directory's region/endpoint when omitted.
    """

    def __init__(self, directory: S3Directory, client: Any | None = None) -> None:
        self._bucket = directory.bucket
        self._prefix = directory.prefix.strip("/")
        if client is None:
            client_kwargs: dict[str, Any] = {
                "service_name": "s3",
                "config": Config(signature_version="s3v4"),
            }
            if directory.region:
                client_kwargs["region_name"] = directory.region
            if directory.endpoint_url:
                client_kwargs["endpoint_url"] = directory.endpoint_url
            client = boto3.client(**client_kwargs)
        self._client = client

    def object_key(self, key: str) -> str:
        return f"{self._prefix}/{key}" if self._prefix else key

    # ------------------------------------------------------------------
    # DirectoryBackend interface
    # ------------------------------------------------------------------

    async def read(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read_sync, key)

    async def write(self, key: str, data: str) -> None:
        await asyncio.to_thread(self._write_sync, key, data)

    def describe(self) -> str:
        return f"s3://{self._bucket}/{self._prefix}"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_sync(self, key: str) -> str | None:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=self.object_key(key))
        except ClientError as exc:
            if _is_not_found(exc):
                return None
            raise
        return response["Body"].read().decode("utf-8")

    def _write_sync(self, key: str, data: str) -> None:
        self._client.put_object(
            Bucket=self._bucket,
            Key=self.object_key(key),
            Body=data.encode("utf-8"),
            ContentType="application/json",
        )
        logger.debug(
            "Wrote %d chars",
            len(data),
            extra={"location": f"s3://{self._bucket}/{self.object_key(key)}"},
        )

