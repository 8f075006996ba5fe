# index_order_validator/materializer.py
"""Resolve catalog file names to files on local disk.

Two implementations:
- LocalDirMaterializer: files are expected to already be under local_dir.
- S3Materializer: missing files are downloaded once from S3 into local_dir.

Downloads are not retried; a failure is terminal for the validation run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from index_order_validator.config import ValidatorConfig
from index_order_validator.errors import MaterializationError

logger = logging.getLogger(__name__)


class FileMaterializer(Protocol):
    def local_file(self, file_name: str) -> Path:
        """Ensure ``file_name`` is present locally and return its path."""
        ...


class LocalDirMaterializer:
    def __init__(self, local_dir: Path | str) -> None:
        self.local_dir = Path(local_dir)

    def local_file(self, file_name: str) -> Path:
        path = self.local_dir / file_name
        if not path.is_file():
            raise MaterializationError(f"File not found on local storage: {path}")
        logger.debug("Using local file %s", path)
        return path


class S3Materializer:
    def __init__(
        self,
        local_dir: Path | str,
        bucket: str,
        prefix: str = "",
        client: Any | None = None,
    ) -> None:
        self.local_dir = Path(local_dir)
        self.bucket = bucket
        self.prefix = prefix
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("s3")
        return self._client

    def local_file(self, file_name: str) -> Path:
        path = self.local_dir / file_name
        if path.is_file():
            logger.debug("Using cached local copy %s", path)
            return path

        key = f"{self.prefix}{file_name}"
        tmp_path = path.with_name(path.name + ".part")
        logger.debug("Downloading s3://%s/%s to %s", self.bucket, key, path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self.client.download_file(self.bucket, key, str(tmp_path))
            tmp_path.replace(path)
        except (ClientError, BotoCoreError, OSError) as exc:
            tmp_path.unlink(missing_ok=True)
            raise MaterializationError(
                f"Failed to download s3://{self.bucket}/{key}: {type(exc).__name__}: {exc}"
            ) from exc
        return path


def build_materializer(config: ValidatorConfig) -> FileMaterializer:
    if config.remote_bucket:
        return S3Materializer(config.local_dir, config.remote_bucket, config.remote_prefix)
    return LocalDirMaterializer(config.local_dir)
