"""
Blob storage client (S3-compatible) for photos, thumbnails and slide images.

Stored objects are referenced by an opaque storage id (the object key).
Two operations are exposed:
- generate_upload_url() -> (storage_id, presigned PUT url)
- resolve_url(storage_id) -> presigned GET url

Routes receive a `BlobStorage` through the `get_storage` dependency so tests
can swap in a fake with `app.dependency_overrides`.
"""

from __future__ import annotations

import uuid
from functools import lru_cache

import boto3
import botocore.config
from botocore.exceptions import BotoCoreError, ClientError

from .config import env_int, env_str


# Storage failures are explicit and separable from other runtime errors.
class StorageError(RuntimeError):
    pass


def storage_bucket() -> str:
    return env_str("STORAGE_BUCKET", "council-media")


def storage_endpoint_url() -> str | None:
    return env_str("STORAGE_ENDPOINT_URL") or None


def storage_region() -> str:
    return env_str("STORAGE_REGION", "ap-northeast-1")


def url_expires_s() -> int:
    return env_int("STORAGE_URL_EXPIRES_S", 3600)


class BlobStorage:
    def __init__(self, client, *, bucket: str, expires_s: int = 3600, prefix: str = "uploads/") -> None:
        if not bucket:
            raise StorageError("STORAGE_BUCKET is empty.")
        self._client = client
        self.bucket = bucket
        self.expires_s = expires_s
        self.prefix = prefix

    def new_storage_id(self) -> str:
        return f"{self.prefix}{uuid.uuid4().hex}"

    def generate_upload_url(self) -> tuple[str, str]:
        storage_id = self.new_storage_id()
        try:
            url = self._client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": storage_id},
                ExpiresIn=self.expires_s,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to create upload URL: {exc}") from exc
        return storage_id, url

    def resolve_url(self, storage_id: str | None) -> str | None:
        key = (storage_id or "").strip()
        if not key:
            return None
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.expires_s,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Failed to resolve storage id {key!r}: {exc}") from exc


def resolve_media_url(storage: BlobStorage | None, storage_id: str | None, direct_url: str | None) -> str | None:
    """
    A stored object wins over a direct URL; missing both gives None.
    """
    if storage_id and storage is not None:
        return storage.resolve_url(storage_id)
    return direct_url or None


def _build_client():
    return boto3.client(
        "s3",
        endpoint_url=storage_endpoint_url(),
        region_name=storage_region(),
        config=botocore.config.Config(signature_version="s3v4"),
    )


@lru_cache(maxsize=1)
def _default_storage() -> BlobStorage:
    return BlobStorage(_build_client(), bucket=storage_bucket(), expires_s=url_expires_s())


def get_storage() -> BlobStorage:
    """FastAPI dependency."""
    return _default_storage()
