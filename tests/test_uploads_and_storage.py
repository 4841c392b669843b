from __future__ import annotations

import pytest
from botocore.exceptions import ClientError

from core.storage import BlobStorage, StorageError, get_storage, resolve_media_url
from main import app


class FailingS3Client:
    def generate_presigned_url(self, operation, Params, ExpiresIn):
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, operation)


def test_upload_url_is_issued_for_admins(client, store, auth_headers):
    admin = store.add_user(role="admin")

    body = client.post("/uploads", headers=auth_headers(admin)).json()
    assert body["storageId"].startswith("uploads/")
    assert body["uploadUrl"].endswith(f"{body['storageId']}?op=put")


def test_resolve_storage_id(client, store):
    body = client.get("/uploads/uploads/abc123").json()
    assert body == {"url": "https://storage.test/test-bucket/uploads/abc123?op=get"}


def test_resolve_media_url_prefers_storage(storage):
    assert resolve_media_url(storage, "uploads/x", "https://direct").endswith("uploads/x?op=get")
    assert resolve_media_url(storage, None, "https://direct") == "https://direct"
    assert resolve_media_url(storage, None, None) is None


def test_storage_failures_are_typed():
    broken = BlobStorage(FailingS3Client(), bucket="b")
    with pytest.raises(StorageError):
        broken.generate_upload_url()
    with pytest.raises(StorageError):
        broken.resolve_url("uploads/x")


def test_storage_failure_surfaces_as_bad_gateway(client, store):
    store.add_member("保存済み", photo_id="uploads/p1")
    app.dependency_overrides[get_storage] = lambda: BlobStorage(FailingS3Client(), bucket="b")

    response = client.get("/members")
    assert response.status_code == 502
