import boto3
import pytest
import requests

from tests.consts import OTHER_OWNER_ID, TEST_BUCKET_NAME, TEST_OWNER_ID, TEST_REGION
from vault_api.adapters.object_store import ObjectStoreClient
from vault_api.errors import NotFound, StoreUnavailable
from vault_api.settings import ObjectStoreConfig


def test_put_creates_a_new_version_each_time(object_store: ObjectStoreClient, s3_client):
    first = object_store.put(TEST_OWNER_ID, "notes.txt", b"one", "text/plain")
    second = object_store.put(TEST_OWNER_ID, "notes.txt", b"two", "text/plain")

    assert first.key == second.key == f"{TEST_OWNER_ID}/notes.txt"
    assert first.version_id and second.version_id
    assert first.version_id != second.version_id

    head = s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key=first.key)
    assert head["ContentType"] == "text/plain"
    assert head["ServerSideEncryption"] == "AES256"


def test_put_defaults_content_type(object_store: ObjectStoreClient, s3_client):
    stored = object_store.put(TEST_OWNER_ID, "blob.bin", b"\x00\x01")

    head = s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key=stored.key)
    assert head["ContentType"] == "application/octet-stream"


def test_list_is_scoped_to_owner_and_skips_markers(object_store: ObjectStoreClient, s3_client):
    object_store.put(TEST_OWNER_ID, "a.txt", b"aaa")
    object_store.put(TEST_OWNER_ID, "docs/b.txt", b"bb")
    object_store.put(OTHER_OWNER_ID, "c.txt", b"c")
    s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key=f"{TEST_OWNER_ID}/", Body=b"")
    s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key=f"{TEST_OWNER_ID}/docs/", Body=b"")

    files = object_store.list(TEST_OWNER_ID)

    assert sorted((f.name, f.size_bytes) for f in files) == [("a.txt", 3), ("docs/b.txt", 2)]


def test_list_shows_only_current_version(object_store: ObjectStoreClient):
    object_store.put(TEST_OWNER_ID, "a.txt", b"short")
    object_store.put(TEST_OWNER_ID, "a.txt", b"much longer")

    (only,) = object_store.list(TEST_OWNER_ID)
    assert only.size_bytes == len(b"much longer")


def test_list_for_unknown_owner_is_empty(object_store: ObjectStoreClient):
    assert object_store.list("nobody") == []


def test_list_versions_matches_exact_key_in_creation_order(object_store: ObjectStoreClient):
    v1 = object_store.put(TEST_OWNER_ID, "a.txt", b"1")
    v2 = object_store.put(TEST_OWNER_ID, "a.txt", b"22")
    object_store.put(TEST_OWNER_ID, "a.txt.bak", b"backup")

    versions = object_store.list_versions(TEST_OWNER_ID, "a.txt")

    assert [v.version_id for v in versions] == [v1.version_id, v2.version_id]
    assert [v.size_bytes for v in versions] == [1, 2]
    assert [v.is_current for v in versions] == [False, True]


def test_list_versions_excludes_delete_markers(object_store: ObjectStoreClient):
    v1 = object_store.put(TEST_OWNER_ID, "a.txt", b"1")
    object_store.delete(TEST_OWNER_ID, "a.txt")

    versions = object_store.list_versions(TEST_OWNER_ID, "a.txt")

    assert [v.version_id for v in versions] == [v1.version_id]
    assert not versions[0].is_current


def test_list_versions_of_unknown_file_is_empty(object_store: ObjectStoreClient):
    assert object_store.list_versions(TEST_OWNER_ID, "missing.txt") == []


def test_delete_is_idempotent(object_store: ObjectStoreClient):
    object_store.put(TEST_OWNER_ID, "a.txt", b"1")

    assert object_store.delete(TEST_OWNER_ID, "a.txt") == f"{TEST_OWNER_ID}/a.txt"
    assert object_store.delete(TEST_OWNER_ID, "a.txt") == f"{TEST_OWNER_ID}/a.txt"
    assert object_store.delete(TEST_OWNER_ID, "never-existed.txt") == f"{TEST_OWNER_ID}/never-existed.txt"
    assert object_store.list(TEST_OWNER_ID) == []


def test_restore_copies_old_bytes_into_a_new_version(object_store: ObjectStoreClient, s3_client):
    v1 = object_store.put(TEST_OWNER_ID, "a.txt", b"original")
    v2 = object_store.put(TEST_OWNER_ID, "a.txt", b"changed")

    new_version_id = object_store.restore(TEST_OWNER_ID, "a.txt", v1.version_id)

    assert new_version_id not in (None, v1.version_id, v2.version_id)
    key = f"{TEST_OWNER_ID}/a.txt"
    current = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=key)
    assert current["Body"].read() == b"original"
    old = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=key, VersionId=v1.version_id)
    assert old["Body"].read() == b"original"
    assert len(object_store.list_versions(TEST_OWNER_ID, "a.txt")) == 3


def test_restore_of_unknown_version_is_not_found(object_store: ObjectStoreClient):
    object_store.put(TEST_OWNER_ID, "a.txt", b"1")

    with pytest.raises(NotFound):
        object_store.restore(TEST_OWNER_ID, "a.txt", "no-such-version")


def test_restore_after_delete_brings_file_back(object_store: ObjectStoreClient):
    v1 = object_store.put(TEST_OWNER_ID, "a.txt", b"keep me")
    object_store.delete(TEST_OWNER_ID, "a.txt")

    object_store.restore(TEST_OWNER_ID, "a.txt", v1.version_id)

    assert [f.name for f in object_store.list(TEST_OWNER_ID)] == ["a.txt"]


def test_authorize_download_round_trips_content(object_store: ObjectStoreClient):
    object_store.put(TEST_OWNER_ID, "a.txt", b"hello vault", "text/plain")

    authorization = object_store.authorize_download(TEST_OWNER_ID, "a.txt")

    assert authorization.expires_in_seconds == 300
    assert f"{TEST_OWNER_ID}/a.txt" in authorization.url
    assert "response-content-disposition" in authorization.url
    response = requests.get(authorization.url)
    assert response.status_code == 200
    assert response.content == b"hello vault"


def test_authorize_download_of_specific_version(object_store: ObjectStoreClient):
    v1 = object_store.put(TEST_OWNER_ID, "a.txt", b"first")
    object_store.put(TEST_OWNER_ID, "a.txt", b"second")

    authorization = object_store.authorize_download(TEST_OWNER_ID, "a.txt", v1.version_id)

    assert "versionId=" in authorization.url
    assert requests.get(authorization.url).content == b"first"


def test_authorize_download_uses_configured_expiry(s3_client):
    store = ObjectStoreClient(
        ObjectStoreConfig(bucket_name=TEST_BUCKET_NAME, download_expiry_seconds=60),
        s3_client,
    )
    store.put(TEST_OWNER_ID, "a.txt", b"x")

    authorization = store.authorize_download(TEST_OWNER_ID, "a.txt")

    assert authorization.expires_in_seconds == 60


def test_authorize_download_of_missing_file_is_not_found(object_store: ObjectStoreClient):
    with pytest.raises(NotFound):
        object_store.authorize_download(TEST_OWNER_ID, "missing.txt")


def test_missing_bucket_surfaces_as_store_unavailable(mocked_aws):
    store = ObjectStoreClient(
        ObjectStoreConfig(bucket_name="bucket-that-does-not-exist"),
        boto3.client("s3", region_name=TEST_REGION),
    )

    with pytest.raises(StoreUnavailable):
        store.put(TEST_OWNER_ID, "a.txt", b"1")
    with pytest.raises(StoreUnavailable):
        store.list(TEST_OWNER_ID)


def test_ensure_bucket_enables_versioning(mocked_aws):
    s3_client = boto3.client("s3", region_name=TEST_REGION)
    store = ObjectStoreClient(ObjectStoreConfig(bucket_name="fresh-bucket"), s3_client)

    assert store.ensure_bucket(TEST_REGION) is True
    assert store.ensure_bucket(TEST_REGION) is False
    assert s3_client.get_bucket_versioning(Bucket="fresh-bucket")["Status"] == "Enabled"
