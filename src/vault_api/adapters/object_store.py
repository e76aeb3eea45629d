"""
Object store client: the authoritative home of every file and its versions.

Wraps the S3 primitives in ``vault_api.s3`` behind per-user operations. All
keys are derived from ``(owner_id, name)`` so one user can never address
another user's objects. Every S3 failure is translated once into the vault's
error taxonomy and propagated; nothing here is retried or swallowed.
"""

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from vault_api.errors import NotFound, QuotaExceeded, StoreUnavailable
from vault_api.models import (
    DownloadAuthorization,
    ObjectVersion,
    PutResult,
    StoredFile,
    object_key,
    owner_prefix,
)
from vault_api.s3.bucket_setup import ensure_versioned_bucket
from vault_api.s3.delete_objects import delete_s3_object
from vault_api.s3.presign import generate_download_url
from vault_api.s3.read_objects import (
    fetch_s3_object_versions,
    fetch_s3_objects_metadata,
    head_s3_object,
)
from vault_api.s3.write_objects import copy_s3_object_version, upload_s3_object
from vault_api.settings import ObjectStoreConfig
from vault_api.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"404", "NoSuchKey", "NoSuchVersion", "NotFound"}
# S3 answers a malformed version id with a bare 400 and a delete-marker version with 405
BAD_VERSION_CODES = {"400", "BadRequest", "InvalidArgument", "405", "MethodNotAllowed"}
QUOTA_CODES = {"EntityTooLarge", "QuotaExceeded", "ServiceQuotaExceededException"}


@contextmanager
def translate_store_errors(operation: str, key: str, version_id: Optional[str] = None) -> Iterator[None]:
    """Re-raise botocore failures as ``NotFound``/``QuotaExceeded``/``StoreUnavailable``."""
    try:
        yield
    except ClientError as e:
        code = str(e.response.get("Error", {}).get("Code", ""))
        target = f"{key} (version {version_id})" if version_id else key
        logger.error(f"[S3] {operation} failed for {target}: {code} {str(e)}")
        if code in NOT_FOUND_CODES or (version_id and code in BAD_VERSION_CODES):
            raise NotFound(f"{target} does not exist") from e
        if code in QUOTA_CODES:
            raise QuotaExceeded(f"Object store refused {operation} of {key}: {code}") from e
        raise StoreUnavailable(f"Object store {operation} failed for {key}: {code or str(e)}") from e
    except BotoCoreError as e:
        logger.error(f"[S3] {operation} failed for {key}: {str(e)}")
        raise StoreUnavailable(f"Object store {operation} failed for {key}: {str(e)}") from e


class ObjectStoreClient:
    """Per-user file operations against one versioned S3 bucket."""

    def __init__(self, config: ObjectStoreConfig, s3_client: "S3Client"):
        self.config = config
        self.s3_client = s3_client

    @property
    def bucket_name(self) -> str:
        return self.config.bucket_name

    @log_execution_time
    def put(self, owner_id: str, name: str, content: bytes, mime_type: Optional[str] = None) -> PutResult:
        """Store ``content`` as a new current version; older versions are retained."""
        key = object_key(owner_id, name)
        with translate_store_errors("upload", key):
            response = upload_s3_object(
                bucket_name=self.bucket_name,
                object_key=key,
                file_content=content,
                s3_client=self.s3_client,
                content_type=mime_type,
                server_side_encryption=self.config.server_side_encryption,
            )
        version_id = response.get("VersionId")
        logger.info(f"[S3] Uploaded {key} - VersionId: {version_id}")
        return PutResult(version_id=version_id, key=key)

    @log_execution_time
    def list(self, owner_id: str) -> List[StoredFile]:
        """Current version of every file the user owns, minus directory markers."""
        prefix = owner_prefix(owner_id)
        with translate_store_errors("list", prefix):
            objects = fetch_s3_objects_metadata(self.bucket_name, prefix, self.s3_client)

        files = []
        for obj in objects:
            key = obj["Key"]
            if key == prefix or (key.endswith("/") and obj.get("Size", 0) == 0):
                continue
            files.append(StoredFile(
                name=key[len(prefix):],
                size_bytes=obj.get("Size", 0),
                last_modified=obj["LastModified"],
            ))
        return files

    @log_execution_time
    def list_versions(self, owner_id: str, name: str) -> List[ObjectVersion]:
        """Content versions of one file, delete markers excluded.

        S3 lists versions newest first; they are handed back reversed, i.e. in
        creation order. Callers must still sort before relying on the order.
        """
        key = object_key(owner_id, name)
        with translate_store_errors("list versions", key):
            raw_versions = fetch_s3_object_versions(self.bucket_name, key, self.s3_client)

        return [
            ObjectVersion(
                version_id=v["VersionId"],
                size_bytes=v.get("Size", 0),
                created_at=v["LastModified"],
                is_current=bool(v.get("IsLatest", False)),
            )
            for v in reversed(raw_versions)
        ]

    @log_execution_time
    def authorize_download(self, owner_id: str, name: str,
                           version_id: Optional[str] = None) -> DownloadAuthorization:
        """Presigned GET for the current version, or for ``version_id``."""
        key = object_key(owner_id, name)
        with translate_store_errors("authorize download", key, version_id):
            head_s3_object(self.bucket_name, key, self.s3_client, version_id=version_id)
            url = generate_download_url(
                bucket_name=self.bucket_name,
                object_key=key,
                download_name=name.rsplit("/", 1)[-1],
                expires_in=self.config.download_expiry_seconds,
                s3_client=self.s3_client,
                version_id=version_id,
            )
        logger.info(f"[S3] Signed URL generated for {key}")
        return DownloadAuthorization(url=url, expires_in_seconds=self.config.download_expiry_seconds)

    @log_execution_time
    def delete(self, owner_id: str, name: str) -> str:
        """Remove the current version pointer. Absent keys are not an error."""
        key = object_key(owner_id, name)
        with translate_store_errors("delete", key):
            delete_s3_object(self.bucket_name, key, self.s3_client)
        logger.info(f"[S3] Deleted {key}")
        return key

    @log_execution_time
    def restore(self, owner_id: str, name: str, version_id: str) -> Optional[str]:
        """Copy ``version_id`` into a brand-new current version; returns its id."""
        key = object_key(owner_id, name)
        with translate_store_errors("restore", key, version_id):
            response = copy_s3_object_version(
                bucket_name=self.bucket_name,
                object_key=key,
                source_version_id=version_id,
                s3_client=self.s3_client,
                server_side_encryption=self.config.server_side_encryption,
            )
        new_version_id = response.get("VersionId")
        logger.info(f"[S3] Restored {key} from {version_id} -> new VersionId: {new_version_id}")
        return new_version_id

    def ensure_bucket(self, region: str) -> bool:
        with translate_store_errors("provision", self.bucket_name):
            return ensure_versioned_bucket(self.bucket_name, region, self.s3_client)
