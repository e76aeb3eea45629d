"""
File service: orchestrates the object store and the metadata index.

Consistency policy:
  - The object store call comes first and decides the outcome. Its errors
    propagate unchanged.
  - Metadata index calls follow, each inside a best-effort boundary. A failure
    there is logged and dropped; it never fails, retries or delays the
    operation.
  - Readers tolerate a stale or missing metadata record by falling back to
    what the object store reported.

Concurrent uploads/restores of the same file are not serialized here; the
last write S3 accepts becomes the current version.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional

from vault_api.adapters.metadata_index import MetadataIndex
from vault_api.adapters.object_store import ObjectStoreClient
from vault_api.errors import MetadataSyncFailure, ValidationError
from vault_api.models import MetadataRecord, StoredFile, object_key
from vault_api.schemas import (
    DeleteResult,
    DownloadResult,
    FileEntry,
    RestoreResult,
    UploadResult,
    VersionEntry,
)
from vault_api.utils.decorators import best_effort
from vault_api.versions import reconcile_versions

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def require_owner(owner_id: Optional[str]) -> str:
    if not owner_id:
        raise ValidationError("An authenticated user id is required")
    if "/" in owner_id:
        raise ValidationError("User id must not contain '/'")
    return owner_id


def require_name(name: Optional[str]) -> str:
    if not name or not name.strip():
        raise ValidationError("fileName parameter is required")
    if name.startswith("/") or name.endswith("/"):
        raise ValidationError("fileName must not start or end with '/'")
    return name


class FileService:
    """Upload, list, download, delete, list versions and restore a user's files."""

    def __init__(
        self,
        object_store: ObjectStoreClient,
        metadata_index: MetadataIndex,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        enrichment_workers: int = 8,
    ):
        self.object_store = object_store
        self.metadata_index = metadata_index
        self.max_upload_bytes = max_upload_bytes
        self.enrichment_workers = enrichment_workers

    # Best-effort metadata boundaries

    @best_effort(exceptions=(MetadataSyncFailure,), logger_name=__name__)
    def _record_upload(self, record: MetadataRecord) -> None:
        self.metadata_index.put(record)

    @best_effort(exceptions=(MetadataSyncFailure,), logger_name=__name__)
    def _record_restore(self, owner_id: str, file_key: str, version_id: Optional[str]) -> None:
        self.metadata_index.update_current_version(owner_id, file_key, version_id, utc_now_iso())

    @best_effort(exceptions=(MetadataSyncFailure,), logger_name=__name__)
    def _forget(self, owner_id: str, file_key: str) -> None:
        self.metadata_index.delete(owner_id, file_key)

    @best_effort(exceptions=(MetadataSyncFailure,), logger_name=__name__)
    def _lookup(self, owner_id: str, file_key: str) -> Optional[MetadataRecord]:
        return self.metadata_index.get(owner_id, file_key)

    # Operations

    def upload(self, owner_id: str, name: str, content: Optional[bytes],
               mime_type: Optional[str] = None) -> UploadResult:
        owner_id = require_owner(owner_id)
        name = require_name(name)
        if content is None:
            raise ValidationError("No file provided in request")
        if len(content) > self.max_upload_bytes:
            raise ValidationError(
                f"File size exceeds the upload limit of {self.max_upload_bytes} bytes"
            )
        mime_type = mime_type or DEFAULT_MIME_TYPE

        stored = self.object_store.put(owner_id, name, content, mime_type)

        self._record_upload(MetadataRecord(
            owner_id=owner_id,
            file_key=stored.key,
            file_name=name,
            current_version_id=stored.version_id,
            size_bytes=len(content),
            mime_type=mime_type,
            last_write_at=utc_now_iso(),
        ))

        return UploadResult(
            name=name,
            size=len(content),
            mime_type=mime_type,
            version_id=stored.version_id,
            key=stored.key,
        )

    def list_files(self, owner_id: str) -> List[FileEntry]:
        owner_id = require_owner(owner_id)
        files = self.object_store.list(owner_id)
        if not files:
            return []

        def enrich(stored: StoredFile) -> FileEntry:
            entry = FileEntry(
                name=stored.name,
                size=stored.size_bytes,
                last_modified=stored.last_modified,
            )
            record = self._lookup(owner_id, object_key(owner_id, stored.name))
            if record is None:
                return entry
            return entry.model_copy(update={
                "mime_type": record.mime_type or DEFAULT_MIME_TYPE,
                "current_version_id": record.current_version_id,
                "uploaded_at": record.last_write_at or stored.last_modified,
            })

        workers = min(self.enrichment_workers, len(files))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="enrich") as pool:
            return list(pool.map(enrich, files))

    def authorize_download(self, owner_id: str, name: str,
                           version_id: Optional[str] = None) -> DownloadResult:
        owner_id = require_owner(owner_id)
        name = require_name(name)
        authorization = self.object_store.authorize_download(owner_id, name, version_id or None)
        return DownloadResult(
            url=authorization.url,
            expires_in_seconds=authorization.expires_in_seconds,
        )

    def delete(self, owner_id: str, name: str) -> DeleteResult:
        owner_id = require_owner(owner_id)
        name = require_name(name)
        key = self.object_store.delete(owner_id, name)
        self._forget(owner_id, key)
        return DeleteResult(deleted=True, key=key)

    def list_versions(self, owner_id: str, name: str) -> List[VersionEntry]:
        owner_id = require_owner(owner_id)
        name = require_name(name)
        versions = reconcile_versions(self.object_store.list_versions(owner_id, name))
        return [
            VersionEntry(
                label=v.label,
                version_id=v.version_id,
                last_modified=v.last_modified,
                size=v.size_bytes,
                is_latest=v.is_latest,
            )
            for v in versions
        ]

    def restore(self, owner_id: str, name: str, version_id: str) -> RestoreResult:
        owner_id = require_owner(owner_id)
        name = require_name(name)
        if not version_id:
            raise ValidationError("fileName and versionId parameters are required")

        new_version_id = self.object_store.restore(owner_id, name, version_id)
        self._record_restore(owner_id, object_key(owner_id, name), new_version_id)

        return RestoreResult(
            new_version_id=new_version_id,
            restored_from_version_id=version_id,
        )
