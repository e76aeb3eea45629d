"""Domain records exchanged between the stores and the file service."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


def object_key(owner_id: str, name: str) -> str:
    """Deterministic store key of a user's file."""
    return f"{owner_id}/{name}"


def owner_prefix(owner_id: str) -> str:
    return f"{owner_id}/"


@dataclass(frozen=True)
class StoredFile:
    """Current version of one file as reported by the object store listing."""
    name: str
    size_bytes: int
    last_modified: datetime


@dataclass(frozen=True)
class ObjectVersion:
    version_id: str
    size_bytes: int
    created_at: datetime
    is_current: bool


@dataclass(frozen=True)
class LabeledVersion:
    label: str
    version_id: str
    last_modified: datetime
    size_bytes: int
    is_latest: bool


@dataclass(frozen=True)
class PutResult:
    version_id: Optional[str]
    key: str


@dataclass(frozen=True)
class DownloadAuthorization:
    url: str
    expires_in_seconds: int


@dataclass
class MetadataRecord:
    """Cached attributes of a file; may be stale or missing at any time."""
    owner_id: str
    file_key: str
    file_name: str
    current_version_id: Optional[str] = None
    size_bytes: Optional[int] = None
    mime_type: Optional[str] = None
    last_write_at: Optional[str] = None
