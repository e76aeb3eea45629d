####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes to camelCase JSON while accepting snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UploadResult(CamelModel):
    """Result of storing a new version of a file."""
    name: str = Field(json_schema_extra={"example": "report.pdf"})
    size: int = Field(description="Size of the uploaded content in bytes.")
    mime_type: str = Field(json_schema_extra={"example": "application/pdf"})
    version_id: Optional[str] = Field(description="Version id assigned by the object store.")
    key: str = Field(json_schema_extra={"example": "user-123/report.pdf"})


class FileEntry(CamelModel):
    """One file in a listing; the optional fields come from the metadata index."""
    name: str
    size: int
    last_modified: datetime
    mime_type: Optional[str] = None
    current_version_id: Optional[str] = None
    uploaded_at: Optional[Union[datetime, str]] = None


class DownloadResult(CamelModel):
    url: str
    expires_in_seconds: int


class DeleteResult(CamelModel):
    deleted: bool = True
    key: str


class VersionEntry(CamelModel):
    """A version of a file with its positional label (V1 is the oldest)."""
    label: str = Field(json_schema_extra={"example": "V2"})
    version_id: str
    last_modified: datetime
    size: int
    is_latest: bool


class RestoreResult(CamelModel):
    new_version_id: Optional[str]
    restored_from_version_id: str


class UploadResponse(CamelModel):
    """Response model for `POST /api/files/upload`."""
    message: str
    file: UploadResult

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "File uploaded successfully",
                "file": {
                    "name": "report.pdf",
                    "size": 512,
                    "mimeType": "application/pdf",
                    "versionId": "3HL4kqtJlcpXroDTDmJ.rmSpXd3dIbrHY",
                    "key": "user-123/report.pdf",
                },
            }
        }
    )


class ListFilesResponse(CamelModel):
    """Response model for `GET /api/files/list`."""
    message: str
    count: int
    files: List[FileEntry]


class DownloadResponse(CamelModel):
    """Response model for `GET /api/files/download/:name`."""
    message: str
    url: str
    expires_in_seconds: int
    file_name: str
    version_id: str = Field(description="Requested version, or 'latest'.")


class DeleteResponse(CamelModel):
    """Response model for `DELETE /api/files/delete/:name`."""
    message: str
    file_name: str
    deleted: bool
    key: str


class ListVersionsResponse(CamelModel):
    """Response model for `GET /api/files/versions/:name`."""
    message: str
    file_name: str
    count: int
    versions: List[VersionEntry]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Versions retrieved successfully",
                "fileName": "report.pdf",
                "count": 2,
                "versions": [
                    {"label": "V1", "versionId": "a1", "lastModified": "2024-01-01T00:00:00Z",
                     "size": 512, "isLatest": False},
                    {"label": "V2", "versionId": "b2", "lastModified": "2024-01-02T00:00:00Z",
                     "size": 640, "isLatest": True},
                ],
            }
        }
    )


class RestoreResponse(CamelModel):
    """Response model for `POST /api/files/restore/:name/:versionId`."""
    message: str
    file_name: str
    new_version_id: Optional[str]
    restored_from_version_id: str
