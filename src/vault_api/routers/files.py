from typing import Optional

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile, status

from vault_api.dependencies import get_file_service, get_owner_id
from vault_api.errors import ValidationError
from vault_api.schemas import (
    DeleteResponse,
    DownloadResponse,
    ListFilesResponse,
    ListVersionsResponse,
    RestoreResponse,
    UploadResponse,
)
from vault_api.services import FileService

router = APIRouter()


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_file(
    file: Optional[UploadFile] = File(None, description="The file to store"),
    owner_id: str = Depends(get_owner_id),
    service: FileService = Depends(get_file_service),
) -> UploadResponse:
    """
    Upload a file as a new version.

    Uploading the same name again keeps the earlier content as an older version.
    """
    if file is None:
        raise ValidationError("No file provided in request")
    content = file.file.read()
    result = service.upload(owner_id, file.filename, content, file.content_type)
    return UploadResponse(message="File uploaded successfully", file=result)


@router.get("/list", response_model=ListFilesResponse)
def list_files(
    owner_id: str = Depends(get_owner_id),
    service: FileService = Depends(get_file_service),
) -> ListFilesResponse:
    """List the current version of every file owned by the caller."""
    files = service.list_files(owner_id)
    return ListFilesResponse(message="Files retrieved successfully", count=len(files), files=files)


@router.get("/download/{name:path}", response_model=DownloadResponse)
def download_file(
    name: str = Path(..., description="Name of the file to download"),
    version_id: Optional[str] = Query(None, alias="versionId", description="Version to download"),
    owner_id: str = Depends(get_owner_id),
    service: FileService = Depends(get_file_service),
) -> DownloadResponse:
    """Return a time-limited download URL for the current or a given version."""
    result = service.authorize_download(owner_id, name, version_id)
    return DownloadResponse(
        message="Download URL generated",
        url=result.url,
        expires_in_seconds=result.expires_in_seconds,
        file_name=name,
        version_id=version_id or "latest",
    )


@router.delete("/delete/{name:path}", response_model=DeleteResponse)
def delete_file(
    name: str = Path(..., description="Name of the file to delete"),
    owner_id: str = Depends(get_owner_id),
    service: FileService = Depends(get_file_service),
) -> DeleteResponse:
    """Delete the current version of a file. Deleting a missing file succeeds."""
    result = service.delete(owner_id, name)
    return DeleteResponse(
        message="File deleted successfully",
        file_name=name,
        deleted=result.deleted,
        key=result.key,
    )


@router.get("/versions/{name:path}", response_model=ListVersionsResponse)
def list_versions(
    name: str = Path(..., description="Name of the file"),
    owner_id: str = Depends(get_owner_id),
    service: FileService = Depends(get_file_service),
) -> ListVersionsResponse:
    """List every version of a file, labeled V1 (oldest) to Vn (newest)."""
    versions = service.list_versions(owner_id, name)
    return ListVersionsResponse(
        message="Versions retrieved successfully",
        file_name=name,
        count=len(versions),
        versions=versions,
    )


@router.post("/restore/{name:path}/{version_id}", response_model=RestoreResponse)
def restore_version(
    name: str = Path(..., description="Name of the file"),
    version_id: str = Path(..., description="Version whose content becomes current"),
    owner_id: str = Depends(get_owner_id),
    service: FileService = Depends(get_file_service),
) -> RestoreResponse:
    """
    Restore a previous version.

    The old content is copied into a new current version; no version is
    removed or rewritten.
    """
    result = service.restore(owner_id, name, version_id)
    return RestoreResponse(
        message="Version restored successfully",
        file_name=name,
        new_version_id=result.new_version_id,
        restored_from_version_id=result.restored_from_version_id,
    )
