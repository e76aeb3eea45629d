"""
Vault service layer.

Wires the object store client and the metadata index into a ``FileService``
from application settings.
"""
from typing import Optional

from vault_api.adapters.metadata_index import MetadataIndex
from vault_api.adapters.object_store import ObjectStoreClient
from vault_api.aws.utils import AWSClientManager
from vault_api.settings import Settings, get_settings

from .file_service import FileService


def build_file_service(settings: Optional[Settings] = None,
                       clients: Optional[AWSClientManager] = None) -> FileService:
    """Construct a ``FileService`` whose stores are configured from ``settings``."""
    settings = settings or get_settings()
    clients = clients or AWSClientManager(settings)
    return FileService(
        object_store=ObjectStoreClient(settings.object_store_config(), clients.s3_client()),
        metadata_index=MetadataIndex(settings.metadata_index_config(), clients.dynamodb_resource()),
        max_upload_bytes=settings.max_upload_bytes,
        enrichment_workers=settings.enrichment_workers,
    )


__all__ = ['FileService', 'build_file_service']
