"""
DynamoDB-backed metadata index.

Items are keyed by ``userId`` (partition) and ``fileKey`` (sort) and cache
what the object store listing cannot cheaply tell us: the MIME type, the
current version id and the time of the last write. The index is a cache,
never a source of truth. Every failure is raised as ``MetadataSyncFailure``
so callers can absorb it in one place.
"""

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterator, Optional

from vault_api.errors import MetadataSyncFailure
from vault_api.models import MetadataRecord
from vault_api.settings import MetadataIndexConfig

logger = logging.getLogger(__name__)


@contextmanager
def metadata_errors(operation: str, file_key: str) -> Iterator[None]:
    try:
        yield
    except Exception as e:
        raise MetadataSyncFailure(f"Metadata {operation} failed for {file_key}: {str(e)}") from e


def record_to_item(record: MetadataRecord) -> Dict[str, Any]:
    item = {
        "userId": record.owner_id,
        "fileKey": record.file_key,
        "fileName": record.file_name,
        "currentVersionId": record.current_version_id or "N/A",
        "mimeType": record.mime_type,
        "uploadedAt": record.last_write_at,
    }
    if record.size_bytes is not None:
        item["fileSize"] = record.size_bytes
    # DynamoDB rejects explicit nulls in put_item
    return {k: v for k, v in item.items() if v is not None}


def item_to_record(item: Dict[str, Any]) -> MetadataRecord:
    size = item.get("fileSize")
    version_id = item.get("currentVersionId")
    return MetadataRecord(
        owner_id=item["userId"],
        file_key=item["fileKey"],
        file_name=item.get("fileName", item["fileKey"].split("/", 1)[-1]),
        current_version_id=None if version_id in (None, "N/A") else version_id,
        size_bytes=int(size) if isinstance(size, (int, Decimal)) else None,
        mime_type=item.get("mimeType"),
        last_write_at=item.get("uploadedAt"),
    )


class MetadataIndex:
    """Key-value cache of per-file attributes in one DynamoDB table."""

    def __init__(self, config: MetadataIndexConfig, dynamodb_resource: Any):
        self.config = config
        self.dynamodb = dynamodb_resource
        self.table = dynamodb_resource.Table(config.table_name)

    def put(self, record: MetadataRecord) -> None:
        with metadata_errors("put", record.file_key):
            self.table.put_item(Item=record_to_item(record))
        logger.info(f"[DynamoDB] Metadata saved for {record.file_key}")

    def update_current_version(self, owner_id: str, file_key: str,
                               version_id: Optional[str], timestamp: str) -> None:
        """Point the record at a new current version, keeping its other attributes."""
        with metadata_errors("update", file_key):
            self.table.update_item(
                Key={"userId": owner_id, "fileKey": file_key},
                UpdateExpression="SET currentVersionId = :vid, uploadedAt = :ts",
                ExpressionAttributeValues={
                    ":vid": version_id or "N/A",
                    ":ts": timestamp,
                },
            )
        logger.info(f"[DynamoDB] Version updated for {file_key}")

    def get(self, owner_id: str, file_key: str) -> Optional[MetadataRecord]:
        with metadata_errors("get", file_key):
            response = self.table.get_item(Key={"userId": owner_id, "fileKey": file_key})
        item = response.get("Item")
        return item_to_record(item) if item else None

    def delete(self, owner_id: str, file_key: str) -> None:
        with metadata_errors("delete", file_key):
            self.table.delete_item(Key={"userId": owner_id, "fileKey": file_key})
        logger.info(f"[DynamoDB] Metadata deleted for {file_key}")

    def ensure_table(self) -> bool:
        """Create the table if it does not exist. Returns True if created."""
        client = self.dynamodb.meta.client
        with metadata_errors("provision", self.config.table_name):
            existing = client.list_tables().get("TableNames", [])
            if self.config.table_name in existing:
                return False
            client.create_table(
                TableName=self.config.table_name,
                KeySchema=[
                    {"AttributeName": "userId", "KeyType": "HASH"},
                    {"AttributeName": "fileKey", "KeyType": "RANGE"},
                ],
                AttributeDefinitions=[
                    {"AttributeName": "userId", "AttributeType": "S"},
                    {"AttributeName": "fileKey", "AttributeType": "S"},
                ],
                BillingMode="PAY_PER_REQUEST",
            )
            client.get_waiter("table_exists").wait(TableName=self.config.table_name)
        logger.info(f"[DynamoDB] Created table {self.config.table_name}")
        return True
