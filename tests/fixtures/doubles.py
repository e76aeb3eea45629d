"""Test doubles for the metadata index."""
from vault_api.errors import MetadataSyncFailure


class FailingMetadataIndex:
    """Metadata index whose every call fails."""

    def __init__(self):
        self.calls = []

    def _fail(self, operation, *args):
        self.calls.append((operation, args))
        raise MetadataSyncFailure(f"simulated {operation} failure")

    def put(self, record):
        self._fail("put", record)

    def update_current_version(self, owner_id, file_key, version_id, timestamp):
        self._fail("update_current_version", owner_id, file_key, version_id, timestamp)

    def get(self, owner_id, file_key):
        self._fail("get", owner_id, file_key)

    def delete(self, owner_id, file_key):
        self._fail("delete", owner_id, file_key)


class SelectivelyFailingMetadataIndex:
    """Delegates to a real index but fails ``get`` for chosen file keys."""

    def __init__(self, index, failing_keys):
        self.index = index
        self.failing_keys = set(failing_keys)

    def put(self, record):
        self.index.put(record)

    def update_current_version(self, *args):
        self.index.update_current_version(*args)

    def delete(self, owner_id, file_key):
        self.index.delete(owner_id, file_key)

    def get(self, owner_id, file_key):
        if file_key in self.failing_keys:
            raise MetadataSyncFailure(f"simulated get failure for {file_key}")
        return self.index.get(owner_id, file_key)
