"""Derives the labeled version history of a file from the object store listing."""
from typing import Iterable, List

from vault_api.models import LabeledVersion, ObjectVersion


def reconcile_versions(versions: Iterable[ObjectVersion]) -> List[LabeledVersion]:
    """
    Order versions oldest first and label them ``V1``, ``V2``, ...

    Labels are positional and must be recomputed on every read. Versions
    with equal ``created_at`` keep their relative input order.
    """
    ordered = sorted(versions, key=lambda v: v.created_at)
    return [
        LabeledVersion(
            label=f"V{index}",
            version_id=version.version_id,
            last_modified=version.created_at,
            size_bytes=version.size_bytes,
            is_latest=version.is_current,
        )
        for index, version in enumerate(ordered, start=1)
    ]
