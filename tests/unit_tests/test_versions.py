from datetime import datetime, timedelta, timezone

from vault_api.models import ObjectVersion
from vault_api.versions import reconcile_versions

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_version(version_id: str, minutes: int, is_current: bool = False, size: int = 10) -> ObjectVersion:
    return ObjectVersion(
        version_id=version_id,
        size_bytes=size,
        created_at=T0 + timedelta(minutes=minutes),
        is_current=is_current,
    )


def test_no_versions_gives_empty_history():
    assert reconcile_versions([]) == []


def test_versions_are_sorted_oldest_first_and_labeled():
    versions = [
        make_version("c", 20, is_current=True),
        make_version("a", 0),
        make_version("b", 10),
    ]

    history = reconcile_versions(versions)

    assert [v.label for v in history] == ["V1", "V2", "V3"]
    assert [v.version_id for v in history] == ["a", "b", "c"]
    assert [v.is_latest for v in history] == [False, False, True]


def test_equal_timestamps_keep_input_order():
    versions = [
        make_version("first", 5),
        make_version("second", 5),
        make_version("third", 5, is_current=True),
    ]

    history = reconcile_versions(versions)

    assert [v.version_id for v in history] == ["first", "second", "third"]
    assert history[-1].is_latest


def test_fields_are_carried_over():
    (only,) = reconcile_versions([make_version("x", 3, is_current=True, size=42)])

    assert only.label == "V1"
    assert only.size_bytes == 42
    assert only.last_modified == T0 + timedelta(minutes=3)
    assert only.is_latest


def test_labels_of_older_versions_survive_appends():
    history = [make_version("a", 0), make_version("b", 1, is_current=True)]
    before = {v.version_id: v.label for v in reconcile_versions(history)}

    appended = [make_version("a", 0), make_version("b", 1), make_version("c", 2, is_current=True)]
    after = {v.version_id: v.label for v in reconcile_versions(appended)}

    assert after["a"] == before["a"] == "V1"
    assert after["b"] == before["b"] == "V2"
    assert after["c"] == "V3"


def test_no_latest_flag_when_current_version_was_deleted():
    history = reconcile_versions([make_version("a", 0), make_version("b", 1)])

    assert not any(v.is_latest for v in history)
