"""Tests for schema-versioned, fail-soft persistence."""

import json

import pytest

from pathlike.domain.likes import LikeRecord
from pathlike.storage.documents import LikesDocument
from pathlike.storage.versioned import VersionedStore
from pathlike.tracking.path_tracker import PathTracker
from tests.fakes import FakeKeyValueStore


@pytest.fixture
def like_record() -> LikeRecord:
    return LikeRecord(
        node_id="B",
        path=["root", "A", "B"],
        squashed_path=["root", "A", "B"],
        start_node="root",
        liked_at_ms=1234,
    )


def test_save_writes_versioned_document(
    storage: VersionedStore, fake_store: FakeKeyValueStore, like_record: LikeRecord
) -> None:
    assert storage.save("likes", LikesDocument(likes=[like_record])) is True

    data = json.loads(fake_store.entries["test_likes"])
    assert data["version"] == 1
    assert data["likes"][0]["node_id"] == "B"
    assert data["likes"][0]["squashed_path"] == ["root", "A", "B"]


def test_load_round_trip(storage: VersionedStore, like_record: LikeRecord) -> None:
    storage.save("likes", LikesDocument(likes=[like_record]))

    loaded = storage.load("likes", LikesDocument)

    assert loaded is not None
    assert loaded.likes == [like_record]


def test_load_missing_key(storage: VersionedStore) -> None:
    assert storage.load("likes", LikesDocument) is None


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2, 3]",
        '{"likes": []}',
        '{"version": 2, "likes": []}',
        '{"version": 1, "likes": [{"node_id": "A"}]}',
        '{"version": 1, "likes": "nope"}',
    ],
)
def test_corrupt_data_loads_as_empty(raw: str) -> None:
    """Bad JSON, wrong versions and invalid records are all treated as no prior state."""
    store = FakeKeyValueStore({"test_likes": raw})
    storage = VersionedStore(store, prefix="test_")

    assert storage.load("likes", LikesDocument) is None

    tracker = PathTracker(storage)
    assert tracker.get_all_likes() == []


def test_corrupt_history_does_not_drop_likes(like_record: LikeRecord) -> None:
    store = FakeKeyValueStore(
        {
            "test_likes": LikesDocument(likes=[like_record]).model_dump_json(),
            "test_browse_history": '{"version": 0, "entries": []}',
        }
    )

    tracker = PathTracker(VersionedStore(store, prefix="test_"))

    assert tracker.is_liked("B")
    assert tracker.get_browse_history() == []


def test_failed_write_is_reported_not_raised(like_record: LikeRecord) -> None:
    store = FakeKeyValueStore(fail_writes=True)
    storage = VersionedStore(store, prefix="test_")

    assert storage.save("likes", LikesDocument(likes=[like_record])) is False
    assert storage.remove("likes") is False


def test_failed_read_loads_as_empty() -> None:
    class BrokenStore(FakeKeyValueStore):
        def get(self, key: str) -> str | None:
            raise OSError("storage disabled")

    storage = VersionedStore(BrokenStore(), prefix="test_")

    assert storage.load("likes", LikesDocument) is None
