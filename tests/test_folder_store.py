import json
from itertools import count
from unittest.mock import Mock

import pytest

from vfolders.adapters.memory_kv_store import InMemoryKeyValueStore
from vfolders.adapters.sqlite_kv_store import SQLiteKeyValueStore
from vfolders.services.folder_store import FOLDERS_KEY, FolderStore


def _store(kv=None) -> FolderStore:
    ids = count(1)
    ticks = count(1)
    return FolderStore(
        kv or InMemoryKeyValueStore(),
        id_factory=lambda: f"folder-{next(ids)}",
        clock=lambda: f"2025-01-01T00:00:{next(ticks):02d}.000Z",
    )


def test_create_persists_folder_with_zero_item_count() -> None:
    kv = InMemoryKeyValueStore()
    store = _store(kv)

    folder = store.create("Invoices")

    assert folder.folder_id == "folder-1"
    assert folder.parent_id is None
    assert folder.item_count == 0
    assert folder.created_at == folder.updated_at
    stored = json.loads(kv.get(FOLDERS_KEY))
    assert stored == [
        {
            "id": "folder-1",
            "name": "Invoices",
            "parentId": None,
            "createdAt": folder.created_at,
            "updatedAt": folder.updated_at,
            "itemCount": 0,
        }
    ]


def test_list_by_parent_matches_exactly() -> None:
    store = _store()
    a = store.create("A")
    b = store.create("B")
    a1 = store.create("A1", a.folder_id)

    assert [f.folder_id for f in store.list_by_parent(None)] == [a.folder_id, b.folder_id]
    assert [f.folder_id for f in store.list_by_parent(a.folder_id)] == [a1.folder_id]
    assert store.list_by_parent(b.folder_id) == []


def test_get_missing_returns_none() -> None:
    store = _store()
    assert store.get("nope") is None


def test_update_merges_and_refreshes_updated_at() -> None:
    store = _store()
    folder = store.create("Old")

    updated = store.update(folder.folder_id, {"name": "New"})

    assert updated is not None
    assert updated.name == "New"
    assert updated.created_at == folder.created_at
    assert updated.updated_at != folder.updated_at
    assert store.get(folder.folder_id).name == "New"


def test_update_missing_returns_none_without_writing() -> None:
    kv = Mock()
    kv.get.return_value = "[]"
    store = FolderStore(kv)

    assert store.update("missing", {"name": "x"}) is None
    kv.set.assert_not_called()


def test_update_rejects_unknown_fields() -> None:
    store = _store()
    folder = store.create("A")

    with pytest.raises(ValueError, match="Unsupported folder fields"):
        store.update(folder.folder_id, {"folder_id": "other"})


def test_delete_cascades_to_all_descendants() -> None:
    store = _store()
    a = store.create("A")
    b = store.create("B")
    a1 = store.create("A1", a.folder_id)
    a1x = store.create("A1x", a1.folder_id)
    a2 = store.create("A2", a.folder_id)

    removed = store.delete(a.folder_id)

    assert removed == {a.folder_id, a1.folder_id, a1x.folder_id, a2.folder_id}
    assert [f.folder_id for f in store.list_all()] == [b.folder_id]
    for folder_id in removed:
        assert store.list_by_parent(folder_id) == []


def test_delete_prunes_dangling_children() -> None:
    kv = InMemoryKeyValueStore()
    kv.set(
        FOLDERS_KEY,
        json.dumps(
            [
                {"id": "a", "name": "A", "parentId": None},
                {"id": "orphan", "name": "Orphan", "parentId": "ghost"},
                {"id": "orphan-child", "name": "Orphan child", "parentId": "orphan"},
                {"id": "b", "name": "B", "parentId": None},
            ]
        ),
    )
    store = FolderStore(kv)

    removed = store.delete("a")

    assert removed == {"a", "orphan", "orphan-child"}
    assert [f.folder_id for f in store.list_all()] == ["b"]


def test_delete_missing_folder_is_noop() -> None:
    store = _store()
    store.create("A")

    assert store.delete("missing") == set()
    assert len(store.list_all()) == 1


def test_move_reparents_without_validation() -> None:
    store = _store()
    a = store.create("A")
    a1 = store.create("A1", a.folder_id)

    moved = store.move(a.folder_id, a1.folder_id)

    assert moved is not None
    assert moved.parent_id == a1.folder_id


def test_path_to_returns_root_first_chain() -> None:
    store = _store()
    a = store.create("A")
    a1 = store.create("A1", a.folder_id)
    a1x = store.create("A1x", a1.folder_id)

    path = store.path_to(a1x.folder_id)

    assert [f.name for f in path] == ["A", "A1", "A1x"]
    assert path[0].parent_id is None


def test_path_to_stops_at_broken_link() -> None:
    kv = InMemoryKeyValueStore()
    kv.set(
        FOLDERS_KEY,
        json.dumps(
            [
                {"id": "child", "name": "Child", "parentId": "ghost"},
                {"id": "leaf", "name": "Leaf", "parentId": "child"},
            ]
        ),
    )
    store = FolderStore(kv)

    assert [f.folder_id for f in store.path_to("leaf")] == ["child", "leaf"]
    assert store.path_to("ghost") == []


def test_path_to_terminates_on_self_reference_and_cycle() -> None:
    kv = InMemoryKeyValueStore()
    kv.set(
        FOLDERS_KEY,
        json.dumps(
            [
                {"id": "self", "name": "Self", "parentId": "self"},
                {"id": "x", "name": "X", "parentId": "y"},
                {"id": "y", "name": "Y", "parentId": "x"},
            ]
        ),
    )
    store = FolderStore(kv)

    assert [f.folder_id for f in store.path_to("self")] == ["self"]
    assert [f.folder_id for f in store.path_to("x")] == ["y", "x"]
    assert store.descendant_ids("x") == {"y"}


@pytest.mark.parametrize("raw", ["{not json", '{"id": "a"}', "42", ""])
def test_corrupt_store_reads_as_empty(raw) -> None:
    kv = InMemoryKeyValueStore({FOLDERS_KEY: raw})
    store = FolderStore(kv)

    assert store.list_all() == []
    assert store.list_by_parent(None) == []
    assert store.path_to("a") == []


def test_read_failure_reads_as_empty() -> None:
    kv = Mock()
    kv.get.side_effect = RuntimeError("Failed to read key")
    store = FolderStore(kv)

    assert store.list_all() == []
    assert store.get("a") is None


def test_malformed_entries_are_skipped() -> None:
    kv = InMemoryKeyValueStore(
        {FOLDERS_KEY: json.dumps([{"name": "no id"}, "junk", {"id": "ok", "name": "OK", "parentId": None}])}
    )
    store = FolderStore(kv)

    assert [f.folder_id for f in store.list_all()] == ["ok"]


def test_round_trip_through_sqlite(tmp_path) -> None:
    kv = SQLiteKeyValueStore(str(tmp_path / "test.db"))
    store = _store(kv)
    a = store.create("A")
    store.create("A1", a.folder_id)

    reopened = FolderStore(SQLiteKeyValueStore(str(tmp_path / "test.db")))

    assert [f.name for f in reopened.list_by_parent(a.folder_id)] == ["A1"]
