import json

from vfolders.adapters.memory_kv_store import InMemoryKeyValueStore
from vfolders.services.overlay_store import (
    MAPPING_KEY,
    RENAMES_KEY,
    FileFolderMap,
    FileRenameOverlay,
)


def test_unmapped_file_reads_as_root() -> None:
    mappings = FileFolderMap(InMemoryKeyValueStore())

    assert mappings.is_mapped("f1") is False
    assert mappings.folder_of("f1") is None


def test_assign_distinguishes_explicit_root_from_unmapped() -> None:
    kv = InMemoryKeyValueStore()
    mappings = FileFolderMap(kv)

    mappings.assign("f1", "folder-a")
    mappings.assign("f2", None)

    assert mappings.all() == {"f1": "folder-a", "f2": None}
    assert mappings.is_mapped("f2") is True
    assert json.loads(kv.get(MAPPING_KEY)) == {"f1": "folder-a", "f2": None}


def test_assign_many_and_forget() -> None:
    mappings = FileFolderMap(InMemoryKeyValueStore())

    mappings.assign_many(["f1", "f2", "f3"], "folder-a")
    mappings.forget("f2")
    mappings.forget("missing")

    assert mappings.all() == {"f1": "folder-a", "f3": "folder-a"}


def test_release_folders_drops_matching_entries() -> None:
    mappings = FileFolderMap(InMemoryKeyValueStore())
    mappings.assign("f1", "a")
    mappings.assign("f2", "a1")
    mappings.assign("f3", "b")
    mappings.assign("f4", None)

    released = mappings.release_folders({"a", "a1"})

    assert sorted(released) == ["f1", "f2"]
    assert mappings.all() == {"f3": "b", "f4": None}


def test_invalid_mapping_values_are_ignored() -> None:
    kv = InMemoryKeyValueStore({MAPPING_KEY: json.dumps({"f1": 12, "f2": "a", "f3": ""})})
    mappings = FileFolderMap(kv)

    assert mappings.all() == {"f2": "a", "f3": None}


def test_invalid_json_reads_as_empty() -> None:
    kv = InMemoryKeyValueStore({MAPPING_KEY: "[oops", RENAMES_KEY: "[]"})

    assert FileFolderMap(kv).all() == {}
    assert FileRenameOverlay(kv).all() == {}


def test_rename_overlay_round_trip() -> None:
    kv = InMemoryKeyValueStore()
    renames = FileRenameOverlay(kv)

    renames.rename("f1", "Quarterly report.pdf")
    renames.rename("f2", "Logo.png")
    renames.forget("f2")

    assert renames.get("f1") == "Quarterly report.pdf"
    assert renames.get("f2") is None
    assert json.loads(kv.get(RENAMES_KEY)) == {"f1": "Quarterly report.pdf"}
