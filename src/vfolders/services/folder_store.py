from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from vfolders.domain.folder_tree import children_index, descendant_ids, resolve_path
from vfolders.domain.models import Folder
from vfolders.ports.folder_store_port import FolderStorePort
from vfolders.ports.key_value_port import KeyValueStorePort
from vfolders.services.json_collection import load_json, save_json
from vfolders.services.time_utils import new_folder_id, now_utc_iso

logger = logging.getLogger(__name__)

FOLDERS_KEY = "file_manager_folders"
_MUTABLE_FIELDS = {"name", "parent_id", "item_count"}


class FolderStore(FolderStorePort):
    """
    Folder collection persisted as one JSON list in a key-value store.

    Every mutation reads the whole collection, changes it in memory and writes
    it back. Concurrent writers race and the last write wins.
    """

    def __init__(
        self,
        kv: KeyValueStorePort,
        key: str = FOLDERS_KEY,
        id_factory: Callable[[], str] = new_folder_id,
        clock: Callable[[], str] = now_utc_iso,
    ) -> None:
        self._kv = kv
        self._key = key
        self._id_factory = id_factory
        self._clock = clock

    def create(self, name: str, parent_id: str | None = None) -> Folder:
        now = self._clock()
        folder = Folder(
            folder_id=self._id_factory(),
            name=name,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
            item_count=0,
        )
        folders = self._load()
        folders.append(folder)
        self._save(folders)
        logger.info("Created folder %s (%s) under %s", folder.folder_id, name, parent_id)
        return folder

    def get(self, folder_id: str) -> Folder | None:
        for folder in self._load():
            if folder.folder_id == folder_id:
                return folder
        return None

    def list_all(self) -> list[Folder]:
        return self._load()

    def list_by_parent(self, parent_id: str | None) -> list[Folder]:
        return [folder for folder in self._load() if folder.parent_id == parent_id]

    def update(self, folder_id: str, changes: dict[str, object]) -> Folder | None:
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unsupported folder fields: {', '.join(sorted(unknown))}")
        folders = self._load()
        for index, folder in enumerate(folders):
            if folder.folder_id != folder_id:
                continue
            updated = replace(folder, **changes, updated_at=self._clock())
            folders[index] = updated
            self._save(folders)
            return updated
        return None

    def delete(self, folder_id: str) -> set[str]:
        folders = self._load()
        removed = {folder_id} | descendant_ids(folders, folder_id)
        remaining = [folder for folder in folders if folder.folder_id not in removed]

        # Anything left pointing at a missing parent goes too, until stable.
        while True:
            present = {folder.folder_id for folder in remaining}
            dangling = {
                folder.folder_id
                for folder in remaining
                if folder.parent_id is not None and folder.parent_id not in present
            }
            if not dangling:
                break
            removed |= dangling
            remaining = [folder for folder in remaining if folder.folder_id not in dangling]

        removed &= {folder.folder_id for folder in folders}
        if removed:
            self._save(remaining)
            logger.info("Deleted folder %s and %s other folder(s)", folder_id, len(removed - {folder_id}))
        return removed

    def move(self, folder_id: str, new_parent_id: str | None) -> Folder | None:
        return self.update(folder_id, {"parent_id": new_parent_id})

    def path_to(self, folder_id: str) -> list[Folder]:
        by_id = {folder.folder_id: folder for folder in self._load()}
        return resolve_path(by_id, folder_id)

    def descendant_ids(self, folder_id: str) -> set[str]:
        return descendant_ids(self._load(), folder_id)

    def child_counts(self) -> dict[str | None, int]:
        return {
            parent_id: len(children)
            for parent_id, children in children_index(self._load()).items()
        }

    def _load(self) -> list[Folder]:
        folders: list[Folder] = []
        for item in load_json(self._kv, self._key, list):
            folder = Folder.from_dict(item)
            if folder is not None:
                folders.append(folder)
        return folders

    def _save(self, folders: list[Folder]) -> None:
        save_json(self._kv, self._key, [folder.to_dict() for folder in folders])
