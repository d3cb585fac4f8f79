from __future__ import annotations

import logging
from typing import Iterable

from vfolders.ports.key_value_port import KeyValueStorePort
from vfolders.ports.overlay_port import FileFolderMapPort, FileRenameOverlayPort
from vfolders.services.json_collection import load_json, save_json

logger = logging.getLogger(__name__)

MAPPING_KEY = "file_folder_mapping"
RENAMES_KEY = "file_renames"


class FileFolderMap(FileFolderMapPort):
    """Local file -> folder assignments; a missing entry means the file sits at root."""

    def __init__(self, kv: KeyValueStorePort, key: str = MAPPING_KEY) -> None:
        self._kv = kv
        self._key = key

    def all(self) -> dict[str, str | None]:
        raw = load_json(self._kv, self._key, dict)
        mapping: dict[str, str | None] = {}
        for file_id, folder_id in raw.items():
            if folder_id is None or isinstance(folder_id, str):
                mapping[file_id] = folder_id or None
        return mapping

    def is_mapped(self, file_id: str) -> bool:
        return file_id in self.all()

    def folder_of(self, file_id: str) -> str | None:
        return self.all().get(file_id)

    def assign(self, file_id: str, folder_id: str | None) -> None:
        self.assign_many([file_id], folder_id)

    def assign_many(self, file_ids: Iterable[str], folder_id: str | None) -> None:
        mapping = self.all()
        count = 0
        for file_id in file_ids:
            mapping[file_id] = folder_id
            count += 1
        if count:
            save_json(self._kv, self._key, mapping)
            logger.info("Mapped %s file(s) to folder %s", count, folder_id)

    def forget(self, file_id: str) -> None:
        mapping = self.all()
        if mapping.pop(file_id, _MISSING) is not _MISSING:
            save_json(self._kv, self._key, mapping)

    def release_folders(self, folder_ids: Iterable[str]) -> list[str]:
        targets = set(folder_ids)
        mapping = self.all()
        released = [file_id for file_id, folder_id in mapping.items() if folder_id in targets]
        if released:
            for file_id in released:
                del mapping[file_id]
            save_json(self._kv, self._key, mapping)
            logger.info("Released %s file mapping(s) from deleted folders", len(released))
        return released


class FileRenameOverlay(FileRenameOverlayPort):
    def __init__(self, kv: KeyValueStorePort, key: str = RENAMES_KEY) -> None:
        self._kv = kv
        self._key = key

    def all(self) -> dict[str, str]:
        raw = load_json(self._kv, self._key, dict)
        return {file_id: name for file_id, name in raw.items() if isinstance(name, str) and name}

    def get(self, file_id: str) -> str | None:
        return self.all().get(file_id)

    def rename(self, file_id: str, display_name: str) -> None:
        renames = self.all()
        renames[file_id] = display_name
        save_json(self._kv, self._key, renames)
        logger.info("Stored display name override for file %s", file_id)

    def forget(self, file_id: str) -> None:
        renames = self.all()
        if renames.pop(file_id, None) is not None:
            save_json(self._kv, self._key, renames)


_MISSING = object()
