from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import replace

from vfolders.domain.errors import BlobStoreError
from vfolders.domain.folder_tree import sort_key
from vfolders.domain.models import (
    DirectoryListing,
    FileEntry,
    FileRecord,
    FolderEntry,
    FolderStats,
)
from vfolders.ports.blob_store_port import BlobStorePort
from vfolders.ports.folder_store_port import FolderStorePort
from vfolders.ports.overlay_port import FileFolderMapPort, FileRenameOverlayPort

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class DirectoryListingService:
    def __init__(
        self,
        folders: FolderStorePort,
        mappings: FileFolderMapPort,
        renames: FileRenameOverlayPort,
        blob_store: BlobStorePort,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._folders = folders
        self._mappings = mappings
        self._renames = renames
        self._blob_store = blob_store
        self._page_size = max(1, page_size)

    def list_directory(self, folder_id: str | None) -> DirectoryListing:
        """
        Merge the child folders of ``folder_id`` with the blob store files mapped to it.

        Files without a mapping entry live at root. At root, files mapped to a
        folder that no longer exists are shown as well, so a stale mapping never
        hides a file. A blob store failure still returns the local folders,
        with ``error`` carrying the message to show the user.
        """
        all_folders = self._folders.list_all()
        known_ids = {folder.folder_id for folder in all_folders}
        mapping = self._mappings.all()
        counts = _item_counts(mapping, all_folders)

        folder_entries = [
            FolderEntry(
                folder=replace(folder, item_count=counts.get(folder.folder_id, 0)),
                item_count=counts.get(folder.folder_id, 0),
            )
            for folder in all_folders
            if folder.parent_id == folder_id
        ]
        folder_entries.sort(key=lambda entry: sort_key(entry.folder.name, entry.item_id))

        error: str | None = None
        try:
            files = self.fetch_all_files()
        except BlobStoreError as exc:
            logger.exception("Failed to fetch files for folder %s", folder_id)
            files = []
            error = str(exc) or "Failed to fetch files"

        renames = self._renames.all()
        file_entries = [
            FileEntry(
                file=file_record,
                display_name=renames.get(file_record.file_id, file_record.name),
                folder_id=mapping.get(file_record.file_id),
            )
            for file_record in files
            if _belongs_to(file_record.file_id, folder_id, mapping, known_ids)
        ]
        file_entries.sort(key=lambda entry: sort_key(entry.display_name, entry.item_id))

        return DirectoryListing(
            folder_id=folder_id,
            items=[*folder_entries, *file_entries],
            error=error,
        )

    def fetch_all_files(self) -> list[FileRecord]:
        first = self._blob_store.list_files(page=1, limit=self._page_size)
        files = list(first.files)
        limit = first.limit if first.limit > 0 else self._page_size
        total_pages = math.ceil(first.total / limit) if first.total > len(files) else 1
        for page in range(2, total_pages + 1):
            result = self._blob_store.list_files(page=page, limit=limit)
            if not result.files:
                logger.warning(
                    "Blob store returned an empty page %s of %s; stopping", page, total_pages
                )
                break
            files.extend(result.files)

        unique: dict[str, FileRecord] = {}
        for file_record in files:
            unique.setdefault(file_record.file_id, file_record)
        return list(unique.values())

    def item_count(self, folder_id: str) -> int:
        mapping = self._mappings.all()
        mapped = sum(1 for target in mapping.values() if target == folder_id)
        return mapped + len(self._folders.list_by_parent(folder_id))

    def folder_stats(self, folder_id: str) -> FolderStats:
        mapping = self._mappings.all()
        files = [
            file_record
            for file_record in self.fetch_all_files()
            if mapping.get(file_record.file_id) == folder_id
        ]
        return FolderStats(
            folder_id=folder_id,
            files_count=len(files),
            folders_count=len(self._folders.list_by_parent(folder_id)),
            total_size=sum(file_record.size for file_record in files),
        )


def _item_counts(mapping: dict[str, str | None], folders) -> Counter:
    counts: Counter = Counter(target for target in mapping.values() if target is not None)
    counts.update(folder.parent_id for folder in folders if folder.parent_id is not None)
    return counts


def _belongs_to(
    file_id: str,
    folder_id: str | None,
    mapping: dict[str, str | None],
    known_ids: set[str],
) -> bool:
    if file_id not in mapping:
        return folder_id is None
    target = mapping[file_id]
    if target == folder_id:
        return True
    return folder_id is None and target not in known_ids
