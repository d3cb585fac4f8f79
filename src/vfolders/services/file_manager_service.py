from __future__ import annotations

import logging
from typing import Iterable

from vfolders.domain.errors import FolderNotFoundError, InvalidMoveTargetError
from vfolders.domain.models import (
    Breadcrumb,
    DirectoryListing,
    FileRecord,
    FileUpload,
    Folder,
    FolderStats,
    FolderTreeNode,
)
from vfolders.domain.naming import clean_name
from vfolders.ports.blob_store_port import BlobStorePort
from vfolders.ports.folder_store_port import FolderStorePort
from vfolders.ports.overlay_port import FileFolderMapPort, FileRenameOverlayPort
from vfolders.services.directory_listing_service import DirectoryListingService
from vfolders.services.folder_tree_service import FolderTreeService
from vfolders.services.navigator import Navigator
from vfolders.services.request_sequencer import RequestSequencer

logger = logging.getLogger(__name__)

_CURRENT_FOLDER = object()


class FileManagerService:
    """
    Orchestrates the file manager screen: navigation, listings and the
    folder/file mutations that keep the local hierarchy in step with the
    blob store.
    """

    def __init__(
        self,
        folders: FolderStorePort,
        mappings: FileFolderMapPort,
        renames: FileRenameOverlayPort,
        blob_store: BlobStorePort,
        listing_service: DirectoryListingService,
        tree_service: FolderTreeService,
        navigator: Navigator | None = None,
        sequencer: RequestSequencer | None = None,
    ) -> None:
        self._folders = folders
        self._mappings = mappings
        self._renames = renames
        self._blob_store = blob_store
        self._listing_service = listing_service
        self._tree_service = tree_service
        self._navigator = navigator or Navigator(folders)
        self._sequencer = sequencer or RequestSequencer()
        self._listing: DirectoryListing | None = None

    @property
    def current_folder_id(self) -> str | None:
        return self._navigator.current_folder_id

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        return self._navigator.breadcrumbs

    @property
    def listing(self) -> DirectoryListing | None:
        return self._listing

    def refresh(self) -> DirectoryListing | None:
        """
        List the current folder. Returns None when a newer request started
        while this one was running; the newer result is kept instead.
        """
        token = self._sequencer.begin()
        folder_id = self._navigator.current_folder_id
        listing = self._listing_service.list_directory(folder_id)
        if not self._sequencer.is_current(token):
            logger.info("Discarding stale listing for folder %s", folder_id)
            return None
        self._listing = listing
        return listing

    def open_folder(self, folder_id: str | None, folder_name: str | None = None) -> DirectoryListing | None:
        self._navigator.navigate_into(folder_id, folder_name)
        return self.refresh()

    def go_up(self) -> DirectoryListing | None:
        self._navigator.navigate_up()
        return self.refresh()

    def go_to_breadcrumb(self, index: int) -> DirectoryListing | None:
        self._navigator.navigate_to_index(index)
        return self.refresh()

    def create_folder(self, name: str, parent_id: str | None | object = _CURRENT_FOLDER) -> Folder:
        target_parent = self.current_folder_id if parent_id is _CURRENT_FOLDER else parent_id
        if target_parent is not None:
            self._require_folder(target_parent)
        return self._folders.create(clean_name(name), target_parent)

    def rename_folder(self, folder_id: str, name: str) -> Folder:
        folder = self._folders.update(folder_id, {"name": clean_name(name)})
        if folder is None:
            raise FolderNotFoundError(folder_id)
        return folder

    def delete_folder(self, folder_id: str) -> set[str]:
        self._require_folder(folder_id)
        removed = self._folders.delete(folder_id)
        released = self._mappings.release_folders(removed)
        logger.info(
            "Deleted %s folder(s); %s file(s) returned to root", len(removed), len(released)
        )
        if self.current_folder_id in removed:
            self._navigator.navigate_to_root()
        return removed

    def move_folder(self, folder_id: str, target_parent_id: str | None) -> Folder:
        self._require_folder(folder_id)
        if not self._tree_service.is_valid_move_target(folder_id, target_parent_id):
            raise InvalidMoveTargetError(folder_id, target_parent_id)
        moved = self._folders.move(folder_id, target_parent_id)
        if moved is None:
            raise FolderNotFoundError(folder_id)
        return moved

    def move_targets(self, folder_id: str, search: str | None = None) -> list[FolderTreeNode]:
        return self._tree_service.move_targets(folder_id, search=search)

    def folder_stats(self, folder_id: str) -> FolderStats:
        self._require_folder(folder_id)
        return self._listing_service.folder_stats(folder_id)

    def rename_file(self, file_id: str, name: str) -> None:
        display_name = clean_name(name)
        self._blob_store.get_file(file_id)
        self._renames.rename(file_id, display_name)

    def move_file(self, file_id: str, folder_id: str | None) -> None:
        self.move_files([file_id], folder_id)

    def move_files(self, file_ids: Iterable[str], folder_id: str | None) -> None:
        if folder_id is not None:
            self._require_folder(folder_id)
        self._mappings.assign_many(list(file_ids), folder_id)

    def delete_file(self, file_id: str) -> None:
        self._blob_store.delete_file(file_id)
        self._mappings.forget(file_id)
        self._renames.forget(file_id)

    def upload_files(self, uploads: list[FileUpload]) -> list[FileRecord]:
        if not uploads:
            return []
        records = self._blob_store.upload_files(uploads)
        folder_id = self.current_folder_id
        if folder_id is not None and records:
            self._mappings.assign_many([record.file_id for record in records], folder_id)
        logger.info("Uploaded %s file(s) into folder %s", len(records), folder_id)
        return records

    def _require_folder(self, folder_id: str) -> Folder:
        folder = self._folders.get(folder_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)
        return folder
