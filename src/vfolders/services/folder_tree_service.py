from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from vfolders.domain.folder_tree import (
    build_tree,
    dedupe_folders,
    exclusion_set,
    filter_by_name,
)
from vfolders.domain.models import Folder, FolderTreeNode
from vfolders.ports.folder_store_port import FolderStorePort

logger = logging.getLogger(__name__)

DEFAULT_FETCH_WORKERS = 4


class FolderTreeService:
    def __init__(self, folders: FolderStorePort, max_workers: int = DEFAULT_FETCH_WORKERS) -> None:
        self._folders = folders
        self._max_workers = max(1, max_workers)

    def discover_folders(self) -> list[Folder]:
        """
        Collect every folder reachable from root, one level at a time.

        Each level's parents are queried concurrently and the whole level is
        joined before the next one starts. A parent already queried in this
        run is never queried again, and a failed query yields no children.
        """
        visited: set[str | None] = set()
        discovered: list[Folder] = []
        level: list[str | None] = [None]
        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            while level:
                pending = [parent_id for parent_id in dict.fromkeys(level) if parent_id not in visited]
                visited.update(pending)
                future_map = {
                    executor.submit(self._fetch_children, parent_id): parent_id
                    for parent_id in pending
                }
                next_level: list[str | None] = []
                for future in as_completed(future_map):
                    children = future.result()
                    discovered.extend(children)
                    next_level.extend(child.folder_id for child in children)
                level = next_level
        return dedupe_folders(discovered)

    def build_tree(
        self,
        exclude_folder_id: str | None = None,
        search: str | None = None,
    ) -> list[FolderTreeNode]:
        universe = self.discover_folders()
        excluded = exclusion_set(universe, exclude_folder_id)
        allowed = [folder for folder in universe if folder.folder_id not in excluded]
        matching = filter_by_name(allowed, search)
        return build_tree(matching, universe=allowed)

    def move_targets(self, folder_id: str, search: str | None = None) -> list[FolderTreeNode]:
        return self.build_tree(exclude_folder_id=folder_id, search=search)

    def is_valid_move_target(self, folder_id: str, target_id: str | None) -> bool:
        if target_id is None:
            return True
        universe = self.discover_folders()
        if target_id not in {folder.folder_id for folder in universe}:
            return False
        return target_id not in exclusion_set(universe, folder_id)

    def _fetch_children(self, parent_id: str | None) -> list[Folder]:
        try:
            return list(self._folders.list_by_parent(parent_id))
        except Exception:
            logger.exception("Failed to fetch child folders of %s", parent_id)
            return []
