from __future__ import annotations

from typing import Protocol, runtime_checkable

from vfolders.domain.models import Folder


@runtime_checkable
class FolderStorePort(Protocol):
    def create(self, name: str, parent_id: str | None = None) -> Folder:
        """Create and persist a folder."""

    def get(self, folder_id: str) -> Folder | None:
        """Return a folder by id, or None if missing."""

    def list_all(self) -> list[Folder]:
        """Return every stored folder."""

    def list_by_parent(self, parent_id: str | None) -> list[Folder]:
        """Return folders whose parent id equals parent_id (None for root)."""

    def update(self, folder_id: str, changes: dict[str, object]) -> Folder | None:
        """Merge changes into a folder; None if the folder is missing."""

    def delete(self, folder_id: str) -> set[str]:
        """Delete a folder and all its descendants; return removed ids."""

    def move(self, folder_id: str, new_parent_id: str | None) -> Folder | None:
        """Re-parent a folder without validating the destination."""

    def path_to(self, folder_id: str) -> list[Folder]:
        """Return the ancestor chain of a folder, root-first, including itself."""

    def descendant_ids(self, folder_id: str) -> set[str]:
        """Return ids of every folder below folder_id."""
