from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class FileFolderMapPort(Protocol):
    def all(self) -> dict[str, str | None]:
        """Return every file -> folder assignment."""

    def is_mapped(self, file_id: str) -> bool:
        """Return True when the file has an explicit entry."""

    def folder_of(self, file_id: str) -> str | None:
        """Return the assigned folder id; None for root or unmapped."""

    def assign(self, file_id: str, folder_id: str | None) -> None:
        """Place a file under a folder (None for root)."""

    def assign_many(self, file_ids: Iterable[str], folder_id: str | None) -> None:
        """Place several files under one folder."""

    def forget(self, file_id: str) -> None:
        """Drop the entry for a file."""

    def release_folders(self, folder_ids: Iterable[str]) -> list[str]:
        """Drop entries pointing at the given folders; return affected file ids."""


@runtime_checkable
class FileRenameOverlayPort(Protocol):
    def all(self) -> dict[str, str]:
        """Return every file -> display name override."""

    def get(self, file_id: str) -> str | None:
        """Return the override for a file, if any."""

    def rename(self, file_id: str, display_name: str) -> None:
        """Persist a display name override."""

    def forget(self, file_id: str) -> None:
        """Drop the override for a file."""
