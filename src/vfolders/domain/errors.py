from __future__ import annotations


class BlobStoreError(RuntimeError):
    """Raised when the remote blob store cannot complete a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FolderNotFoundError(LookupError):
    def __init__(self, folder_id: str) -> None:
        super().__init__(f"Folder not found: {folder_id}")
        self.folder_id = folder_id


class InvalidMoveTargetError(ValueError):
    """Raised when a folder would be moved into itself or one of its descendants."""

    def __init__(self, folder_id: str, target_id: str | None) -> None:
        super().__init__(
            f"Cannot move folder {folder_id} into {target_id}: target is the folder itself or a descendant."
        )
        self.folder_id = folder_id
        self.target_id = target_id
