from __future__ import annotations

from typing import Protocol, runtime_checkable

from vfolders.domain.models import FilePage, FileRecord, FileUpload


@runtime_checkable
class BlobStorePort(Protocol):
    def list_files(
        self,
        page: int = 1,
        limit: int = 100,
        search: str | None = None,
        mime_type: str | None = None,
    ) -> FilePage:
        """Return one page of the flat file list with pagination totals."""

    def get_file(self, file_id: str) -> FileRecord:
        """Return a single file record; raise BlobStoreError if missing."""

    def upload_files(self, uploads: list[FileUpload]) -> list[FileRecord]:
        """Upload files and return the created records."""

    def delete_file(self, file_id: str) -> None:
        """Delete a file by id."""
