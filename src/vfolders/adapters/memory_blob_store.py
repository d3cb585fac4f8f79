from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from vfolders.domain.errors import BlobStoreError
from vfolders.domain.models import FilePage, FileRecord, FileUpload
from vfolders.ports.blob_store_port import BlobStorePort


class InMemoryBlobStore(BlobStorePort):
    """Flat blob store kept in process memory, paginated like the uploads API."""

    def __init__(self, files: list[FileRecord] | None = None) -> None:
        self._files: list[FileRecord] = list(files or [])
        self._contents: dict[str, bytes] = {}

    def list_files(
        self,
        page: int = 1,
        limit: int = 100,
        search: str | None = None,
        mime_type: str | None = None,
    ) -> FilePage:
        if page < 1 or limit < 1:
            raise BlobStoreError("page and limit must be positive", status_code=400)
        matching = self._files
        if search:
            term = search.casefold()
            matching = [record for record in matching if term in record.name.casefold()]
        if mime_type:
            matching = [record for record in matching if mime_type in record.mime_type]
        start = (page - 1) * limit
        return FilePage(
            files=list(matching[start : start + limit]),
            page=page,
            limit=limit,
            total=len(matching),
        )

    def get_file(self, file_id: str) -> FileRecord:
        for record in self._files:
            if record.file_id == file_id:
                return record
        raise BlobStoreError(f"File not found: {file_id}", status_code=404)

    def upload_files(self, uploads: list[FileUpload]) -> list[FileRecord]:
        created: list[FileRecord] = []
        for upload in uploads:
            file_id = uuid4().hex
            record = FileRecord(
                file_id=file_id,
                name=upload.filename,
                mime_type=upload.mime_type,
                size=len(upload.content),
                url=f"memory://uploads/{file_id}",
                original_name=upload.filename,
                updated_at=datetime.now(timezone.utc).isoformat(),
            )
            self._contents[file_id] = upload.content
            self._files.append(record)
            created.append(record)
        return created

    def delete_file(self, file_id: str) -> None:
        record = self.get_file(file_id)
        self._files.remove(record)
        self._contents.pop(file_id, None)
