import pytest

from vfolders.adapters.memory_blob_store import InMemoryBlobStore
from vfolders.domain.errors import BlobStoreError
from vfolders.domain.models import FileUpload


def test_pages_through_uploaded_files() -> None:
    store = InMemoryBlobStore()
    store.upload_files([FileUpload(filename=f"{i}.txt", content=b"x") for i in range(5)])

    first = store.list_files(page=1, limit=2)
    last = store.list_files(page=3, limit=2)

    assert first.total == 5
    assert [f.name for f in first.files] == ["0.txt", "1.txt"]
    assert [f.name for f in last.files] == ["4.txt"]


def test_delete_missing_file_raises() -> None:
    with pytest.raises(BlobStoreError):
        InMemoryBlobStore().delete_file("missing")


def test_invalid_page_raises() -> None:
    with pytest.raises(BlobStoreError):
        InMemoryBlobStore().list_files(page=0)
