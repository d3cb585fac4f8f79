from __future__ import annotations

from typing import Any

from vfolders.adapters.http_blob_store import HttpBlobStoreAdapter
from vfolders.adapters.memory_blob_store import InMemoryBlobStore
from vfolders.adapters.sqlite_kv_store import SQLiteKeyValueStore
from vfolders.ports.blob_store_port import BlobStorePort
from vfolders.ports.key_value_port import KeyValueStorePort
from vfolders.services.directory_listing_service import DirectoryListingService
from vfolders.services.file_manager_service import FileManagerService
from vfolders.services.folder_store import FolderStore
from vfolders.services.folder_tree_service import FolderTreeService
from vfolders.services.navigator import Navigator
from vfolders.services.overlay_store import FileFolderMap, FileRenameOverlay
from vfolders.settings import (
    BLOB_STORE_ACCESS_TOKEN,
    BLOB_STORE_BASE_URL,
    LISTING_PAGE_SIZE,
    SQLITE_PATH,
    TREE_FETCH_WORKERS,
    USE_IN_MEMORY_BLOB_STORE,
)


def build_services(
    base_url: str = BLOB_STORE_BASE_URL,
    access_token: str = BLOB_STORE_ACCESS_TOKEN,
    sqlite_path: str = SQLITE_PATH,
    blob_store: BlobStorePort | None = None,
    kv: KeyValueStorePort | None = None,
) -> dict[str, Any]:
    if blob_store is None:
        if USE_IN_MEMORY_BLOB_STORE:
            blob_store = InMemoryBlobStore()
        else:
            blob_store = HttpBlobStoreAdapter(base_url, access_token)
    kv = kv or SQLiteKeyValueStore(sqlite_path)
    folder_store = FolderStore(kv)
    mappings = FileFolderMap(kv)
    renames = FileRenameOverlay(kv)
    listing_service = DirectoryListingService(
        folder_store, mappings, renames, blob_store, page_size=LISTING_PAGE_SIZE
    )
    tree_service = FolderTreeService(folder_store, max_workers=TREE_FETCH_WORKERS)
    navigator = Navigator(folder_store)
    return {
        "file_manager_service": FileManagerService(
            folder_store,
            mappings,
            renames,
            blob_store,
            listing_service,
            tree_service,
            navigator=navigator,
        ),
        "directory_listing_service": listing_service,
        "folder_tree_service": tree_service,
        "navigator": navigator,
        "folder_store": folder_store,
        "mappings": mappings,
        "renames": renames,
        "blob_store": blob_store,
        "kv": kv,
    }
