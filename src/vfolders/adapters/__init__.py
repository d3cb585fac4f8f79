from .http_blob_store import HttpBlobStoreAdapter
from .memory_blob_store import InMemoryBlobStore
from .memory_kv_store import InMemoryKeyValueStore
from .sqlite_kv_store import SQLiteKeyValueStore

__all__ = [
    "HttpBlobStoreAdapter",
    "InMemoryBlobStore",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
]
