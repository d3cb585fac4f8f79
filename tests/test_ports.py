from vfolders.adapters.memory_blob_store import InMemoryBlobStore
from vfolders.adapters.memory_kv_store import InMemoryKeyValueStore
from vfolders.ports.blob_store_port import BlobStorePort
from vfolders.ports.folder_store_port import FolderStorePort
from vfolders.ports.key_value_port import KeyValueStorePort
from vfolders.ports.overlay_port import FileFolderMapPort, FileRenameOverlayPort
from vfolders.services.folder_store import FolderStore
from vfolders.services.overlay_store import FileFolderMap, FileRenameOverlay


def test_adapters_satisfy_ports() -> None:
    kv = InMemoryKeyValueStore()

    assert isinstance(kv, KeyValueStorePort)
    assert isinstance(InMemoryBlobStore(), BlobStorePort)
    assert isinstance(FolderStore(kv), FolderStorePort)
    assert isinstance(FileFolderMap(kv), FileFolderMapPort)
    assert isinstance(FileRenameOverlay(kv), FileRenameOverlayPort)


class DictStore:
    def __init__(self) -> None:
        self.data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def test_key_value_port_is_structural() -> None:
    store = DictStore()

    assert isinstance(store, KeyValueStorePort)
    FolderStore(store).create("A")
    assert "file_manager_folders" in store.data
