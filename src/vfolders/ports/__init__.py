from .blob_store_port import BlobStorePort
from .folder_store_port import FolderStorePort
from .key_value_port import KeyValueStorePort
from .overlay_port import FileFolderMapPort, FileRenameOverlayPort

__all__ = [
    "BlobStorePort",
    "FileFolderMapPort",
    "FileRenameOverlayPort",
    "FolderStorePort",
    "KeyValueStorePort",
]
