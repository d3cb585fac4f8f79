from .directory_listing_service import DirectoryListingService
from .file_manager_service import FileManagerService
from .folder_store import FolderStore
from .folder_tree_service import FolderTreeService
from .navigator import Navigator
from .overlay_store import FileFolderMap, FileRenameOverlay
from .request_sequencer import RequestSequencer

__all__ = [
    "DirectoryListingService",
    "FileFolderMap",
    "FileManagerService",
    "FileRenameOverlay",
    "FolderStore",
    "FolderTreeService",
    "Navigator",
    "RequestSequencer",
]
