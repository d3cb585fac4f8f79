from .errors import BlobStoreError, FolderNotFoundError, InvalidMoveTargetError
from .folder_tree import build_tree, descendant_ids, exclusion_set
from .models import (
    Breadcrumb,
    DirectoryListing,
    FileEntry,
    FilePage,
    FileRecord,
    Folder,
    FolderEntry,
    FolderTreeNode,
)
from .naming import clean_name

__all__ = [
    "BlobStoreError",
    "Breadcrumb",
    "DirectoryListing",
    "FileEntry",
    "FilePage",
    "FileRecord",
    "Folder",
    "FolderEntry",
    "FolderNotFoundError",
    "FolderTreeNode",
    "InvalidMoveTargetError",
    "build_tree",
    "clean_name",
    "descendant_ids",
    "exclusion_set",
]
