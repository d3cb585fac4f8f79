from __future__ import annotations

from dataclasses import dataclass, field

ROOT_NAME = "Root"
FOLDER_KIND = "folder"
FILE_KIND = "file"


@dataclass
class Folder:
    folder_id: str
    name: str
    parent_id: str | None
    created_at: str
    updated_at: str
    item_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.folder_id,
            "name": self.name,
            "parentId": self.parent_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "itemCount": self.item_count,
        }

    @classmethod
    def from_dict(cls, data: object) -> Folder | None:
        if not isinstance(data, dict):
            return None
        folder_id = data.get("id")
        if not isinstance(folder_id, str) or not folder_id:
            return None
        parent_id = data.get("parentId")
        if parent_id is not None and not isinstance(parent_id, str):
            parent_id = str(parent_id)
        item_count = data.get("itemCount", 0)
        return cls(
            folder_id=folder_id,
            name=str(data.get("name", "")),
            parent_id=parent_id or None,
            created_at=str(data.get("createdAt", "")),
            updated_at=str(data.get("updatedAt", "")),
            item_count=item_count if isinstance(item_count, int) else 0,
        )


@dataclass
class FileRecord:
    file_id: str
    name: str
    mime_type: str
    size: int
    url: str
    original_name: str | None = None
    updated_at: str | None = None


@dataclass
class FilePage:
    files: list[FileRecord]
    page: int
    limit: int
    total: int


@dataclass
class FileUpload:
    filename: str
    content: bytes
    mime_type: str = "application/octet-stream"


@dataclass
class FolderEntry:
    folder: Folder
    item_count: int
    kind: str = FOLDER_KIND

    @property
    def item_id(self) -> str:
        return self.folder.folder_id

    @property
    def display_name(self) -> str:
        return self.folder.name


@dataclass
class FileEntry:
    file: FileRecord
    display_name: str
    folder_id: str | None
    kind: str = FILE_KIND

    @property
    def item_id(self) -> str:
        return self.file.file_id

    @property
    def is_renamed(self) -> bool:
        return self.display_name != self.file.name


DirectoryItem = FolderEntry | FileEntry


@dataclass
class DirectoryListing:
    folder_id: str | None
    items: list[DirectoryItem] = field(default_factory=list)
    error: str | None = None

    @property
    def folders(self) -> list[FolderEntry]:
        return [item for item in self.items if isinstance(item, FolderEntry)]

    @property
    def files(self) -> list[FileEntry]:
        return [item for item in self.items if isinstance(item, FileEntry)]

    def matching(self, term: str | None) -> DirectoryListing:
        """Case-insensitive substring filter on display names; blank terms keep everything."""
        needle = (term or "").strip().casefold()
        if not needle:
            return self
        items = [item for item in self.items if needle in item.display_name.casefold()]
        return DirectoryListing(folder_id=self.folder_id, items=items, error=self.error)


@dataclass
class FolderStats:
    folder_id: str
    files_count: int
    folders_count: int
    total_size: int

    @property
    def total_items(self) -> int:
        return self.files_count + self.folders_count


@dataclass
class Breadcrumb:
    folder_id: str | None
    name: str


@dataclass
class FolderTreeNode:
    folder: Folder
    path: list[str]
    children: list[FolderTreeNode] = field(default_factory=list)

    @property
    def folder_id(self) -> str:
        return self.folder.folder_id

    @property
    def name(self) -> str:
        return self.folder.name

    @property
    def display_path(self) -> str:
        return " / ".join(self.path)
