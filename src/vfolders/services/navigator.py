from __future__ import annotations

from vfolders.domain.models import ROOT_NAME, Breadcrumb
from vfolders.ports.folder_store_port import FolderStorePort


class Navigator:
    """Breadcrumb stack for the folder being viewed; entry 0 is always root."""

    def __init__(self, folders: FolderStorePort, root_name: str = ROOT_NAME) -> None:
        self._folders = folders
        self._root = Breadcrumb(folder_id=None, name=root_name)
        self._stack: list[Breadcrumb] = [self._root]

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        return list(self._stack)

    @property
    def current_folder_id(self) -> str | None:
        return self._stack[-1].folder_id

    def navigate_into(self, folder_id: str | None, folder_name: str | None = None) -> list[Breadcrumb]:
        if folder_id is None:
            return self.navigate_to_root()
        for index, crumb in enumerate(self._stack):
            if crumb.folder_id == folder_id:
                del self._stack[index + 1 :]
                return self.breadcrumbs

        chain = self._folders.path_to(folder_id)
        stack = [self._root]
        stack.extend(Breadcrumb(folder_id=folder.folder_id, name=folder.name) for folder in chain)
        if not chain or chain[-1].folder_id != folder_id:
            stack.append(Breadcrumb(folder_id=folder_id, name=folder_name or folder_id))
        self._stack = stack
        return self.breadcrumbs

    def navigate_up(self) -> list[Breadcrumb]:
        if len(self._stack) > 1:
            self._stack.pop()
        return self.breadcrumbs

    def navigate_to_index(self, index: int) -> list[Breadcrumb]:
        if 0 <= index < len(self._stack):
            del self._stack[index + 1 :]
        return self.breadcrumbs

    def navigate_to_root(self) -> list[Breadcrumb]:
        self._stack = [self._root]
        return self.breadcrumbs
