from __future__ import annotations

from collections import deque
from typing import Iterable

from .models import Folder, FolderTreeNode


def sort_key(name: str, item_id: str) -> tuple[str, str, str]:
    return (name.casefold(), name, item_id)


def dedupe_folders(folders: Iterable[Folder]) -> list[Folder]:
    """
    Collapse duplicate folder ids into one entry, the last occurrence winning.

    First-seen position is preserved so repeated discovery of the same folder
    does not reorder the universe.
    """
    unique: dict[str, Folder] = {}
    for folder in folders:
        unique[folder.folder_id] = folder
    return list(unique.values())


def children_index(folders: Iterable[Folder]) -> dict[str | None, list[Folder]]:
    index: dict[str | None, list[Folder]] = {}
    for folder in folders:
        index.setdefault(folder.parent_id, []).append(folder)
    return index


def descendant_ids(folders: Iterable[Folder], folder_id: str) -> set[str]:
    """
    Return ids of every folder below ``folder_id``, not including it.

    Walks parent links breadth-first with a visited guard, so a corrupted
    collection that contains a cycle still terminates.

    Example:
        a = Folder("a", "A", None, "", "")
        a1 = Folder("a1", "A1", "a", "", "")
        descendant_ids([a, a1], "a")
        # {'a1'}
    """
    index = children_index(folders)
    found: set[str] = set()
    queue = deque([folder_id])
    while queue:
        parent_id = queue.popleft()
        for child in index.get(parent_id, []):
            if child.folder_id in found or child.folder_id == folder_id:
                continue
            found.add(child.folder_id)
            queue.append(child.folder_id)
    return found


def exclusion_set(folders: Iterable[Folder], exclude_folder_id: str | None) -> set[str]:
    if exclude_folder_id is None:
        return set()
    return {exclude_folder_id} | descendant_ids(folders, exclude_folder_id)


def filter_by_name(folders: Iterable[Folder], search: str | None) -> list[Folder]:
    term = (search or "").strip().casefold()
    if not term:
        return list(folders)
    return [folder for folder in folders if term in folder.name.casefold()]


def resolve_path(by_id: dict[str, Folder], folder_id: str) -> list[Folder]:
    """
    Follow parent links from ``folder_id`` up to root and return the chain root-first.

    A missing parent ends the walk with the partial chain; a parent seen twice
    (self-reference or cycle) ends it too.
    """
    chain: list[Folder] = []
    seen: set[str] = set()
    current_id: str | None = folder_id
    while current_id is not None and current_id not in seen:
        folder = by_id.get(current_id)
        if folder is None:
            break
        seen.add(current_id)
        chain.append(folder)
        current_id = folder.parent_id
    chain.reverse()
    return chain


def build_tree(
    folders: Iterable[Folder],
    universe: Iterable[Folder] | None = None,
) -> list[FolderTreeNode]:
    """
    Nest ``folders`` by parent id with siblings sorted by name at every level.

    ``universe`` is the full folder set used to resolve each node's display
    path; it defaults to ``folders``. A folder whose parent is not part of
    ``folders`` is placed at the top level.
    """
    selected = list(folders)
    by_id = {folder.folder_id: folder for folder in (universe if universe is not None else selected)}
    selected_ids = {folder.folder_id for folder in selected}
    index: dict[str | None, list[Folder]] = {}
    for folder in selected:
        parent_key = folder.parent_id if folder.parent_id in selected_ids else None
        if folder.parent_id == folder.folder_id:
            parent_key = None
        index.setdefault(parent_key, []).append(folder)

    placed: set[str] = set()

    def _node(folder: Folder) -> FolderTreeNode:
        placed.add(folder.folder_id)
        path = [item.name for item in resolve_path(by_id, folder.folder_id)] or [folder.name]
        return FolderTreeNode(folder=folder, path=path, children=_nodes(folder.folder_id))

    def _nodes(parent_id: str | None) -> list[FolderTreeNode]:
        siblings = sorted(
            index.get(parent_id, []),
            key=lambda folder: sort_key(folder.name, folder.folder_id),
        )
        return [_node(folder) for folder in siblings if folder.folder_id not in placed]

    roots = _nodes(None)
    # Parent cycles never reach the top level; hang each one from its first member.
    for folder in sorted(selected, key=lambda folder: sort_key(folder.name, folder.folder_id)):
        if folder.folder_id not in placed:
            roots.append(_node(folder))
    roots.sort(key=lambda node: sort_key(node.name, node.folder_id))
    return roots


def flatten_tree(nodes: Iterable[FolderTreeNode]) -> list[FolderTreeNode]:
    flat: list[FolderTreeNode] = []
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.children))
    return flat
