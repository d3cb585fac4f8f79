from __future__ import annotations

import argparse
import os
from collections import Counter
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from vfolders.adapters.sqlite_kv_store import SQLiteKeyValueStore
from vfolders.domain.folder_tree import build_tree, flatten_tree
from vfolders.services.folder_store import FolderStore
from vfolders.services.overlay_store import FileFolderMap, FileRenameOverlay


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the virtual folder tree stored in SQLite")
    parser.add_argument("--db", default=os.getenv("SQLITE_PATH", "vfolders.db"), help="SQLite DB path")
    args = parser.parse_args()

    kv = SQLiteKeyValueStore(args.db)
    folders = FolderStore(kv).list_all()
    mapping = FileFolderMap(kv).all()
    renames = FileRenameOverlay(kv).all()
    files_per_folder = Counter(folder_id for folder_id in mapping.values())

    print("DB:", args.db)
    print(f"Folders: {len(folders)}  Mapped files: {len(mapping)}  Renamed files: {len(renames)}")
    print(f"Root ({files_per_folder.get(None, 0)} mapped file(s))")
    nodes = flatten_tree(build_tree(folders))
    for node in nodes:
        indent = "  " * len(node.path)
        print(f"{indent}{node.name} [{node.folder_id}] files={files_per_folder.get(node.folder_id, 0)}")

    known_ids = {folder.folder_id for folder in folders}
    dangling = [folder for folder in folders if folder.parent_id and folder.parent_id not in known_ids]
    if dangling:
        print("\nFolders whose parent is missing (shown at top level above):")
        for folder in dangling:
            print(f"- {folder.name} [{folder.folder_id}] parent={folder.parent_id}")

    reachable = {node.folder_id for node in nodes}
    unreachable = [folder for folder in folders if folder.folder_id not in reachable]
    if unreachable:
        print("\nFolders caught in a parent cycle:")
        for folder in unreachable:
            print(f"- {folder.name} [{folder.folder_id}] parent={folder.parent_id}")


if __name__ == "__main__":
    main()
