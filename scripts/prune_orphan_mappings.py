from __future__ import annotations

import argparse
import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from vfolders.adapters.sqlite_kv_store import SQLiteKeyValueStore
from vfolders.services.folder_store import FolderStore
from vfolders.services.overlay_store import FileFolderMap


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Drop file mappings that point at folders which no longer exist"
    )
    parser.add_argument("--db", default=os.getenv("SQLITE_PATH", "vfolders.db"), help="SQLite DB path")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report orphaned mappings without changing anything",
    )
    args = parser.parse_args()

    kv = SQLiteKeyValueStore(args.db)
    known_ids = {folder.folder_id for folder in FolderStore(kv).list_all()}
    mappings = FileFolderMap(kv)
    orphaned_folder_ids = {
        folder_id
        for folder_id in mappings.all().values()
        if folder_id is not None and folder_id not in known_ids
    }
    if not orphaned_folder_ids:
        print("No orphaned mappings found.")
        return

    if args.dry_run:
        affected = [
            file_id
            for file_id, folder_id in mappings.all().items()
            if folder_id in orphaned_folder_ids
        ]
        print(f"Would release {len(affected)} file(s):")
    else:
        affected = mappings.release_folders(orphaned_folder_ids)
        print(f"Released {len(affected)} file(s) back to root:")
    for file_id in affected:
        print("-", file_id)


if __name__ == "__main__":
    main()
