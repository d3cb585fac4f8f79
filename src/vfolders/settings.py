from __future__ import annotations

import logging
import os

BLOB_STORE_BASE_URL = os.getenv("BLOB_STORE_BASE_URL", "http://localhost:5000")
BLOB_STORE_ACCESS_TOKEN = os.getenv("BLOB_STORE_ACCESS_TOKEN", "")
SQLITE_PATH = os.getenv("SQLITE_PATH", "./vfolders.db")
LISTING_PAGE_SIZE = int(os.getenv("LISTING_PAGE_SIZE", "100"))
TREE_FETCH_WORKERS = int(os.getenv("TREE_FETCH_WORKERS", "4"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
USE_IN_MEMORY_BLOB_STORE = os.getenv("USE_IN_MEMORY_BLOB_STORE", "0").lower() in {"1", "true", "yes"}


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
