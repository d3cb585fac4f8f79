from __future__ import annotations

import time
from datetime import datetime, timezone
from uuid import uuid4


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_folder_id() -> str:
    return f"folder_{int(time.time() * 1000)}_{uuid4().hex[:9]}"
