from __future__ import annotations

import json
import logging

from vfolders.ports.key_value_port import KeyValueStorePort

logger = logging.getLogger(__name__)


def load_json(kv: KeyValueStorePort, key: str, default_factory: type[list] | type[dict]):
    """
    Read and decode the JSON collection stored under ``key``.

    An absent key, an unreadable store, invalid JSON, or a value of the wrong
    container type all read as an empty collection of ``default_factory``.
    """
    try:
        raw = kv.get(key)
    except RuntimeError:
        logger.warning("Key-value store read failed for %s; treating as empty", key, exc_info=True)
        return default_factory()
    if raw is None or raw == "":
        return default_factory()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid JSON under %s; treating as empty", key)
        return default_factory()
    if not isinstance(data, default_factory):
        logger.warning("Unexpected %s under %s; treating as empty", type(data).__name__, key)
        return default_factory()
    return data


def save_json(kv: KeyValueStorePort, key: str, value: list | dict) -> None:
    kv.set(key, json.dumps(value, ensure_ascii=False))
