from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStorePort(Protocol):
    def get(self, key: str) -> str | None:
        """Return the raw string stored under key, or None if absent."""

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove key if present."""
