"""In-process key-value store for tests and throwaway sessions."""

from __future__ import annotations

from typing import Optional

from volumecalc.core.ports import KeyValueStore


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
