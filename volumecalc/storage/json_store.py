"""
JSON File Store
Local key-value store kept as a single JSON object on disk.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from volumecalc.core.errors import PersistenceError
from volumecalc.core.ports import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """Map of key -> string blob stored in one JSON file; a missing file is empty."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            raise PersistenceError(f"Value for {key!r} in {self.path} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except PersistenceError as e:
            logger.warning(f"Overwriting unreadable store {self.path}: {e}")
            data = {}
        data[key] = value
        self._write(data)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read store {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceError(f"Store {self.path} must contain a JSON object")
        return data

    def _write(self, data: dict[str, object]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Cannot write store {self.path}: {exc}") from exc
