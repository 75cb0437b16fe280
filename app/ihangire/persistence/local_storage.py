"""
Purpose: String-keyed, string-valued local persistence (the app's "local
storage"). Values are JSON documents encoded as strings by the callers.

What is inside:
InMemoryStorage for tests and per-browser session records.
JsonFileStorage: one JSON object on disk mapping key -> value, rewritten
atomically on every change, with an optional byte quota.

Testing:
In-memory: simple state tests.
File: tmp_path fixture; quota and corrupted-file tests.
"""

from __future__ import annotations
import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from ..errors import StorageFailure
from ..utils.logging import get_logger

logger = get_logger(__name__)


class InMemoryStorage:
    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    def __init__(self, path: Path, *, quota_bytes: Optional[int] = None) -> None:
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Unreadable storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Storage file %s does not hold an object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, items: dict[str, str]) -> None:
        body = json.dumps(items, ensure_ascii=False)
        size = len(body.encode("utf-8"))
        if self.quota_bytes is not None and size > self.quota_bytes:
            raise StorageFailure(
                f"Storage quota exceeded: {size} > {self.quota_bytes} bytes"
            )
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        except OSError as e:
            raise StorageFailure(f"Failed to write {self.path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(body)
            os.replace(tmp, self.path)
        except OSError as e:
            Path(tmp).unlink(missing_ok=True)
            raise StorageFailure(f"Failed to write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = str(value)
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if items.pop(key, None) is not None:
            self._write(items)
