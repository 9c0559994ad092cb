"""Local key/value storage adapters — implement StoragePort.

FileStorage keeps one JSON file per key under DATA_DIR; MemoryStorage keeps
everything in a dict for tests and throwaway sessions.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote

from studenthub.ports.storage_port import StorageError

logger = logging.getLogger(__name__)


class FileStorage:
    """File-backed implementation of StoragePort.

    Each write replaces the whole file in one ``os.replace`` so a reader
    never sees a half-written blob.
    """

    def __init__(self, data_dir: str | None = None) -> None:
        if data_dir is None:
            from studenthub.config import settings
            data_dir = settings.DATA_DIR

        self._dir = Path(data_dir)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self._dir / f"{quote(key, safe='')}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, suffix=".tmp")
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        logger.debug("Wrote %d chars to %s", len(value), path)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to remove {path}: {exc}") from exc


class MemoryStorage:
    """In-memory implementation of StoragePort."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
