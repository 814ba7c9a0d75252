"""Durable key-value storage for client session state."""

import json
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()


class KeyValueStorage(Protocol):
    """String key-value storage that outlives a single process run.

    Mirrors the browser localStorage contract: missing keys read as None
    and removing a missing key is not an error.
    """

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage, for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of every stored item."""
        return dict(self._items)


class FileStorage:
    """Storage backed by a single JSON object on disk.

    Each write replaces the file atomically. A file that cannot be parsed
    reads as empty, so a damaged session file never blocks startup.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the storage.

        Args:
            path: JSON file holding the stored items.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str) -> str | None:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._load()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key in items:
            del items[key]
            self._write(items)

    def _load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("session_storage_unreadable", path=str(self._path), error=str(e))
            return {}
        return raw if isinstance(raw, dict) else {}

    def _write(self, items: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w", dir=str(self._path.parent), delete=False, encoding="utf-8"
        ) as tf:
            json.dump(items, tf, indent=2)
            temp_path = Path(tf.name)
        try:
            os.replace(temp_path, self._path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
