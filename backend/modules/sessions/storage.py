"""
Durable key/value storage backends for the session store.

MemoryStorage keeps values for the lifetime of the object. JsonFileStorage
keeps one JSON document per browsing context on disk so stored sessions
survive an API restart.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from shared.exceptions import StorageError

from .interfaces import IKeyValueStorage


class MemoryStorage(IKeyValueStorage):
    """In-memory storage. Used for tests and when no storage dir is configured."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        """Stored keys, for inspection in tests and diagnostics."""
        return list(self._values)


class JsonFileStorage(IKeyValueStorage):
    """
    File-backed storage holding all keys in a single JSON object.

    Every write rewrites the file through a temporary file and os.replace,
    so a crash mid-write leaves the previous document intact.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected document in {self._path}")
        return data

    def _dump(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self._path)
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Non-string value stored under {key}", key=key)
        return value

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)

    def delete_file(self) -> None:
        """Remove the backing file entirely (browsing context teardown)."""
        try:
            self._path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot delete {self._path}: {e}") from e
