"""
Durable key-value storage.

The game persists a single text document under a string key, the way a
browser would use localStorage. Stores know nothing about what the text
means; parsing and validation belong to the save layer.

Provides:
- KeyValueStore: the abstract contract
- MemoryStore: dict-backed store (tests, headless sessions)
- JsonFileStore: one file per key in a directory, atomic writes
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from kcengine.core.errors import KeyCombatError


class StorageError(KeyCombatError):
    """The storage medium failed to read or write."""


class KeyValueStore(ABC):
    """Opaque string-keyed text storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under key. Raises StorageError on failure."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""

    def has(self, key: str) -> bool:
        return self.get(key) is not None


class MemoryStore(KeyValueStore):
    """
    In-memory store.

    Args:
        capacity: Optional maximum total characters, to emulate a full
            quota the way a browser store rejects writes.
    """

    def __init__(self, capacity: Optional[int] = None):
        self._data: dict[str, str] = {}
        self.capacity = capacity

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.capacity is not None:
            used = sum(len(v) for k, v in self._data.items() if k != key)
            if used + len(value) > self.capacity:
                raise StorageError(f"Quota exceeded writing '{key}' ({len(value)} chars)")
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class JsonFileStore(KeyValueStore):
    """
    Directory-backed store: each key is a file named after it.

    Writes go to a temp file in the same directory and are moved into
    place, so a crash mid-write never leaves a truncated document.
    """

    def __init__(self, directory: str | Path = "saves", suffix: str = ".json"):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.suffix = suffix

    def _path(self, key: str) -> Path:
        safe = "".join(ch for ch in key if ch.isalnum() or ch in "_-")
        if not safe:
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.directory / f"{safe}{self.suffix}"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            if not path.exists():
                return None
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path: Optional[str] = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix="save_", suffix=".tmp", dir=self.directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e
