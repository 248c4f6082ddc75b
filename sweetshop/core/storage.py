"""Durable client storage: a small string key-value contract plus JSON helpers."""
from __future__ import annotations

import json
from typing import Any, Protocol

from .exceptions import StorageException


class KeyValueStorage(Protocol):
    """Subset of storage API required by the caches.

    Each cache owns one key (its namespace) and never touches the others.
    Writes are last-writer-wins.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage. Survives cache re-creation, not restarts."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def read_json(storage: KeyValueStorage, key: str) -> Any:
    """Return the decoded value under ``key`` or None when nothing is stored.

    Raises:
        StorageException: backend failure or a value that is not valid JSON
    """
    try:
        raw = storage.get(key)
    except Exception as exc:
        raise StorageException(f"Failed to read {key}: {exc}") from exc
    if raw is None or raw == "":
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        raise StorageException(f"Corrupt JSON under {key}: {exc}") from exc


def write_json(storage: KeyValueStorage, key: str, payload: Any) -> None:
    """Serialize ``payload`` and store it under ``key``.

    Raises:
        StorageException: payload not serializable or backend failure
    """
    try:
        serialized = json.dumps(payload, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise StorageException(f"Failed to serialize {key}: {exc}") from exc
    try:
        storage.set(key, serialized)
    except Exception as exc:
        raise StorageException(f"Failed to write {key}: {exc}") from exc


def remove_key(storage: KeyValueStorage, key: str) -> None:
    try:
        storage.delete(key)
    except Exception as exc:
        raise StorageException(f"Failed to delete {key}: {exc}") from exc
