"""Persistence layer for key set documents."""

from __future__ import annotations

import os
from typing import Optional

from ..config import JwkStoreConfig, load_config
from .file import FileKeySetStorage
from .inmemory import InMemoryKeySetStorage
from .sqlite import SQLiteKeySetStorage
from .storage import KeySetStorage


def get_storage(
    location: Optional[str] = None, config: Optional[JwkStoreConfig] = None
) -> KeySetStorage:
    """Factory function to obtain a key set storage backend.

    The backend is selected from ``location``, which can be provided
    explicitly, via environment variable ``JWKSTORE_LOCATION``, or from loaded
    configuration. ``memory://`` selects in-memory storage, ``sqlite://<path>``
    a SQLite database, and a plain or ``file://`` path a JSON file.
    """

    if location is None:
        config = config or load_config()
        location = os.getenv("JWKSTORE_LOCATION") or config.store.location

    if location.startswith("memory://"):
        return InMemoryKeySetStorage()
    if location.startswith("sqlite://"):
        path = location.replace("sqlite://", "", 1)
        return SQLiteKeySetStorage(path)
    if location.startswith("file://"):
        return FileKeySetStorage(location.replace("file://", "", 1))
    if "://" in location:
        raise ValueError(f"Unsupported storage location: {location}")
    return FileKeySetStorage(location)


__all__ = [
    "KeySetStorage",
    "FileKeySetStorage",
    "SQLiteKeySetStorage",
    "InMemoryKeySetStorage",
    "get_storage",
]
