"""SQLite implementation of key set storage."""

from __future__ import annotations

import asyncio
import sqlite3
from pathlib import Path

from ..exceptions import AccessProbeError, ReadFailureError, WriteFailureError
from .storage import KeySetStorage


class SQLiteKeySetStorage(KeySetStorage):
    """Persist named key set documents in a SQLite database."""

    def __init__(self, db_path: str | Path, name: str = "default"):
        self.db_path = str(db_path)
        self.name = name
        self.location = f"sqlite://{self.db_path}#{name}"
        self._conn: sqlite3.Connection | None = None

    # ------------------------------------------------------------------
    # Connection management
    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS key_sets (
                    name TEXT PRIMARY KEY,
                    document TEXT NOT NULL
                )
                """
            )
            conn.commit()
            self._conn = conn
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ------------------------------------------------------------------
    # Blocking helpers
    def _probe(self) -> bool:
        try:
            cur = self._connection().execute(
                "SELECT 1 FROM key_sets WHERE name = ?", (self.name,)
            )
            return cur.fetchone() is not None
        except (sqlite3.Error, OSError) as exc:
            raise AccessProbeError(self.location, str(exc)) from exc

    def _read(self) -> str:
        try:
            cur = self._connection().execute(
                "SELECT document FROM key_sets WHERE name = ?", (self.name,)
            )
            row = cur.fetchone()
        except (sqlite3.Error, OSError) as exc:
            raise ReadFailureError(f"Cannot read {self.location}: {exc}") from exc
        if row is None:
            raise ReadFailureError(f"No key set stored at {self.location}")
        return row[0]

    def _write(self, document: str) -> None:
        try:
            conn = self._connection()
            with conn:
                conn.execute(
                    "INSERT OR REPLACE INTO key_sets (name, document) VALUES (?, ?)",
                    (self.name, document),
                )
        except (sqlite3.Error, OSError) as exc:
            raise WriteFailureError(f"Cannot write {self.location}: {exc}") from exc

    # ------------------------------------------------------------------
    # Storage API
    async def exists(self) -> bool:
        return await asyncio.to_thread(self._probe)

    async def read(self) -> str:
        return await asyncio.to_thread(self._read)

    async def write(self, document: str) -> None:
        await asyncio.to_thread(self._write, document)
