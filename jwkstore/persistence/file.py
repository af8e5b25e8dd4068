"""File implementation of key set storage."""

from __future__ import annotations

import asyncio
import errno
import os
import tempfile
from pathlib import Path

from ..exceptions import (
    AccessProbeError,
    CorruptStoreError,
    ReadFailureError,
    WriteFailureError,
)
from .storage import KeySetStorage

_ABSENT_ERRNOS = {errno.ENOENT, errno.ENOTDIR}


class FileKeySetStorage(KeySetStorage):
    """Persist the key set as a pretty-printed UTF-8 JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.location = str(self.path)

    # ------------------------------------------------------------------
    # Blocking helpers
    def _probe(self) -> bool:
        try:
            os.stat(self.path)
        except OSError as exc:
            if exc.errno in _ABSENT_ERRNOS:
                return False
            raise AccessProbeError(self.location, exc.strerror or str(exc)) from exc
        if not os.access(self.path, os.R_OK | os.W_OK):
            raise AccessProbeError(self.location, "read/write permission denied")
        return True

    def _read(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CorruptStoreError(self.location, f"not UTF-8 text: {exc}") from exc
        except OSError as exc:
            raise ReadFailureError(f"Cannot read {self.location}: {exc}") from exc

    def _write(self, document: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # os.replace only needs directory permissions; a read-only
            # record must survive.
            if os.path.lexists(self.path) and not os.access(self.path, os.W_OK):
                raise WriteFailureError(
                    f"Cannot write {self.location}: existing record is not writable"
                )
            # Write beside the target and swap it in so readers never see a
            # partial document. mkstemp creates the file with mode 0600.
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(document)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
                raise
        except OSError as exc:
            raise WriteFailureError(f"Cannot write {self.location}: {exc}") from exc

    # ------------------------------------------------------------------
    # Storage API
    def close(self) -> None:
        pass

    async def exists(self) -> bool:
        return await asyncio.to_thread(self._probe)

    async def read(self) -> str:
        return await asyncio.to_thread(self._read)

    async def write(self, document: str) -> None:
        await asyncio.to_thread(self._write, document)
