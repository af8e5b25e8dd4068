"""In-memory implementation of key set storage."""

from __future__ import annotations

from typing import Optional

from ..exceptions import ReadFailureError
from .storage import KeySetStorage


class InMemoryKeySetStorage(KeySetStorage):
    """Keep the key set document in local memory.

    Useful for tests or ephemeral processes. Keys are lost on restart, so
    tokens signed by one process cannot be verified by the next.
    """

    location = "memory://"

    def __init__(self, document: Optional[str] = None) -> None:
        self.document = document
        self.writes = 0

    async def exists(self) -> bool:
        return self.document is not None

    async def read(self) -> str:
        if self.document is None:
            raise ReadFailureError("No key set stored in memory")
        return self.document

    async def write(self, document: str) -> None:
        self.document = document
        self.writes += 1

    def close(self) -> None:
        pass
