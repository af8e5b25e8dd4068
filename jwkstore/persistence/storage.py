"""Storage abstraction for the persisted key set document."""

from __future__ import annotations

from typing import Protocol


class KeySetStorage(Protocol):
    """Protocol for durable key set storage backends.

    Backends move the serialized document around; parsing and validation
    belong to the key store.
    """

    location: str

    async def exists(self) -> bool:
        """Return ``True`` if a readable and writable record exists.

        Raises:
            AccessProbeError: If the probe fails for any reason other than
                the record being absent.
        """

    async def read(self) -> str:
        """Return the persisted document."""

    async def write(self, document: str) -> None:
        """Persist ``document`` in a single write, replacing any record."""

    def close(self) -> None:
        """Release any connection held by the backend."""
