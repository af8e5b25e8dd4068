"""Errors raised by the key store and its storage backends."""

from __future__ import annotations


class KeyStoreError(Exception):
    """Base class for all jwkstore errors."""


class AccessProbeError(KeyStoreError):
    """The existence probe failed for a reason other than a missing record."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Cannot access key set at {location}: {reason}")
        self.location = location
        self.reason = reason


class CorruptStoreError(KeyStoreError):
    """A persisted record exists but is not a valid key set."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Key set at {location} is corrupt: {reason}")
        self.location = location
        self.reason = reason


class ReadFailureError(KeyStoreError):
    """Reading the persisted record failed."""


class WriteFailureError(KeyStoreError):
    """Writing the key set to storage failed."""


class KeyGenerationError(KeyStoreError):
    """Generating key material failed."""
