"""jwkstore: generate-once JWKS signing key store."""

from __future__ import annotations

from typing import Optional

from .config import JwkStoreConfig, load_config
from .exceptions import (
    AccessProbeError,
    CorruptStoreError,
    KeyGenerationError,
    KeyStoreError,
    ReadFailureError,
    WriteFailureError,
)
from .generation import DEFAULT_KEY_SPECS, KeySpec
from .models import ECKey, Key, KeySet, RSAKey
from .persistence import get_storage
from .store import KeyStore

__version__ = "0.1.0"

_key_store_instance: KeyStore | None = None


def get_key_store(
    location: Optional[str] = None, config: Optional[JwkStoreConfig] = None
) -> KeyStore:
    """Factory function to obtain a key store.

    Without arguments the process-wide instance is returned, built from
    loaded configuration on first use. Building a new store closes the
    storage of the instance it replaces.
    """

    global _key_store_instance
    if _key_store_instance is not None and location is None and config is None:
        return _key_store_instance

    config = config or load_config()
    storage = get_storage(location, config)
    if _key_store_instance is not None:
        _key_store_instance.close()
    _key_store_instance = KeyStore(
        storage,
        probe_errors=config.store.probe_errors,
        cache=config.store.cache,
    )
    return _key_store_instance


__all__ = [
    "AccessProbeError",
    "CorruptStoreError",
    "DEFAULT_KEY_SPECS",
    "ECKey",
    "Key",
    "KeyGenerationError",
    "KeySet",
    "KeySpec",
    "KeyStore",
    "KeyStoreError",
    "RSAKey",
    "ReadFailureError",
    "WriteFailureError",
    "get_key_store",
    "get_storage",
]
