"""Generate-once key store serving signing and verification keys."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from pydantic import ValidationError

from .config import ProbeErrorPolicy
from .exceptions import AccessProbeError, CorruptStoreError
from .generation import DEFAULT_KEY_SPECS, KeySpec, generate_key_set
from .models import ECKey, KeySet, RSAKey
from .persistence import KeySetStorage

logger = logging.getLogger(__name__)


class KeyStore:
    """Owns the lifecycle of a single persisted key set.

    The first call to :meth:`get` on an empty storage generates one key per
    entry in ``key_specs`` and persists the set. Every later call, in this
    process or any other reading the same storage, loads that record. A
    persisted set is never regenerated.

    There is no locking around first-time generation. Two callers racing on
    an empty storage may both generate and write, and the last write wins;
    this is only safe for a single process or a deployment that initialises
    the store before serving traffic.
    """

    def __init__(
        self,
        storage: KeySetStorage,
        key_specs: Sequence[KeySpec] = DEFAULT_KEY_SPECS,
        probe_errors: ProbeErrorPolicy = "warn",
        cache: bool = False,
    ) -> None:
        if probe_errors not in ("warn", "raise"):
            raise ValueError(f"Unsupported probe error policy: {probe_errors}")
        self._storage = storage
        self._key_specs = tuple(key_specs)
        self._probe_errors = probe_errors
        self._cache = cache
        self._cached: KeySet | None = None

    @property
    def storage(self) -> KeySetStorage:
        return self._storage

    def close(self) -> None:
        """Release resources held by the storage backend."""
        self._storage.close()

    async def get(self) -> KeySet:
        """Return the persisted key set, generating and persisting it if absent.

        Raises:
            CorruptStoreError: The record exists but is not a valid key set.
            AccessProbeError: The probe failed and the policy is ``"raise"``.
            ReadFailureError: Reading the record failed.
            WriteFailureError: Persisting a new key set failed.
            KeyGenerationError: Key generation failed.
        """
        if self._cached is not None:
            return self._cached.model_copy(deep=True)

        if await self._record_exists():
            key_set = await self._load()
        else:
            key_set = await generate_key_set(self._key_specs)
            await self._storage.write(key_set.to_json())
            logger.info(
                f"Persisted new key set with {len(key_set.keys)} keys to {self._storage.location}"
            )

        if self._cache:
            self._cached = key_set.model_copy(deep=True)
        return key_set

    async def select_for_verify(
        self, alg: str, kid: str
    ) -> Optional[Union[RSAKey, ECKey]]:
        """Return the key matching ``alg`` and ``kid`` exactly, or ``None``.

        ``None`` means the token cannot be verified with a known key; store
        failures are raised instead.
        """
        key_set = await self.get()
        key = key_set.find(alg, kid)
        if key is None:
            logger.debug(f"No key found for alg={alg} kid={kid}")
        return key

    async def _record_exists(self) -> bool:
        try:
            return await self._storage.exists()
        except AccessProbeError as exc:
            if self._probe_errors == "raise":
                raise
            logger.warning(f"{exc}; treating key set as absent")
            return False

    async def _load(self) -> KeySet:
        document = await self._storage.read()
        try:
            key_set = KeySet.from_json(document)
        except ValidationError as exc:
            logger.error(f"Refusing to replace corrupt key set at {self._storage.location}")
            raise CorruptStoreError(self._storage.location, str(exc)) from exc
        logger.debug(f"Loaded key set from {self._storage.location}")
        return key_set
