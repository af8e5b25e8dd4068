"""Key pair generation for new key sets."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Literal, Sequence, Union

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from jwt.algorithms import ECAlgorithm, RSAAlgorithm
from pydantic import BaseModel, ValidationError

from .constants import (
    EC_ALGORITHMS,
    EC_SIGNING_CURVES,
    EC_SIGNING_KID,
    RSA_ALGORITHMS,
    RSA_KEY_SIZE,
    RSA_PUBLIC_EXPONENT,
    RSA_SIGNING_KID,
)
from .exceptions import KeyGenerationError
from .models import ECKey, KeySet, RSAKey

logger = logging.getLogger(__name__)

_CURVES = {
    "P-256": ec.SECP256R1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}


class KeySpec(BaseModel):
    """Describes one key to generate when a key set is first created."""

    kid: str
    alg: str
    use: Literal["sig", "enc"] = "sig"


# Encryption keys (RSA-OAEP as "enc-rs-0", ECDH-ES as "enc-ec-0") can be
# added here; they are not part of the default set.
DEFAULT_KEY_SPECS: tuple[KeySpec, ...] = (
    KeySpec(kid=RSA_SIGNING_KID, alg="RS256", use="sig"),
    KeySpec(kid=EC_SIGNING_KID, alg="ES256", use="sig"),
)


def _export(jwk_json: str, spec: KeySpec) -> dict[str, Any]:
    jwk = json.loads(jwk_json)
    # "use" is declared instead
    jwk.pop("key_ops", None)
    return {"kid": spec.kid, "alg": spec.alg, "use": spec.use, **jwk}


def generate_key(spec: KeySpec) -> Union[RSAKey, ECKey]:
    """Generate a private key for ``spec`` and return it in JWK form.

    Raises:
        KeyGenerationError: If the algorithm is unsupported or the underlying
            crypto backend fails.
    """
    try:
        if spec.alg in RSA_ALGORITHMS:
            private_key = rsa.generate_private_key(
                public_exponent=RSA_PUBLIC_EXPONENT, key_size=RSA_KEY_SIZE
            )
            return RSAKey.model_validate(
                _export(RSAAlgorithm.to_jwk(private_key), spec)
            )
        if spec.alg in EC_ALGORITHMS:
            curve = _CURVES[EC_SIGNING_CURVES.get(spec.alg, "P-256")]
            private_key = ec.generate_private_key(curve())
            return ECKey.model_validate(_export(ECAlgorithm.to_jwk(private_key), spec))
    except (
        ValueError, TypeError, ValidationError, InternalError, UnsupportedAlgorithm
    ) as exc:
        raise KeyGenerationError(
            f"Failed to generate {spec.alg} key {spec.kid}: {exc}"
        ) from exc
    raise KeyGenerationError(f"Unsupported algorithm for key generation: {spec.alg}")


async def generate_key_set(specs: Sequence[KeySpec] = DEFAULT_KEY_SPECS) -> KeySet:
    """Generate every key in ``specs`` concurrently and assemble the set."""
    logger.info(f"Generating key set with kids {[spec.kid for spec in specs]}")
    keys = await asyncio.gather(
        *(asyncio.to_thread(generate_key, spec) for spec in specs)
    )
    try:
        return KeySet(keys=list(keys))
    except ValidationError as exc:
        raise KeyGenerationError(f"Generated key set is invalid: {exc}") from exc
