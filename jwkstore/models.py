"""Data models for keys and key sets in JWK form."""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Optional, Union

from jwt.algorithms import ECAlgorithm, RSAAlgorithm
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import EC_ALGORITHMS, EC_SIGNING_CURVES, RSA_ALGORITHMS

# JWK members that carry private key material (RFC 7518 section 6)
PRIVATE_MEMBERS = frozenset({"d", "p", "q", "dp", "dq", "qi", "oth"})


class BaseKey(BaseModel):
    """Members common to every key in the set.

    Unknown JWK members are kept as extras so that a persisted record loads
    and serializes back unchanged.
    """

    model_config = ConfigDict(extra="allow")

    kid: str
    alg: str
    use: Optional[Literal["sig", "enc"]] = None

    def to_jwk(self) -> dict[str, Any]:
        """Return the key as a plain JWK dictionary.

        Only members that were supplied are emitted, so absent members stay
        absent and explicit nulls stay null.
        """
        data = self.model_dump(mode="json")
        keep = self.model_fields_set | set(self.model_extra or {}) | {"kty"}
        return {k: v for k, v in data.items() if k in keep}

    def public_jwk(self) -> dict[str, Any]:
        """Return the JWK with all private members removed."""
        return {k: v for k, v in self.to_jwk().items() if k not in PRIVATE_MEMBERS}

    def private_key(self) -> Any:  # pragma: no cover - overridden
        raise NotImplementedError


class RSAKey(BaseKey):
    """RSA private key in JWK form."""

    kty: Literal["RSA"] = "RSA"
    n: str
    e: str
    d: str
    p: Optional[str] = None
    q: Optional[str] = None
    dp: Optional[str] = None
    dq: Optional[str] = None
    qi: Optional[str] = None

    @field_validator("alg")
    @classmethod
    def _check_alg(cls, value: str) -> str:
        if value not in RSA_ALGORITHMS:
            raise ValueError(f"{value!r} is not an RSA algorithm")
        return value

    def private_key(self) -> Any:
        """Load the key as a ``cryptography`` RSA private key."""
        return RSAAlgorithm.from_jwk(self.to_jwk())


class ECKey(BaseKey):
    """Elliptic-curve private key in JWK form."""

    kty: Literal["EC"] = "EC"
    crv: str
    x: str
    y: str
    d: str

    @field_validator("alg")
    @classmethod
    def _check_alg(cls, value: str) -> str:
        if value not in EC_ALGORITHMS:
            raise ValueError(f"{value!r} is not an EC algorithm")
        return value

    @model_validator(mode="after")
    def _check_curve(self) -> "ECKey":
        expected = EC_SIGNING_CURVES.get(self.alg)
        if expected is not None and self.crv != expected:
            raise ValueError(f"{self.alg} requires curve {expected}, got {self.crv}")
        return self

    def private_key(self) -> Any:
        """Load the key as a ``cryptography`` EC private key."""
        return ECAlgorithm.from_jwk(self.to_jwk())


Key = Annotated[Union[RSAKey, ECKey], Field(discriminator="kty")]


class KeySet(BaseModel):
    """Ordered collection of keys, unique by ``(alg, kid)``."""

    keys: list[Key]

    @model_validator(mode="after")
    def _unique_pairs(self) -> "KeySet":
        seen: set[tuple[str, str]] = set()
        for key in self.keys:
            pair = (key.alg, key.kid)
            if pair in seen:
                raise ValueError(f"duplicate key for alg={key.alg} kid={key.kid}")
            seen.add(pair)
        return self

    def find(self, alg: str, kid: str) -> Optional[Union[RSAKey, ECKey]]:
        """Return the first key matching ``alg`` and ``kid`` exactly."""
        for key in self.keys:
            if key.alg == alg and key.kid == kid:
                return key
        return None

    def public_jwks(self) -> dict[str, Any]:
        """Return the JWKS document verifiers may fetch."""
        return {"keys": [key.public_jwk() for key in self.keys]}

    def to_json(self) -> str:
        """Serialize to the pretty-printed persisted document."""
        return json.dumps({"keys": [key.to_jwk() for key in self.keys]}, indent=2)

    @classmethod
    def from_json(cls, data: str | bytes) -> "KeySet":
        """Parse a persisted document."""
        return cls.model_validate_json(data)
