"""Tests for key and key set models."""

import json

import pytest
from pydantic import ValidationError

from jwkstore.generation import KeySpec, generate_key
from jwkstore.models import ECKey, KeySet, RSAKey


def _rsa(kid="sig-rs-0", alg="RS256", **extra):
    return {"kid": kid, "alg": alg, "use": "sig", "kty": "RSA", "n": "AQAB", "e": "AQAB", "d": "AQAB", **extra}


def _ec(kid="sig-ec-0", alg="ES256", crv="P-256"):
    return {"kid": kid, "alg": alg, "use": "sig", "kty": "EC", "crv": crv, "x": "AA", "y": "AA", "d": "AA"}


def test_key_set_parses_tagged_variants():
    key_set = KeySet.model_validate({"keys": [_rsa(), _ec()]})
    assert isinstance(key_set.keys[0], RSAKey)
    assert isinstance(key_set.keys[1], ECKey)


def test_rsa_key_rejects_ec_algorithm():
    with pytest.raises(ValidationError):
        RSAKey.model_validate(_rsa(alg="ES256"))


def test_ec_key_rejects_mismatched_curve():
    with pytest.raises(ValidationError):
        ECKey.model_validate(_ec(alg="ES256", crv="P-384"))


def test_unknown_key_type_rejected():
    with pytest.raises(ValidationError):
        KeySet.model_validate({"keys": [{"kid": "k", "alg": "EdDSA", "kty": "OKP"}]})


def test_missing_keys_member_rejected():
    with pytest.raises(ValidationError):
        KeySet.from_json('{"foo": 1}')


def test_duplicate_alg_kid_pair_rejected():
    with pytest.raises(ValidationError):
        KeySet.model_validate({"keys": [_rsa(), _rsa()]})


def test_same_kid_with_different_alg_allowed():
    key_set = KeySet.model_validate({"keys": [_rsa(kid="k"), _ec(kid="k")]})
    assert len(key_set.keys) == 2


def test_find_is_exact_and_case_sensitive():
    key_set = KeySet.model_validate({"keys": [_rsa(), _ec()]})
    assert key_set.find("RS256", "sig-rs-0") is key_set.keys[0]
    assert key_set.find("ES256", "sig-ec-0") is key_set.keys[1]
    assert key_set.find("RS256", "sig-ec-0") is None
    assert key_set.find("rs256", "sig-rs-0") is None
    assert key_set.find("RS256", "SIG-RS-0") is None


def test_unknown_members_round_trip():
    seeded = {"keys": [_rsa(kid="x", x5t="thumb", key_ops=["sign"])]}
    key_set = KeySet.from_json(json.dumps(seeded))
    assert json.loads(key_set.to_json()) == seeded


def test_to_json_is_pretty_printed():
    document = KeySet.model_validate({"keys": [_ec()]}).to_json()
    assert document.startswith('{\n  "keys": [\n')


def test_public_jwks_strips_private_members():
    key_set = KeySet(
        keys=[
            generate_key(KeySpec(kid="sig-rs-0", alg="RS256")),
            generate_key(KeySpec(kid="sig-ec-0", alg="ES256")),
        ]
    )
    public = key_set.public_jwks()
    rsa_jwk, ec_jwk = public["keys"]
    assert {"n", "e", "kid", "alg", "use"} <= set(rsa_jwk)
    assert not {"d", "p", "q", "dp", "dq", "qi"} & set(rsa_jwk)
    assert {"crv", "x", "y"} <= set(ec_jwk)
    assert "d" not in ec_jwk


def test_private_key_loads_cryptography_objects():
    from cryptography.hazmat.primitives.asymmetric import ec, rsa

    rsa_key = generate_key(KeySpec(kid="sig-rs-0", alg="RS256"))
    ec_key = generate_key(KeySpec(kid="sig-ec-0", alg="ES256"))
    assert isinstance(rsa_key.private_key(), rsa.RSAPrivateKey)
    assert isinstance(ec_key.private_key(), ec.EllipticCurvePrivateKey)


def test_absent_use_and_null_members_round_trip():
    jwk = _ec()
    del jwk["use"]
    jwk["x5u"] = None
    seeded = {"keys": [jwk]}

    key_set = KeySet.from_json(json.dumps(seeded))

    assert key_set.keys[0].use is None
    assert json.loads(key_set.to_json()) == seeded
