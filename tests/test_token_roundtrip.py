import jwt
import pytest

from jwkstore import KeyStore
from jwkstore.persistence import FileKeySetStorage, SQLiteKeySetStorage


@pytest.mark.asyncio
@pytest.mark.parametrize("alg,kid", [("RS256", "sig-rs-0"), ("ES256", "sig-ec-0")])
async def test_token_signed_before_restart_verifies_after(tmp_path, alg, kid):
    path = tmp_path / "jwks.json"

    issuer = KeyStore(FileKeySetStorage(path))
    signing_key = (await issuer.get()).find(alg, kid)
    token = jwt.encode(
        {"sub": "alice", "aud": "worker"},
        signing_key.private_key(),
        algorithm=alg,
        headers={"kid": kid},
    )

    # a restarted process reads the same file
    verifier = KeyStore(FileKeySetStorage(path))
    header = jwt.get_unverified_header(token)
    key = await verifier.select_for_verify(header["alg"], header["kid"])
    assert key is not None

    claims = jwt.decode(
        token,
        key.private_key().public_key(),
        algorithms=[alg],
        audience="worker",
    )
    assert claims["sub"] == "alice"


@pytest.mark.asyncio
async def test_public_jwks_verifies_tokens(tmp_path):
    storage = SQLiteKeySetStorage(tmp_path / "keys.db")
    store = KeyStore(storage)
    key_set = await store.get()
    token = jwt.encode(
        {"sub": "bob"},
        key_set.find("RS256", "sig-rs-0").private_key(),
        algorithm="RS256",
        headers={"kid": "sig-rs-0"},
    )

    jwks = key_set.public_jwks()
    public = next(k for k in jwks["keys"] if k["kid"] == "sig-rs-0")
    claims = jwt.decode(
        token, jwt.algorithms.RSAAlgorithm.from_jwk(public), algorithms=["RS256"]
    )
    assert claims["sub"] == "bob"
    storage.close()


@pytest.mark.asyncio
async def test_unknown_kid_cannot_be_verified(tmp_path):
    store = KeyStore(FileKeySetStorage(tmp_path / "jwks.json"))
    assert await store.select_for_verify("RS256", "sig-rs-1") is None
