"""Constants shared across jwkstore modules."""

RSA_SIGNING_KID = "sig-rs-0"
EC_SIGNING_KID = "sig-ec-0"

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

RSA_ALGORITHMS = frozenset(
    {"RS256", "RS384", "RS512", "PS256", "PS384", "PS512", "RSA-OAEP", "RSA-OAEP-256"}
)
EC_ALGORITHMS = frozenset(
    {"ES256", "ES384", "ES512", "ECDH-ES", "ECDH-ES+A128KW", "ECDH-ES+A256KW"}
)

# Curve required by each ECDSA signing algorithm
EC_SIGNING_CURVES = {"ES256": "P-256", "ES384": "P-384", "ES512": "P-521"}

DEFAULT_LOCATION = ".jwkstore/jwks.json"
DEFAULT_CONFIG_FILE = "jwkstore.yaml"
