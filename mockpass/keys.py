import json
import logging

from authlib.jose import JsonWebKey

logger = logging.getLogger(__name__)


def _read_key(path, options=None):
    with open(path, "rb") as f:
        raw = f.read()
    # JWK JSON or PEM
    if raw.lstrip().startswith(b"{"):
        raw = json.loads(raw)
    return JsonWebKey.import_key(raw, options)


def load_signing_key(path):
    """Load the provider's private signing key and make sure it carries a kid."""
    logger.info(f"Loading signing key from {path}")
    try:
        key = _read_key(path, {"use": "sig", "alg": "RS256"})
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to load signing key from {path}: {e}", exc_info=True)
        raise RuntimeError(f"Fatal error: could not load signing key from {path}") from e
    if not key.tokens.get("kid"):
        key.options["kid"] = key.thumbprint()
    logger.info(f"Loaded signing key (kid: {key.tokens['kid']})")
    return key


def load_encryption_key(path):
    """Load the relying party's key; only its public half is kept."""
    logger.info(f"Loading service provider encryption key from {path}")
    try:
        key = _read_key(path)
        public_key = JsonWebKey.import_key(key.as_dict(is_private=False), {"use": "enc"})
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to load service provider key from {path}: {e}", exc_info=True)
        raise RuntimeError(f"Fatal error: could not load service provider key from {path}") from e
    return public_key


def public_jwk(key):
    jwk = key.as_dict(is_private=False)
    jwk.setdefault("use", "sig")
    jwk.setdefault("alg", "RS256")
    return jwk


def load_jwks(key):
    return {"keys": [public_jwk(key)]}
