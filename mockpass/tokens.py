import json
import logging
import secrets
import time

from authlib.common.encoding import to_native
from authlib.jose import JsonWebEncryption, JsonWebSignature
from authlib.oidc.core.util import create_half_hash

from .errors import CryptoFailure

logger = logging.getLogger(__name__)

EXPIRES_IN = 24 * 60 * 60
SCOPE = "openid"
TOKEN_TYPE = "bearer"
SIGNING_ALG = "RS256"
CONTENT_ENCRYPTION = "A256GCM"


def key_management_alg(key):
    if key.kty == "RSA":
        return "RSA-OAEP-256"
    return "ECDH-ES+A128KW"


def generate_access_token():
    return secrets.token_urlsafe(32)


class TokenAssembler:
    """Builds the token response for one variant.

    The ID token is signed with the provider key first and the resulting JWS
    is then encrypted for the relying party (``cty: JWT``).
    """

    def __init__(self, variant, signing_key, encryption_key, refresh_store, clock=time.time):
        self.variant = variant
        self.signing_key = signing_key
        self.encryption_key = encryption_key
        self.refresh_store = refresh_store
        self._clock = clock
        self._jws = JsonWebSignature()
        self._jwe = JsonWebEncryption()

    def id_token_claims(self, profile, issuer, audience, nonce, access_token, refresh_token):
        iat = int(self._clock())
        claims = {
            "rt_hash": to_native(create_half_hash(refresh_token, SIGNING_ALG)),
            "at_hash": to_native(create_half_hash(access_token, SIGNING_ALG)),
            "iat": iat,
            "exp": iat + EXPIRES_IN,
            "iss": issuer,
            "amr": ["pwd"],
            "aud": audience,
        }
        claims.update(self.variant.claims(profile))
        if nonce:
            claims["nonce"] = nonce
        return claims

    def sign(self, claims):
        header = {"alg": SIGNING_ALG, "kid": self.signing_key.tokens.get("kid")}
        payload = json.dumps(claims, separators=(",", ":")).encode("utf-8")
        try:
            return self._jws.serialize_compact(header, payload, self.signing_key)
        except Exception as e:
            logger.error(f"Error signing {self.variant.name} ID token: {e}", exc_info=True)
            raise CryptoFailure("Could not sign ID token") from e

    def encrypt(self, signed_token):
        header = {
            "alg": key_management_alg(self.encryption_key),
            "enc": CONTENT_ENCRYPTION,
            "cty": "JWT",
        }
        try:
            return self._jwe.serialize_compact(header, signed_token, self.encryption_key)
        except Exception as e:
            logger.error(f"Error encrypting {self.variant.name} ID token: {e}", exc_info=True)
            raise CryptoFailure("Could not encrypt ID token") from e

    def assemble(self, profile, nonce, issuer, audience):
        access_token = generate_access_token()
        refresh_token = self.refresh_store.new_token()
        claims = self.id_token_claims(profile, issuer, audience, nonce, access_token, refresh_token)
        id_token = self.encrypt(self.sign(claims))
        # Only bound once the ID token exists; a crypto failure leaves nothing behind.
        self.refresh_store.bind(refresh_token, profile)
        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "expires_in": EXPIRES_IN,
            "scope": SCOPE,
            "token_type": TOKEN_TYPE,
            "id_token": to_native(id_token),
        }
