import os

import pytest
from authlib.jose import JsonWebEncryption, JsonWebKey, jwt

from mockpass.app import create_app
from mockpass.config import CERTS_DIR, Settings

from .helpers import FakeClock

RP_PRIVATE_KEY_PATH = os.path.join(CERTS_DIR, "client-eckey.pem")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def app(settings, clock):
    app = create_app(settings, clock=clock)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def rp_key():
    with open(RP_PRIVATE_KEY_PATH, "rb") as f:
        return JsonWebKey.import_key(f.read())


@pytest.fixture
def decode_id_token(client, rp_key):
    """Decrypt with the relying party key, then verify against the JWKS."""

    def decode(id_token, route="singpass"):
        decrypted = JsonWebEncryption().deserialize_compact(id_token, rp_key)
        assert decrypted["header"]["cty"] == "JWT"
        jwks = client.get(f"/{route}/jwks").get_json()
        public_key = JsonWebKey.import_key(jwks["keys"][0])
        claims = jwt.decode(decrypted["payload"], public_key)
        claims.validate()
        return dict(claims)

    return decode
