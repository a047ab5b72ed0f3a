import os
from dataclasses import dataclass
from typing import Optional

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")
CERTS_DIR = os.path.join(STATIC_DIR, "certs")

DEFAULT_SIGNING_KEY_PATH = os.path.join(CERTS_DIR, "oidc-signing-key.pem")
DEFAULT_SERVICE_PROVIDER_CERT_PATH = os.path.join(CERTS_DIR, "client-eckey.pub.pem")

AUTH_CODE_TTL = 5 * 60
REFRESH_TOKEN_TTL = 24 * 60 * 60


def _env_flag(name, default="false"):
    return os.environ.get(name, default).lower() == "true"


@dataclass
class Settings:
    host: str = "0.0.0.0"
    port: int = 5156
    show_login_page: bool = False
    default_nric: Optional[str] = None
    signing_key_path: str = DEFAULT_SIGNING_KEY_PATH
    service_provider_cert_path: str = DEFAULT_SERVICE_PROVIDER_CERT_PATH
    auth_code_ttl: int = AUTH_CODE_TTL
    refresh_token_ttl: int = REFRESH_TOKEN_TTL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        return cls(
            host=os.environ.get("MOCKPASS_HOST", "0.0.0.0"),
            port=int(os.environ.get("MOCKPASS_PORT") or os.environ.get("PORT") or 5156),
            show_login_page=_env_flag("SHOW_LOGIN_PAGE"),
            default_nric=os.environ.get("MOCKPASS_NRIC") or None,
            signing_key_path=os.environ.get("SIGNING_KEY_PATH", DEFAULT_SIGNING_KEY_PATH),
            service_provider_cert_path=os.environ.get(
                "SERVICE_PROVIDER_CERT_PATH", DEFAULT_SERVICE_PROVIDER_CERT_PATH
            ),
            auth_code_ttl=int(os.environ.get("AUTH_CODE_TTL", AUTH_CODE_TTL)),
            refresh_token_ttl=int(os.environ.get("REFRESH_TOKEN_TTL", REFRESH_TOKEN_TTL)),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
