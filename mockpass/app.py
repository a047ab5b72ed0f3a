#!/usr/bin/env python3
import logging
import os
import time

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Settings
from .endpoints import build_services, create_blueprint
from .errors import MockPassError
from .keys import load_encryption_key, load_signing_key
from .variants import VARIANTS

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(settings=None, clock=time.monotonic):
    """Build the mock provider; ``clock`` drives code and refresh token expiry."""
    settings = settings or Settings.from_env()
    app = Flask(__name__, template_folder="templates", static_folder="static")
    # Issuer and metadata URLs follow X-Forwarded-* headers.
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    signing_key = load_signing_key(settings.signing_key_path)
    encryption_key = load_encryption_key(settings.service_provider_cert_path)

    services = {}
    for name, variant in VARIANTS.items():
        services[name] = build_services(variant, settings, signing_key, encryption_key, clock)
        app.register_blueprint(create_blueprint(services[name], settings, signing_key))
        logger.info(f"Registered {name} endpoints under /{variant.route}")

    app.extensions["mockpass"] = services
    app.config["MOCKPASS_SETTINGS"] = settings

    @app.errorhandler(MockPassError)
    def handle_mockpass_error(e):
        if e.status_code >= 500:
            logger.error(f"Request failed: {e}")
        else:
            logger.warning(f"Rejected request: {e.error} ({e.description})")
        return jsonify({"error": e.error, "error_description": e.description or e.error}), e.status_code

    return app


def main():
    settings = Settings.from_env()
    logging.getLogger().setLevel(settings.log_level)
    app = create_app(settings)
    logger.info(f"MockPass listening on {settings.port}")
    app.run(host=settings.host, port=settings.port, threaded=True)


if __name__ == "__main__":
    main()
