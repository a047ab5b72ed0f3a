"""Per-variant OIDC routes.

One blueprint is registered for every row of ``mockpass.variants.VARIANTS``;
the handlers are identical and only differ in the services they are bound to.
"""
import logging
import time
from dataclasses import dataclass

from flask import Blueprint, jsonify, redirect, render_template, request

from .errors import IncompleteOverride, InvalidRequest, UnsupportedGrantType
from .keys import load_jwks
from .selector import ProfileSelector
from .store import AuthCodeStore, RefreshTokenStore
from .tokens import SIGNING_ALG, TokenAssembler, key_management_alg

logger = logging.getLogger(__name__)

OVERRIDE_HEADERS = {
    "nric": "X-Custom-NRIC",
    "uuid": "X-Custom-UUID",
    "uen": "X-Custom-UEN",
}


@dataclass
class VariantServices:
    variant: object
    code_store: AuthCodeStore
    refresh_store: RefreshTokenStore
    selector: ProfileSelector
    assembler: TokenAssembler


def build_services(variant, settings, signing_key, encryption_key, clock=time.monotonic):
    code_store = AuthCodeStore(settings.auth_code_ttl, clock)
    refresh_store = RefreshTokenStore(settings.refresh_token_ttl, clock)
    return VariantServices(
        variant=variant,
        code_store=code_store,
        refresh_store=refresh_store,
        selector=ProfileSelector(variant, code_store, settings.default_nric),
        assembler=TokenAssembler(variant, signing_key, encryption_key, refresh_store),
    )


def show_login_page(settings):
    header = request.headers.get("X-Show-Login-Page")
    if header:
        return header.lower() == "true"
    return settings.show_login_page


def override_from_headers():
    attrs = {name: request.headers.get(header) for name, header in OVERRIDE_HEADERS.items()}
    return {name: value for name, value in attrs.items() if value} or None


def require_arg(args, name):
    value = args.get(name)
    if not value:
        raise InvalidRequest(f"{name} is required")
    return value


def create_blueprint(services, settings, signing_key):
    variant = services.variant
    route = variant.route
    bp = Blueprint(route, __name__, url_prefix=f"/{route}")

    @bp.route("/metadata")
    def metadata():
        base_url = request.host_url.rstrip("/")
        return jsonify({
            "issuer": base_url,
            "authorization_endpoint": f"{base_url}/{route}/authorize",
            "token_endpoint": f"{base_url}/{route}/token",
            "jwks_uri": f"{base_url}/{route}/jwks",
            "scopes_supported": ["openid", "profile", "email", "address", "phone", "offline_access"],
            "response_types_supported": ["code", "code id_token", "id_token", "token id_token"],
            "grant_types_supported": ["authorization_code", "refresh_token"],
            "claims_supported": ["sub", "iss", "acr", "name"],
            "subject_types_supported": ["public", "pairwise"],
            "id_token_signing_alg_values_supported": [SIGNING_ALG],
            "id_token_encryption_alg_values_supported": [key_management_alg(services.assembler.encryption_key)],
            "token_endpoint_auth_methods_supported": ["client_secret_post"],
        })

    @bp.route("/jwks")
    def jwks():
        return jsonify(load_jwks(signing_key))

    @bp.route("/spcplogout")
    def logout():
        return_url = require_arg(request.args, "return_url")
        logger.info(f"SPCP logout is done, now redirecting to {return_url}")
        return redirect(return_url)

    @bp.route("/authorize")
    def authorize():
        redirect_uri = require_arg(request.args, "redirect_uri")
        state = request.args.get("state", "")
        nonce = request.args.get("nonce")
        selection = services.selector.select(
            redirect_uri,
            state,
            nonce,
            interactive=show_login_page(settings),
            override=override_from_headers(),
        )
        if selection.interactive:
            return render_template(
                "login-page.html",
                variant=variant,
                values=selection.choices,
                custom_profile={
                    "endpoint": f"/{route}/authorize/custom-profile",
                    "show_uuid": True,
                    "show_uen": variant.shows_uen,
                    "redirect_uri": redirect_uri,
                    "state": state,
                    "nonce": nonce or "",
                },
            )
        logger.warning(f"Redirecting login from {request.args.get('client_id')} to {redirect_uri}")
        return redirect(selection.redirect_url)

    @bp.route("/authorize/custom-profile")
    def custom_profile():
        args = request.args
        redirect_uri = require_arg(args, "redirectURI")
        try:
            profile = variant.build_override({name: args.get(name) for name in OVERRIDE_HEADERS})
        except IncompleteOverride as e:
            raise InvalidRequest(str(e)) from e
        url = services.selector.assert_url(profile, redirect_uri, args.get("state", ""), args.get("nonce"))
        logger.info(f"Custom {variant.name} profile {profile.nric} redirecting to {redirect_uri}")
        return redirect(url)

    @bp.route("/token", methods=["POST"])
    def token():
        form = request.form
        grant = form.get("grant_type")
        audience = form.get("client_id")

        if grant == "refresh_token":
            supplied = form.get("refresh_token")
            logger.warning(f"Refreshing tokens with {supplied}")
            profile = services.refresh_store.lookup(supplied)
            nonce = None
        elif grant == "authorization_code":
            code = form.get("code")
            logger.warning(f"Received auth code {code} from {audience} and {form.get('redirect_uri')}")
            pending = services.code_store.redeem(code)
            profile, nonce = pending.profile, pending.nonce
        else:
            raise UnsupportedGrantType(f"grant_type {grant!r} is not supported")

        issuer = request.host_url.rstrip("/")
        return jsonify(services.assembler.assemble(profile, nonce, issuer, audience))

    return bp
