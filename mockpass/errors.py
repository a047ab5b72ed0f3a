class MockPassError(Exception):
    """Base error, rendered as an OAuth error object by the app."""

    error = "server_error"
    status_code = 500

    def __init__(self, description=None):
        super().__init__(description or self.error)
        self.description = description


class InvalidRequest(MockPassError):
    error = "invalid_request"
    status_code = 400


class InvalidGrant(MockPassError):
    """Authorization code or refresh token is unknown, expired or already used."""

    error = "invalid_grant"
    status_code = 400


class UnsupportedGrantType(MockPassError):
    error = "unsupported_grant_type"
    status_code = 400


class CryptoFailure(MockPassError):
    """Signing or encrypting the ID token failed."""

    error = "server_error"
    status_code = 500


class IncompleteOverride(Exception):
    """Override attributes miss something the variant requires."""

    def __init__(self, missing):
        super().__init__(f"missing override attributes: {', '.join(missing)}")
        self.missing = tuple(missing)
