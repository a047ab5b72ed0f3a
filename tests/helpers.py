from urllib.parse import parse_qs, urlparse

CLIENT_ID = "test-client"
REDIRECT_URI = "https://rp.example.com/callback"


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def code_from_location(location):
    query = parse_qs(urlparse(location).query)
    return query["code"][0], query.get("state", [""])[0]


def authorize(client, route="singpass", headers=None, state="state-1", nonce="nonce-1"):
    resp = client.get(
        f"/{route}/authorize",
        query_string={
            "redirect_uri": REDIRECT_URI,
            "state": state,
            "nonce": nonce,
            "client_id": CLIENT_ID,
        },
        headers=headers or {},
    )
    assert resp.status_code == 302
    return code_from_location(resp.headers["Location"])[0]


def exchange_code(client, code, route="singpass"):
    return client.post(
        f"/{route}/token",
        data={
            "grant_type": "authorization_code",
            "code": code,
            "client_id": CLIENT_ID,
            "redirect_uri": REDIRECT_URI,
        },
    )


def exchange_refresh(client, refresh_token, route="singpass"):
    return client.post(
        f"/{route}/token",
        data={
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": CLIENT_ID,
        },
    )


def subject_nric(claims):
    parts = dict(part.split("=", 1) for part in claims["sub"].split(","))
    return parts["s"]
