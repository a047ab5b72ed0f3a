from urllib.parse import parse_qs, urlparse

import pytest

from mockpass.errors import IncompleteOverride
from mockpass.profiles import CORPPASS_PROFILES, SINGPASS_PROFILES, default_profile
from mockpass.selector import ProfileSelector, build_assert_url
from mockpass.store import AuthCodeStore
from mockpass.variants import VARIANTS

from .helpers import REDIRECT_URI

SINGPASS = VARIANTS["singPass"]
CORPPASS = VARIANTS["corpPass"]


@pytest.fixture
def code_store():
    return AuthCodeStore(ttl=300)


def redeem_location(code_store, url):
    query = parse_qs(urlparse(url).query)
    return code_store.redeem(query["code"][0])


def test_build_assert_url_encodes_code_and_state():
    url = build_assert_url("https://rp/cb", "a+b/c", "x y&z")
    assert url == "https://rp/cb?code=a%2Bb%2Fc&state=x%20y%26z"


def test_build_assert_url_appends_to_existing_query():
    assert build_assert_url("https://rp/cb?x=1", "c", "s") == "https://rp/cb?x=1?code=c&state=s"


def test_interactive_issues_code_per_profile(code_store):
    selector = ProfileSelector(SINGPASS, code_store)
    selection = selector.select(REDIRECT_URI, "st", "nonce-1", interactive=True)

    assert selection.interactive
    assert len(selection.choices) == len(SINGPASS_PROFILES)
    assert len(code_store) == len(SINGPASS_PROFILES)
    for choice, profile in zip(selection.choices, SINGPASS_PROFILES):
        pending = redeem_location(code_store, choice.assert_url)
        assert pending.profile == profile
        assert pending.nonce == "nonce-1"


def test_singpass_display_id_marks_myinfo_personas(code_store):
    ids = [c.id for c in ProfileSelector(SINGPASS, code_store).choices(REDIRECT_URI, "", None)]
    assert "S9812381D [MyInfo]" in ids
    assert "S8979373D" in ids


def test_corppass_display_id_includes_uen(code_store):
    ids = [c.id for c in ProfileSelector(CORPPASS, code_store).choices(REDIRECT_URI, "", None)]
    assert ids[0] == "S8979373D / UEN: 123456789A"


def test_direct_mode_uses_first_profile(code_store):
    selection = ProfileSelector(SINGPASS, code_store).select(REDIRECT_URI, "st", "n")
    assert not selection.interactive
    assert selection.redirect_url.startswith(REDIRECT_URI + "?code=")
    assert selection.redirect_url.endswith("&state=st")
    assert redeem_location(code_store, selection.redirect_url).profile == SINGPASS_PROFILES[0]


def test_direct_mode_uses_configured_default(code_store):
    selector = ProfileSelector(SINGPASS, code_store, default_nric="S8723211E")
    selection = selector.select(REDIRECT_URI, "st", "n")
    assert redeem_location(code_store, selection.redirect_url).profile.nric == "S8723211E"


def test_unknown_default_falls_back_to_first():
    assert default_profile(SINGPASS_PROFILES, "S0000000X") == SINGPASS_PROFILES[0]


def test_complete_override_wins(code_store):
    selector = ProfileSelector(SINGPASS, code_store, default_nric="S8723211E")
    profile = selector.resolve({"nric": "S1234567A", "uuid": "uuid-1"})
    assert (profile.nric, profile.uuid) == ("S1234567A", "uuid-1")


def test_partial_override_is_discarded(code_store):
    selector = ProfileSelector(CORPPASS, code_store)
    profile = selector.resolve({"nric": "S1234567A", "uuid": "uuid-1"})
    assert profile == CORPPASS_PROFILES[0]


def test_corppass_override_synthesizes_name():
    profile = CORPPASS.build_override({"nric": "S1234567A", "uuid": "uuid-1", "uen": "T01LL0001A"})
    assert profile.name == "Name of S1234567A"
    assert profile.uen == "T01LL0001A"
    assert profile.is_singpass_holder is False


def test_incomplete_override_reports_missing_attributes():
    with pytest.raises(IncompleteOverride) as excinfo:
        CORPPASS.build_override({"nric": "S1234567A", "uen": ""})
    assert excinfo.value.missing == ("uuid", "uen")
