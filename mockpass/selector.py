import logging
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import quote

from .errors import IncompleteOverride
from .profiles import default_profile

logger = logging.getLogger(__name__)


def build_assert_url(redirect_uri, code, state):
    # Always appended with "?"; callers pass a redirect_uri without a query.
    return f"{redirect_uri}?code={quote(code, safe='')}&state={quote(state or '', safe='')}"


@dataclass(frozen=True)
class LoginChoice:
    id: str
    assert_url: str


@dataclass(frozen=True)
class Selection:
    """Either a list of choices to render, or a single redirect target."""

    choices: Optional[List[LoginChoice]] = None
    redirect_url: Optional[str] = None

    @property
    def interactive(self):
        return self.choices is not None


class ProfileSelector:
    def __init__(self, variant, code_store, default_nric=None):
        self.variant = variant
        self.code_store = code_store
        self.default = default_profile(variant.profiles, default_nric)

    def select(self, redirect_uri, state, nonce, interactive=False, override=None):
        if interactive:
            return Selection(choices=self.choices(redirect_uri, state, nonce))
        profile = self.resolve(override)
        return Selection(redirect_url=self.assert_url(profile, redirect_uri, state, nonce))

    def choices(self, redirect_uri, state, nonce):
        # Every profile shown gets its own code; unused ones simply expire.
        return [
            LoginChoice(
                id=self.variant.display_id(profile),
                assert_url=self.assert_url(profile, redirect_uri, state, nonce),
            )
            for profile in self.variant.profiles
        ]

    def resolve(self, override=None):
        if override:
            try:
                return self.variant.build_override(override)
            except IncompleteOverride as e:
                logger.debug(f"Ignoring {self.variant.name} override: {e}")
        return self.default

    def assert_url(self, profile, redirect_uri, state, nonce):
        code = self.code_store.issue(profile, nonce)
        return build_assert_url(redirect_uri, code, state)
