"""Identity-provider variants served by the mock.

Each variant is one row of ``VARIANTS``: its registry of profiles, the
attributes an override must carry, and how its profiles are labelled and
turned into ID token claims. Routes are registered once per row.
"""
from dataclasses import dataclass
from typing import Callable, Tuple

from .errors import IncompleteOverride
from .profiles import CORPPASS_PROFILES, MYINFO_PERSONAS, SINGPASS_PROFILES, Profile


def _require(attrs, required):
    missing = [name for name in required if not attrs.get(name)]
    if missing:
        raise IncompleteOverride(missing)


def singpass_display_id(profile):
    if profile.nric in MYINFO_PERSONAS:
        return f"{profile.nric} [MyInfo]"
    return profile.nric


def corppass_display_id(profile):
    return f"{profile.nric} / UEN: {profile.uen}"


def singpass_override(attrs):
    _require(attrs, SINGPASS_REQUIRED)
    return Profile(nric=attrs["nric"], uuid=attrs["uuid"])


def corppass_override(attrs):
    _require(attrs, CORPPASS_REQUIRED)
    return Profile(
        nric=attrs["nric"],
        uuid=attrs["uuid"],
        uen=attrs["uen"],
        name=f"Name of {attrs['nric']}",
        is_singpass_holder=False,
    )


def singpass_claims(profile):
    return {"sub": f"s={profile.nric},u={profile.uuid}"}


def corppass_claims(profile):
    return {
        "sub": f"s={profile.nric},u={profile.uuid},c=SG",
        "userInfo": {
            "CPAccType": "User",
            "CPUID_FullName": profile.name,
            "ISSPHOLDER": "YES" if profile.is_singpass_holder else "NO",
        },
        "entityInfo": {
            "CPEntID": profile.uen,
            "CPEnt_TYPE": "UEN",
            "CPEnt_Status": "Registered",
            "CPNonUEN_Country": "",
            "CPNonUEN_RegNo": "",
            "CPNonUEN_Name": "",
        },
    }


SINGPASS_REQUIRED = ("nric", "uuid")
CORPPASS_REQUIRED = ("nric", "uuid", "uen")


@dataclass(frozen=True)
class Variant:
    name: str
    profiles: Tuple[Profile, ...]
    required: Tuple[str, ...]
    display_id: Callable
    build_override: Callable
    claims: Callable

    @property
    def route(self):
        return self.name.lower()

    @property
    def shows_uen(self):
        return "uen" in self.required


VARIANTS = {
    "singPass": Variant(
        name="singPass",
        profiles=SINGPASS_PROFILES,
        required=SINGPASS_REQUIRED,
        display_id=singpass_display_id,
        build_override=singpass_override,
        claims=singpass_claims,
    ),
    "corpPass": Variant(
        name="corpPass",
        profiles=CORPPASS_PROFILES,
        required=CORPPASS_REQUIRED,
        display_id=corppass_display_id,
        build_override=corppass_override,
        claims=corppass_claims,
    ),
}
