from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Profile:
    nric: str
    uuid: str
    uen: Optional[str] = None
    name: Optional[str] = None
    is_singpass_holder: bool = False


# NRICs that also have a MyInfo persona; flagged in the login page.
MYINFO_PERSONAS = frozenset({
    "S9812381D",
    "S9812382B",
    "S9812379B",
    "S6005048A",
    "T0066846F",
})

SINGPASS_PROFILES = (
    Profile(nric="S8979373D", uuid="a9865837-7bd7-46ac-bef4-42a76a946424"),
    Profile(nric="S8116474F", uuid="f4b69e5a-ede3-4ea2-8d4c-7cc69ca36f91"),
    Profile(nric="S8723211E", uuid="178478de-fed5-4f69-8d25-ae9ba4c4c65e"),
    Profile(nric="S5062854Z", uuid="5d792e46-42bc-4b3a-ba0d-943b6fe92b7b"),
    Profile(nric="T0066846F", uuid="0a48a4b6-b759-45c1-8e61-98f5eba4b755"),
    Profile(nric="F9477325W", uuid="10dead76-22dd-4e91-9a8b-a30531b9d30d"),
    Profile(nric="S3000024B", uuid="a1f89e94-ca22-4372-bbe4-d12faa4b2bf8"),
    Profile(nric="S6005040F", uuid="ee414b47-fc3d-4544-8ff0-1f4d9994014c"),
    Profile(nric="S9812381D", uuid="ce0a1900-529a-4ab0-b79c-71c3b6c830b2"),
    Profile(nric="S9812382B", uuid="61618687-9c70-4535-b044-d34f86e518da"),
)

CORPPASS_PROFILES = (
    Profile(
        nric="S8979373D",
        uuid="4abe7d0b-3a54-4e09-9213-eb8170da9620",
        uen="123456789A",
        name="Name of S8979373D",
        is_singpass_holder=True,
    ),
    Profile(
        nric="S8116474F",
        uuid="8cba86fb-3c6e-4f34-b2e5-43426dba3c91",
        uen="123456789A",
        name="Name of S8116474F",
        is_singpass_holder=True,
    ),
    Profile(
        nric="S8723211E",
        uuid="2877191c-9c12-4e0e-bd31-b6f03db46e3d",
        uen="123456789A",
        name="Name of S8723211E",
        is_singpass_holder=True,
    ),
    Profile(
        nric="S5062854Z",
        uuid="a39ce3b4-0377-4d29-bb32-5112106aafd7",
        uen="123456789B",
        name="Name of S5062854Z",
        is_singpass_holder=True,
    ),
    Profile(
        nric="G2957839M",
        uuid="dbb8dfcd-dc83-4744-a67e-10b3f1193226",
        uen="123456789B",
        name="Name of G2957839M",
        is_singpass_holder=False,
    ),
)


def find_profile(profiles, nric):
    for profile in profiles:
        if profile.nric == nric:
            return profile
    return None


def default_profile(profiles, nric=None):
    """Profile matching ``nric`` (the configured default), else the first one."""
    return (nric and find_profile(profiles, nric)) or profiles[0]
