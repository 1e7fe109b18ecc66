"""Dexcom Share endpoint bundles.

The service is hosted on two domains: one for the United States and one for
everywhere else. Both expose the same paths, so a region only ever changes the
base URL.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from dexcom_share.version import __version__

USER_AGENT = f"dexcom-share-client/{__version__}"

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "User-Agent": USER_AGENT,
}

ACCOUNT_ID_PATH = "/General/AuthenticatePublisherAccount"
SESSION_ID_PATH = "/General/LoginPublisherAccountById"
GLUCOSE_READINGS_PATH = "/Publisher/ReadPublisherLatestGlucoseValues"


class Region(str, Enum):
    """Dexcom Share hosting region."""

    US = "us"
    OUS = "ous"

    @classmethod
    def _missing_(cls, value):
        # Accept "US", "Ous" and friends from environment variables
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None


class Endpoints(BaseModel):
    """Fully qualified URLs for the three Share calls."""

    model_config = ConfigDict(frozen=True)

    base_url: str

    @property
    def account_id_url(self) -> str:
        return f"{self.base_url}{ACCOUNT_ID_PATH}"

    @property
    def session_id_url(self) -> str:
        return f"{self.base_url}{SESSION_ID_PATH}"

    @property
    def glucose_readings_url(self) -> str:
        return f"{self.base_url}{GLUCOSE_READINGS_PATH}"


US_ENDPOINTS = Endpoints(base_url="https://share2.dexcom.com/ShareWebServices/Services")
OUS_ENDPOINTS = Endpoints(base_url="https://shareous1.dexcom.com/ShareWebServices/Services")

_ENDPOINTS_BY_REGION = {
    Region.US: US_ENDPOINTS,
    Region.OUS: OUS_ENDPOINTS,
}


def endpoints_for(region: Region) -> Endpoints:
    """
    Return the endpoint bundle for a region.

    Args:
        region: Region enum member or its string value ("us" / "ous")

    Returns:
        Endpoints: The matching endpoint bundle

    Raises:
        ValueError: If the region is not recognised
    """
    return _ENDPOINTS_BY_REGION[Region(region)]
