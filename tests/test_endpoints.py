import pytest

from dexcom_share.endpoints import (
    DEFAULT_HEADERS,
    OUS_ENDPOINTS,
    US_ENDPOINTS,
    USER_AGENT,
    Region,
    endpoints_for,
)
from dexcom_share.version import __version__


def test_us_endpoints():
    assert US_ENDPOINTS.account_id_url == (
        "https://share2.dexcom.com/ShareWebServices/Services/General/AuthenticatePublisherAccount"
    )
    assert US_ENDPOINTS.session_id_url == (
        "https://share2.dexcom.com/ShareWebServices/Services/General/LoginPublisherAccountById"
    )
    assert US_ENDPOINTS.glucose_readings_url == (
        "https://share2.dexcom.com/ShareWebServices/Services/Publisher/ReadPublisherLatestGlucoseValues"
    )


def test_regions_differ_only_in_base_domain():
    for attr in ("account_id_url", "session_id_url", "glucose_readings_url"):
        us = getattr(US_ENDPOINTS, attr)
        ous = getattr(OUS_ENDPOINTS, attr)
        assert us.replace("share2.dexcom.com", "shareous1.dexcom.com") == ous


@pytest.mark.parametrize("value,expected", [
    (Region.US, US_ENDPOINTS),
    (Region.OUS, OUS_ENDPOINTS),
    ("us", US_ENDPOINTS),
    ("OUS", OUS_ENDPOINTS),
])
def test_endpoints_for(value, expected):
    assert endpoints_for(value) is expected


def test_endpoints_for_unknown_region():
    with pytest.raises(ValueError):
        endpoints_for("eu")


def test_default_headers():
    assert DEFAULT_HEADERS["Content-Type"] == "application/json"
    assert DEFAULT_HEADERS["User-Agent"] == USER_AGENT
    assert USER_AGENT.endswith(__version__)
