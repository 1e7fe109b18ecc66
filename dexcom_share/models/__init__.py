"""Pydantic models and schemas."""

from dexcom_share.models.glucose import GlucoseReading, Trend
from dexcom_share.models.payloads import (
    AccountIdLookup,
    ErrorResponse,
    LatestReadingsRequest,
    SessionIdLookup,
)

__all__ = [
    # Glucose reading models
    "GlucoseReading",
    "Trend",

    # Wire payloads
    "AccountIdLookup",
    "SessionIdLookup",
    "LatestReadingsRequest",
    "ErrorResponse",
]
