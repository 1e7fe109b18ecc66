"""Client for the Dexcom Share glucose service."""

from dexcom_share.client import AsyncDexcom, Dexcom
from dexcom_share.endpoints import OUS_ENDPOINTS, US_ENDPOINTS, Endpoints, Region
from dexcom_share.errors import (
    AccountError,
    ArgumentError,
    DexcomShareError,
    DomainError,
    DomainErrorKind,
    SerializationError,
    SessionError,
    TransportError,
)
from dexcom_share.models import GlucoseReading, Trend
from dexcom_share.transport import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
    TransportResponse,
)
from dexcom_share.utils.config import DEFAULT_APPLICATION_ID
from dexcom_share.version import __version__

__all__ = [
    "Dexcom",
    "AsyncDexcom",
    "Region",
    "Endpoints",
    "US_ENDPOINTS",
    "OUS_ENDPOINTS",
    "GlucoseReading",
    "Trend",
    "Transport",
    "AsyncTransport",
    "TransportResponse",
    "HttpxTransport",
    "AsyncHttpxTransport",
    "DexcomShareError",
    "TransportError",
    "SerializationError",
    "DomainError",
    "DomainErrorKind",
    "SessionError",
    "AccountError",
    "ArgumentError",
    "DEFAULT_APPLICATION_ID",
    "__version__",
]
