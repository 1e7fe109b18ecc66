"""Decoding of Share responses into ids, readings and domain errors."""

import logging
from typing import List

from pydantic import TypeAdapter, ValidationError

from dexcom_share.errors import (
    DomainError,
    DomainErrorKind,
    SerializationError,
    domain_error_for,
)
from dexcom_share.models.glucose import GlucoseReading
from dexcom_share.models.payloads import ErrorResponse

logger = logging.getLogger(__name__)

_ID_ADAPTER = TypeAdapter(str)
_READINGS_ADAPTER = TypeAdapter(List[GlucoseReading])

# Server codes that map straight to a domain error; InvalidArgument needs the message too.
_KIND_BY_CODE = {
    "SessionIdNotFound": DomainErrorKind.SESSION_NOT_FOUND,
    "SessionNotValid": DomainErrorKind.SESSION_INVALID,
    "AccountPasswordInvalid": DomainErrorKind.ACCOUNT_PASSWORD_INVALID,
    "SSO_AuthenticateMaxAttemptsExceeed": DomainErrorKind.AUTHENTICATE_MAX_ATTEMPTS_EXCEEDED,
}

# Checked in order, first match wins
_INVALID_ARGUMENT_MARKERS = (
    ("accountName", DomainErrorKind.INVALID_USERNAME),
    ("password", DomainErrorKind.INVALID_PASSWORD),
    ("UUID", DomainErrorKind.INVALID_ACCOUNT_ID),
)


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


def classify_error(response: ErrorResponse) -> DomainErrorKind:
    """
    Map a Share error body to a :class:`DomainErrorKind`.

    Args:
        response: Parsed ``{"Code", "Message"}`` error body

    Returns:
        DomainErrorKind: The matching kind, ``UNKNOWN`` for unrecognised codes
    """
    if response.code == "InvalidArgument":
        message = response.message or ""
        for marker, kind in _INVALID_ARGUMENT_MARKERS:
            if marker in message:
                return kind
        return DomainErrorKind.INVALID_UNKNOWN
    if response.code is None:
        return DomainErrorKind.UNKNOWN
    return _KIND_BY_CODE.get(response.code, DomainErrorKind.UNKNOWN)


def decode_error(status_code: int, content: bytes) -> DomainError:
    """
    Build the domain error for a non-2xx response.

    Raises:
        SerializationError: If the error body is not a valid Share error object
    """
    try:
        response = ErrorResponse.model_validate_json(content)
    except ValidationError as e:
        raise SerializationError(
            f"Failed to parse Share error response: {e}",
            status_code=status_code,
            response_body=content,
        ) from e
    kind = classify_error(response)
    return domain_error_for(kind, status_code=status_code, code=response.code, message=response.message)


def raise_for_status(status_code: int, content: bytes) -> None:
    """Raise the mapped domain error unless *status_code* is 2xx."""
    if not is_success(status_code):
        raise decode_error(status_code, content)


def decode_id(status_code: int, content: bytes) -> str:
    """
    Decode an account id or session id response.

    The service answers with a bare JSON string, e.g. ``"a21d18db-..."``.

    Raises:
        DomainError: For non-2xx responses
        SerializationError: If the body is not a non-empty JSON string
    """
    raise_for_status(status_code, content)
    try:
        value = _ID_ADAPTER.validate_json(content)
    except ValidationError as e:
        raise SerializationError(
            f"Failed to parse Share id response: {e}",
            status_code=status_code,
            response_body=content,
        ) from e
    if not value:
        raise SerializationError("Share id response was empty", status_code=status_code, response_body=content)
    return value


def decode_readings(status_code: int, content: bytes) -> List[GlucoseReading]:
    """Decode a readings response into a list, newest first as sent."""
    raise_for_status(status_code, content)
    try:
        return _READINGS_ADAPTER.validate_json(content)
    except ValidationError as e:
        raise SerializationError(
            f"Failed to parse Share readings response: {e}",
            status_code=status_code,
            response_body=content,
        ) from e


def decode_current_reading(status_code: int, content: bytes) -> GlucoseReading:
    """
    Decode the single reading of a latest-readings response.

    An empty array is a :class:`SerializationError`. If the service returns
    more than one reading the first (newest) is used.
    """
    readings = decode_readings(status_code, content)
    if not readings:
        raise SerializationError(
            "Share readings response contained no readings",
            status_code=status_code,
            response_body=content,
        )
    if len(readings) > 1:
        logger.warning(
            "Share returned more readings than requested",
            extra={"log_type": "unexpected_reading_count", "count": len(readings)},
        )
    return readings[0]
