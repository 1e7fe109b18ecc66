"""Exceptions raised by the Dexcom Share client.

Three families, all rooted at :class:`DexcomShareError`:

- :class:`TransportError` wraps whatever the injected transport raised.
- :class:`SerializationError` means a request could not be encoded or a
  response (or error) body could not be decoded.
- :class:`DomainError` is a structured rejection from the Share service; its
  ``kind`` is a :class:`DomainErrorKind` so callers can branch without string
  matching.
"""

from enum import Enum
from typing import Optional


class DomainErrorKind(str, Enum):
    """Closed set of rejections the Share service reports."""

    SESSION_NOT_FOUND = "SessionNotFound"
    SESSION_INVALID = "SessionInvalid"
    ACCOUNT_PASSWORD_INVALID = "AccountPasswordInvalid"
    AUTHENTICATE_MAX_ATTEMPTS_EXCEEDED = "AuthenticateMaxAttemptsExceeded"
    INVALID_USERNAME = "InvalidUsername"
    INVALID_PASSWORD = "InvalidPassword"
    INVALID_ACCOUNT_ID = "InvalidAccountId"
    INVALID_UNKNOWN = "InvalidUnknown"
    UNKNOWN = "Unknown"


class DexcomShareError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(DexcomShareError):
    """The transport failed before an HTTP status was obtained."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class SerializationError(DexcomShareError):
    """A request could not be encoded or a response could not be decoded."""

    def __init__(self, message: str, status_code: Optional[int] = None, response_body: Optional[bytes] = None):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class DomainError(DexcomShareError):
    """The Share service rejected the request."""

    def __init__(
        self,
        kind: DomainErrorKind,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.kind = kind
        self.status_code = status_code
        self.code = code
        self.server_message = message
        text = kind.value
        if code or message:
            text = f"{text} ({code or 'no code'}: {message or 'no message'})"
        super().__init__(text)


class SessionError(DomainError):
    """The session id is unknown to the service or no longer valid."""


class AccountError(DomainError):
    """The account credentials were rejected."""


class ArgumentError(DomainError):
    """The service rejected one of the request arguments."""


_ERROR_CLASS_BY_KIND = {
    DomainErrorKind.SESSION_NOT_FOUND: SessionError,
    DomainErrorKind.SESSION_INVALID: SessionError,
    DomainErrorKind.ACCOUNT_PASSWORD_INVALID: AccountError,
    DomainErrorKind.AUTHENTICATE_MAX_ATTEMPTS_EXCEEDED: AccountError,
    DomainErrorKind.INVALID_USERNAME: ArgumentError,
    DomainErrorKind.INVALID_PASSWORD: ArgumentError,
    DomainErrorKind.INVALID_ACCOUNT_ID: ArgumentError,
    DomainErrorKind.INVALID_UNKNOWN: ArgumentError,
}


def domain_error_for(
    kind: DomainErrorKind,
    status_code: Optional[int] = None,
    code: Optional[str] = None,
    message: Optional[str] = None,
) -> DomainError:
    """Build the most specific :class:`DomainError` subclass for *kind*."""
    error_class = _ERROR_CLASS_BY_KIND.get(kind, DomainError)
    return error_class(kind, status_code=status_code, code=code, message=message)
