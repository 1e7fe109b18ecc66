"""Dexcom Share client.

Authenticates against the Share service (account id, then session id) and
fetches the latest glucose reading. Every public operation issues exactly one
POST through the injected transport; nothing is cached or retried here.

Example:
    with Dexcom.from_settings(get_settings()) as dexcom:
        session_id = dexcom.load_session_id("user", "secret", DEFAULT_APPLICATION_ID)
        reading = dexcom.get_current_glucose_reading(session_id)
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Optional, Tuple, Type, TypeVar

from dexcom_share.decoder import decode_current_reading, decode_id
from dexcom_share.endpoints import DEFAULT_HEADERS, Endpoints, Region, endpoints_for
from dexcom_share.errors import (
    DexcomShareError,
    DomainError,
    SerializationError,
    TransportError,
)
from dexcom_share.metrics import dexcom_share_call_latency_seconds, dexcom_share_call_total
from dexcom_share.models.glucose import GlucoseReading
from dexcom_share.models.payloads import (
    AccountIdLookup,
    LatestReadingsRequest,
    SessionIdLookup,
    SharePayload,
)
from dexcom_share.transport import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
    TransportResponse,
)
from dexcom_share.utils.config import Settings
from dexcom_share.utils.logging_utils import redact_sensitive_data

logger = logging.getLogger(__name__)

__all__ = ["Dexcom", "AsyncDexcom"]

T = TypeVar("T")
P = TypeVar("P", bound=SharePayload)

Decoder = Callable[[int, bytes], T]


def _outcome(exc: DexcomShareError) -> str:
    if isinstance(exc, TransportError):
        return "transport_error"
    if isinstance(exc, SerializationError):
        return "serialization_error"
    if isinstance(exc, DomainError):
        return "domain_error"
    return "error"


class _ShareClientBase:
    """Request encoding, logging and metrics shared by both facades."""

    def __init__(self, *, region: Region = Region.US, endpoints: Optional[Endpoints] = None) -> None:
        self.endpoints = endpoints if endpoints is not None else endpoints_for(region)

    @staticmethod
    def _encode(payload_cls: Type[P], **fields) -> Tuple[P, bytes]:
        try:
            payload = payload_cls(**fields)
            body = payload.to_json_bytes()
        except ValueError as e:
            raise SerializationError(f"Failed to encode {payload_cls.__name__}: {e}") from e
        return payload, body

    def _log_request(self, endpoint: str, url: str, payload: SharePayload, correlation_id: str) -> float:
        logger.info(
            "Dexcom Share request",
            extra={
                "log_type": "request",
                "correlation_id": correlation_id,
                "endpoint": endpoint,
                "url": url,
                "body": redact_sensitive_data(payload.model_dump(by_alias=True)),
            }
        )
        return time.monotonic()

    def _log_response(self, endpoint: str, response: TransportResponse, correlation_id: str) -> None:
        logger.info(
            "Dexcom Share response",
            extra={
                "log_type": "response",
                "correlation_id": correlation_id,
                "endpoint": endpoint,
                "status_code": response.status_code,
                "content_length": len(response.content),
            }
        )

    def _record(self, endpoint: str, start_time: float, status: str, correlation_id: str,
                exc: Optional[DexcomShareError] = None) -> None:
        latency = time.monotonic() - start_time
        dexcom_share_call_latency_seconds.labels(endpoint=endpoint).observe(latency)
        dexcom_share_call_total.labels(endpoint=endpoint, status=status).inc()
        if exc is not None:
            logger.error(
                "Dexcom Share call failed",
                extra={
                    "log_type": status,
                    "correlation_id": correlation_id,
                    "endpoint": endpoint,
                    "error": str(exc),
                    "latency": latency,
                }
            )

    @staticmethod
    def _transport_failure(url: str, exc: Exception) -> TransportError:
        return TransportError(f"POST {url} failed: {exc!r}", url=url)


class Dexcom(_ShareClientBase):
    """Blocking Share facade over a borrowed :class:`Transport`."""

    def __init__(self, transport: Transport, *, region: Region = Region.US,
                 endpoints: Optional[Endpoints] = None) -> None:
        super().__init__(region=region, endpoints=endpoints)
        self.transport = transport
        self._owns_transport = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Dexcom":
        """Build a client with its own httpx transport from *settings*."""
        client = cls(HttpxTransport(timeout=settings.request_timeout_seconds), region=settings.region)
        client._owns_transport = True
        return client

    def __enter__(self) -> "Dexcom":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self.transport.close()

    def _call(self, endpoint: str, url: str, payload: SharePayload, body: bytes,
                decode: Decoder) -> T:
        correlation_id = str(uuid.uuid4())
        start_time = self._log_request(endpoint, url, payload, correlation_id)
        try:
            try:
                response = self.transport.post(url, DEFAULT_HEADERS, body)
            except TransportError:
                raise
            except Exception as exc:
                raise self._transport_failure(url, exc) from exc
            self._log_response(endpoint, response, correlation_id)
            result = decode(response.status_code, response.content)
        except DexcomShareError as exc:
            self._record(endpoint, start_time, _outcome(exc), correlation_id, exc)
            raise
        self._record(endpoint, start_time, "success", correlation_id)
        return result

    def get_account_id(self, account_name: str, password: str, application_id: str) -> str:
        """
        Look up the account id for an account name.

        Args:
            account_name: Dexcom Share account name
            password: Account password
            application_id: Share application id

        Returns:
            str: Server-issued account id

        Raises:
            DomainError: If the service rejects the credentials
            SerializationError: If the response cannot be decoded
            TransportError: If the transport fails
        """
        payload, body = self._encode(
            AccountIdLookup, account_name=account_name, password=password, application_id=application_id
        )
        return self._call("account_id", self.endpoints.account_id_url, payload, body, decode_id)

    def get_session_id(self, account_id: str, password: str, application_id: str) -> str:
        """Exchange an account id and password for a session id."""
        payload, body = self._encode(
            SessionIdLookup, account_id=account_id, password=password, application_id=application_id
        )
        return self._call("session_id", self.endpoints.session_id_url, payload, body, decode_id)

    def load_session_id(self, account_name: str, password: str, application_id: str) -> str:
        """Account id lookup followed by session id lookup; stops at the first failure."""
        account_id = self.get_account_id(account_name, password, application_id)
        return self.get_session_id(account_id, password, application_id)

    def get_current_glucose_reading(self, session_id: str) -> GlucoseReading:
        """
        Fetch the newest reading of the last ten minutes.

        Raises:
            SessionError: If the session id is unknown or expired
            SerializationError: If no reading is returned or it cannot be decoded
            TransportError: If the transport fails
        """
        payload, body = self._encode(LatestReadingsRequest, session_id=session_id)
        return self._call(
            "glucose_readings", self.endpoints.glucose_readings_url, payload, body, decode_current_reading
        )


class AsyncDexcom(_ShareClientBase):
    """Async Share facade over a borrowed :class:`AsyncTransport`."""

    def __init__(self, transport: AsyncTransport, *, region: Region = Region.US,
                 endpoints: Optional[Endpoints] = None) -> None:
        super().__init__(region=region, endpoints=endpoints)
        self.transport = transport
        self._owns_transport = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "AsyncDexcom":
        client = cls(AsyncHttpxTransport(timeout=settings.request_timeout_seconds), region=settings.region)
        client._owns_transport = True
        return client

    async def __aenter__(self) -> "AsyncDexcom":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.close()

    async def close(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def _call(self, endpoint: str, url: str, payload: SharePayload, body: bytes,
                decode: Decoder) -> T:
        correlation_id = str(uuid.uuid4())
        start_time = self._log_request(endpoint, url, payload, correlation_id)
        try:
            try:
                response = await self.transport.post(url, DEFAULT_HEADERS, body)
            except TransportError:
                raise
            except Exception as exc:
                raise self._transport_failure(url, exc) from exc
            self._log_response(endpoint, response, correlation_id)
            result = decode(response.status_code, response.content)
        except DexcomShareError as exc:
            self._record(endpoint, start_time, _outcome(exc), correlation_id, exc)
            raise
        self._record(endpoint, start_time, "success", correlation_id)
        return result

    async def get_account_id(self, account_name: str, password: str, application_id: str) -> str:
        payload, body = self._encode(
            AccountIdLookup, account_name=account_name, password=password, application_id=application_id
        )
        return await self._call("account_id", self.endpoints.account_id_url, payload, body, decode_id)

    async def get_session_id(self, account_id: str, password: str, application_id: str) -> str:
        payload, body = self._encode(
            SessionIdLookup, account_id=account_id, password=password, application_id=application_id
        )
        return await self._call("session_id", self.endpoints.session_id_url, payload, body, decode_id)

    async def load_session_id(self, account_name: str, password: str, application_id: str) -> str:
        account_id = await self.get_account_id(account_name, password, application_id)
        return await self.get_session_id(account_id, password, application_id)

    async def get_current_glucose_reading(self, session_id: str) -> GlucoseReading:
        payload, body = self._encode(LatestReadingsRequest, session_id=session_id)
        return await self._call(
            "glucose_readings", self.endpoints.glucose_readings_url, payload, body, decode_current_reading
        )
