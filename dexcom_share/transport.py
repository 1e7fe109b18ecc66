"""HTTP transports used by the Share client.

The client only ever needs one operation: POST a body to a URL and get the
status code and raw response bytes back. Anything beyond that (timeouts,
pooling, TLS, retries) is the transport's business.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, NamedTuple, Optional

import httpx

from dexcom_share.errors import TransportError

__all__ = [
    "TransportResponse",
    "Transport",
    "AsyncTransport",
    "HttpxTransport",
    "AsyncHttpxTransport",
]

DEFAULT_TIMEOUT_SECONDS = 30.0


class TransportResponse(NamedTuple):
    status_code: int
    content: bytes


class Transport(ABC):
    """Blocking transport."""

    @abstractmethod
    def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """Send *body* to *url* and return the status code and response bytes."""

    def close(self) -> None:
        """Release any resources owned by the transport."""


class AsyncTransport(ABC):
    """Cooperative (asyncio) transport."""

    @abstractmethod
    async def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """Send *body* to *url* and return the status code and response bytes."""

    async def aclose(self) -> None:
        """Release any resources owned by the transport."""


# ---------------------------------------------------------------------------
# httpx implementations
# ---------------------------------------------------------------------------
class HttpxTransport(Transport):
    """Blocking transport backed by :class:`httpx.Client`.

    A client passed in stays owned by the caller; one created here is closed
    by :meth:`close`.
    """

    def __init__(self, client: Optional[httpx.Client] = None, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._owns_client = client is None
        self.http_client = client if client is not None else httpx.Client(timeout=timeout)

    def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        try:
            resp = self.http_client.post(url, headers=dict(headers), content=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {url} failed: {exc}", url=url) from exc
        return TransportResponse(resp.status_code, resp.content)

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()


class AsyncHttpxTransport(AsyncTransport):
    """Async transport backed by :class:`httpx.AsyncClient`."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, *, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._owns_client = client is None
        self.http_client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        try:
            resp = await self.http_client.post(url, headers=dict(headers), content=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"POST {url} failed: {exc}", url=url) from exc
        return TransportResponse(resp.status_code, resp.content)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "AsyncHttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()
