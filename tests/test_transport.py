"""Tests for the httpx-backed transports."""
import json

import httpx
import pytest

from dexcom_share.errors import TransportError
from dexcom_share.transport import AsyncHttpxTransport, HttpxTransport, TransportResponse

URL = "https://share2.dexcom.com/ShareWebServices/Services/General/AuthenticatePublisherAccount"
HEADERS = {"Content-Type": "application/json", "User-Agent": "test-agent"}


def echo_handler(request: httpx.Request) -> httpx.Response:
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["User-Agent"] == "test-agent"
    payload = json.loads(request.content)
    return httpx.Response(200, json=payload["accountName"])


def failing_handler(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def test_post_returns_status_and_content():
    client = httpx.Client(transport=httpx.MockTransport(echo_handler))
    transport = HttpxTransport(client)
    response = transport.post(URL, HEADERS, b'{"accountName":"u"}')
    assert response == TransportResponse(200, b'"u"')


def test_post_does_not_raise_for_error_status():
    client = httpx.Client(transport=httpx.MockTransport(
        lambda request: httpx.Response(500, content=b'{"Code":"SessionNotValid"}')
    ))
    response = HttpxTransport(client).post(URL, HEADERS, b"{}")
    assert response.status_code == 500
    assert response.content == b'{"Code":"SessionNotValid"}'


def test_post_wraps_httpx_errors():
    client = httpx.Client(transport=httpx.MockTransport(failing_handler))
    with pytest.raises(TransportError) as exc_info:
        HttpxTransport(client).post(URL, HEADERS, b"{}")
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.url == URL


def test_close_leaves_borrowed_client_open():
    client = httpx.Client(transport=httpx.MockTransport(echo_handler))
    transport = HttpxTransport(client)
    transport.close()
    assert not client.is_closed
    client.close()


def test_close_owned_client():
    with HttpxTransport(timeout=5.0) as transport:
        client = transport.http_client
    assert client.is_closed


@pytest.mark.asyncio
async def test_async_post_returns_status_and_content():
    client = httpx.AsyncClient(transport=httpx.MockTransport(echo_handler))
    transport = AsyncHttpxTransport(client)
    response = await transport.post(URL, HEADERS, b'{"accountName":"u"}')
    assert response == TransportResponse(200, b'"u"')
    await client.aclose()


@pytest.mark.asyncio
async def test_async_post_wraps_httpx_errors():
    client = httpx.AsyncClient(transport=httpx.MockTransport(failing_handler))
    with pytest.raises(TransportError):
        await AsyncHttpxTransport(client).post(URL, HEADERS, b"{}")
    await client.aclose()


@pytest.mark.asyncio
async def test_async_close_owned_client():
    async with AsyncHttpxTransport() as transport:
        client = transport.http_client
    assert client.is_closed
