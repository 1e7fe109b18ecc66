"""Global test fixtures and configuration."""

import os
import sys

import pytest

# Make the repository root importable so ``scripts`` resolves
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from dexcom_share.endpoints import US_ENDPOINTS
from dexcom_share.errors import TransportError
from dexcom_share.transport import AsyncTransport, Transport, TransportResponse

ACCOUNT_ID = "a21d18db-a276-40bc-8337-77dcd02df53e"
SESSION_ID = "1e913fce-5a34-4d27-a991-b6cb3a3bd3d8"
READINGS_BODY = (
    b'[{"WT":"Date(1699110415000)","ST":"Date(1699110415000)",'
    b'"DT":"Date(1699110415000+0900)","Value":153,"Trend":"Flat"}]'
)


class ScriptedTransport(Transport):
    """Transport double answering from a ``url -> response`` script and recording every call."""

    def __init__(self, script):
        self.script = dict(script)
        self.calls = []
        self.closed = False

    def post(self, url, headers, body):
        self.calls.append((url, dict(headers), body))
        answer = self.script[url]
        if isinstance(answer, Exception):
            raise answer
        return TransportResponse(*answer)

    def close(self):
        self.closed = True


class AsyncScriptedTransport(AsyncTransport):
    """Async flavour of :class:`ScriptedTransport`."""

    def __init__(self, script):
        self.script = dict(script)
        self.calls = []
        self.closed = False

    async def post(self, url, headers, body):
        self.calls.append((url, dict(headers), body))
        answer = self.script[url]
        if isinstance(answer, Exception):
            raise answer
        return TransportResponse(*answer)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def happy_script():
    """Successful responses for all three Share endpoints."""
    return {
        US_ENDPOINTS.account_id_url: (200, f'"{ACCOUNT_ID}"'.encode()),
        US_ENDPOINTS.session_id_url: (200, f'"{SESSION_ID}"'.encode()),
        US_ENDPOINTS.glucose_readings_url: (200, READINGS_BODY),
    }


@pytest.fixture
def scripted_transport(happy_script):
    return ScriptedTransport(happy_script)


@pytest.fixture
def async_scripted_transport(happy_script):
    return AsyncScriptedTransport(happy_script)


@pytest.fixture
def broken_transport():
    """A transport whose every call fails at the network level."""
    return ScriptedTransport({
        US_ENDPOINTS.account_id_url: TransportError("connection refused"),
        US_ENDPOINTS.session_id_url: TransportError("connection refused"),
        US_ENDPOINTS.glucose_readings_url: TransportError("connection refused"),
    })


@pytest.fixture
def transport_factory():
    """Build a :class:`ScriptedTransport` from a custom script."""
    return ScriptedTransport


@pytest.fixture
def async_transport_factory():
    return AsyncScriptedTransport
