"""Global test configuration and fixtures."""
import json
import threading
from typing import Callable, List, Optional

import pytest

from stripe_rest.api.api_client import Client
from stripe_rest.api.models import Request, Response
from stripe_rest.api.transport import AsyncTransport


class StubTransport:
    """Blocking transport that records requests and answers from a callable"""

    def __init__(self, responder: Optional[Callable[[Request], Response]] = None):
        self.requests: List[Request] = []
        self.closed = False
        self._lock = threading.Lock()
        self._responder = responder or (lambda request: Response(status=200, body=b"{}"))

    def send(self, request: Request) -> Response:
        with self._lock:
            self.requests.append(request)
        return self._responder(request)

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> Request:
        return self.requests[-1]


class EchoAsyncTransport(AsyncTransport):
    """Async transport answering with the request body wrapped in JSON"""

    def __init__(self):
        super().__init__()
        self.requests: List[Request] = []

    async def dispatch(self, request: Request) -> Response:
        self.requests.append(request)
        payload = {
            "method": request.method.value,
            "url": str(request.url),
            "body": (request.body or b"").decode("ascii"),
            "account": request.headers.get("Stripe-Account"),
        }
        return Response(
            status=200,
            body=json.dumps(payload).encode("utf-8"),
            headers={"Request-Id": "req_echo"}
        )


def json_response(status: int, payload) -> Response:
    return Response(status=status, body=json.dumps(payload).encode("utf-8"))


@pytest.fixture
def stub_transport():
    """Transport answering every request with an empty JSON object"""
    return StubTransport()


@pytest.fixture
def client(stub_transport):
    """Client wired to the stub transport"""
    return Client("sk_test_123", transport=stub_transport)


@pytest.fixture
def echo_transport():
    """Async echo transport running on its own loop thread"""
    transport = EchoAsyncTransport()
    yield transport
    transport.close()
