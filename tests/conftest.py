import json
from typing import Any, Dict, List, Optional

import pytest
from multidict import CIMultiDict

from rtdb_admin.infrastructure.auth import StaticTokenProvider
from rtdb_admin.infrastructure.database.firebase import DatabaseClient

TEST_URL = "https://test-db.firebaseio.com"
TEST_TOKEN = "mock-token"


class FakeResponse:
    """Stands in for the aiohttp response used as ``async with session.request(...)``"""

    def __init__(self, status: int = 200, body: Any = None, headers: Optional[Dict[str, str]] = None):
        self.status = status
        if body is None:
            self.body = b""
        elif isinstance(body, bytes):
            self.body = body
        else:
            self.body = json.dumps(body).encode("utf-8")
        self.headers = CIMultiDict(headers or {})

    async def read(self) -> bytes:
        return self.body

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


class FakeSession:
    """
    Records every request and serves canned responses in order. The last
    response is reused once the queue runs dry.
    """

    def __init__(self, *responses: FakeResponse):
        self.responses: List[FakeResponse] = list(responses) or [FakeResponse(200, b"null")]
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, *responses: FakeResponse) -> None:
        self.responses.extend(responses)

    def request(self, method, url, params=None, headers=None, data=None):
        self.requests.append({
            "method": method,
            "url": url,
            "params": dict(params or {}),
            "headers": dict(headers or {}),
            "data": data,
        })
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]

    @property
    def last(self) -> Dict[str, Any]:
        return self.requests[-1]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def credential():
    return StaticTokenProvider(TEST_TOKEN)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(credential, session):
    return DatabaseClient(TEST_URL, credential, session=session)


@pytest.fixture
def ref(client):
    return client.reference("peter")


@pytest.fixture
def respond():
    """Build canned responses: ``respond(200, {"a": 1}, {"ETag": "E1"})``"""
    return FakeResponse
