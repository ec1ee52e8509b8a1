"""Shared test fixtures for Sift SDK tests."""

from __future__ import annotations

from typing import Any, List, NamedTuple, Optional

import pytest

from sift_sdk import ClientConfig, SiftClient
from sift_sdk.common import QueryModel
from sift_sdk.transport import DEFAULT_TIMEOUT, HttpTransport, encode_query

ORIGIN = "https://sift.test"
API_KEY = "test-key"
ACCOUNT_ID = "acct-1"


class Call(NamedTuple):
    method: str
    url: str
    query: Optional[dict]
    body: Any
    timeout: float
    username: Optional[str]


class RecordingTransport(HttpTransport):
    """In-memory transport: records every call and replays queued replies.

    A queued exception is raised instead of returned.
    """

    def __init__(self) -> None:
        self.calls: List[Call] = []
        self.replies: List[Any] = []
        self.closed = False

    def queue(self, *replies: Any) -> None:
        self.replies.extend(replies)

    def _next(self) -> Any:
        reply = self.replies.pop(0) if self.replies else None
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def get(self, url, query_params: Optional[QueryModel], timeout, username=None):
        self.calls.append(Call("GET", url, encode_query(query_params), None, timeout, username))
        return self._next()

    async def post(self, url, query_params=None, body=None, timeout=DEFAULT_TIMEOUT, username=None):
        self.calls.append(Call("POST", url, encode_query(query_params), body, timeout, username))
        return self._next()

    async def put(self, url, body, timeout, username):
        self.calls.append(Call("PUT", url, None, body, timeout, username))
        return self._next()

    async def delete(self, url, timeout, username):
        self.calls.append(Call("DELETE", url, None, None, timeout, username))
        self._next()

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(transport: RecordingTransport) -> SiftClient:
    config = ClientConfig(api_key=API_KEY, account_id=ACCOUNT_ID, origin=ORIGIN)
    return SiftClient(config, transport)


@pytest.fixture
def client_without_account(transport: RecordingTransport) -> SiftClient:
    return SiftClient(ClientConfig(api_key=API_KEY, origin=ORIGIN), transport)
