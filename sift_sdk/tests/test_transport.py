"""Tests for the bundled HTTP transports.

HttpxTransport runs against httpx.MockTransport; AiohttpTransport gets a
mocked ClientSession.
"""

from __future__ import annotations

import asyncio
import base64
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import httpx
import pytest

from sift_sdk.common import AbuseType, QueryParams
from sift_sdk.errors import RequestError, ServerError, ValidationError
from sift_sdk.transport import USER_AGENT, AiohttpTransport, HttpxTransport, loggable_url


def run_async(coro):
    """Helper to run async coroutine in sync test."""
    return asyncio.run(coro)


def basic_auth(username: str) -> str:
    return "Basic " + base64.b64encode(f"{username}:".encode()).decode()


def make_transport(handler) -> HttpxTransport:
    return HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestHttpxRequests:
    def test_get_sends_user_agent_query_and_auth(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"status": 0})

        transport = make_transport(handler)
        query = QueryParams(api_key="k", abuse_types=[AbuseType.PAYMENT_ABUSE])
        result = run_async(transport.get("https://sift.test/v205/x", query, 2.0, "test-key"))

        request = seen["request"]
        assert result == {"status": 0}
        assert request.method == "GET"
        assert request.headers["User-Agent"] == USER_AGENT
        assert request.headers["Authorization"] == basic_auth("test-key")
        assert request.url.params["api_key"] == "k"
        assert request.url.params.get_list("abuse_types") == ["payment_abuse"]

    def test_get_without_username_sends_no_auth(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={})

        run_async(make_transport(handler).get("https://sift.test/x", None, 2.0))
        assert "Authorization" not in seen["request"].headers
        assert seen["request"].url.query == b""

    def test_post_sends_json_body(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"status": 0, "error_message": "OK"})

        body = {"$type": "$login", "$user_id": "u1"}
        result = run_async(make_transport(handler).post("https://sift.test/x", None, body, 2.0))
        assert seen["body"] == body
        assert result == {"status": 0, "error_message": "OK"}

    def test_put_and_delete(self) -> None:
        methods = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            if request.method == "DELETE":
                return httpx.Response(200, text="ignored")
            return httpx.Response(200, json={"id": 1})

        transport = make_transport(handler)
        assert run_async(transport.put("https://sift.test/w/1", {"id": 1}, 2.0, "k")) == {"id": 1}
        assert run_async(transport.delete("https://sift.test/w/1", 2.0, "k")) is None
        assert methods == ["PUT", "DELETE"]


class TestHttpxResponses:
    def test_post_204_is_none(self) -> None:
        transport = make_transport(lambda request: httpx.Response(204))
        assert run_async(transport.post("https://sift.test/x", None, {}, 2.0)) is None

    def test_post_200_null_is_server_error(self) -> None:
        transport = make_transport(lambda request: httpx.Response(200, text="null"))
        with pytest.raises(ServerError, match="null"):
            run_async(transport.post("https://sift.test/x", None, {}, 2.0))

    def test_post_200_empty_is_server_error(self) -> None:
        transport = make_transport(lambda request: httpx.Response(200, text=""))
        with pytest.raises(ServerError, match="invalid JSON"):
            run_async(transport.post("https://sift.test/x", None, {}, 2.0))

    def test_get_204_is_not_special(self) -> None:
        transport = make_transport(lambda request: httpx.Response(204))
        with pytest.raises(ServerError):
            run_async(transport.get("https://sift.test/x", None, 2.0))

    def test_error_body_decoded(self) -> None:
        transport = make_transport(
            lambda request: httpx.Response(400, json={"status": 51, "error_message": "Invalid API key"})
        )
        with pytest.raises(RequestError) as exc_info:
            run_async(transport.get("https://sift.test/x", None, 2.0))
        assert exc_info.value.status == 51

    def test_validation_error_keeps_issues(self) -> None:
        issues = {"message": "invalid field", "field": "$user_id"}
        transport = make_transport(lambda request: httpx.Response(422, json=issues))
        with pytest.raises(ValidationError) as exc_info:
            run_async(transport.post("https://sift.test/x", None, {}, 2.0))
        assert exc_info.value.issues == issues

    def test_server_error_with_text_body(self) -> None:
        transport = make_transport(lambda request: httpx.Response(503, text="unavailable"))
        with pytest.raises(ServerError, match="HTTP 503: unavailable"):
            run_async(transport.put("https://sift.test/x", {}, 2.0, "k"))

    def test_delete_error(self) -> None:
        transport = make_transport(lambda request: httpx.Response(500))
        with pytest.raises(ServerError, match="empty response body"):
            run_async(transport.delete("https://sift.test/x", 2.0, "k"))


class TestHttpxFailures:
    def test_timeout_becomes_server_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(ServerError, match="timed out"):
            run_async(make_transport(handler).get("https://sift.test/x", None, 2.0))

    def test_connect_error_becomes_server_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ServerError, match="refused"):
            run_async(make_transport(handler).post("https://sift.test/x", None, {}, 2.0))

    def test_error_log_hides_query(self, caplog) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ServerError):
            run_async(make_transport(handler).delete("https://sift.test/x?api_key=secret", 2.0, "k"))
        assert "secret" not in caplog.text

    def test_loggable_url(self) -> None:
        assert loggable_url("https://sift.test/a?api_key=k") == "https://sift.test/a"


class TestHttpxOwnership:
    def test_supplied_client_left_open(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(204)))
        run_async(HttpxTransport(client).close())
        assert not client.is_closed

    def test_owned_client_closed(self) -> None:
        transport = HttpxTransport()

        async def use():
            async with transport:
                pass

        run_async(use())
        assert transport._client.is_closed


def mock_session(status: int = 200, text: str = "{}") -> MagicMock:
    resp = MagicMock()
    resp.status = status
    resp.text = AsyncMock(return_value=text)
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=resp)
    ctx.__aexit__ = AsyncMock(return_value=False)
    session = MagicMock()
    session.closed = False
    session.request = MagicMock(return_value=ctx)
    session.close = AsyncMock()
    return session


class TestAiohttpTransport:
    def test_get_passes_auth_timeout_and_query(self) -> None:
        session = mock_session(text='{"status": 0}')
        transport = AiohttpTransport(session)
        query = QueryParams(api_key="k")

        result = run_async(transport.get("https://sift.test/x", query, 3.0, "test-key"))

        assert result == {"status": 0}
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://sift.test/x")
        assert kwargs["headers"] == {"User-Agent": USER_AGENT}
        assert kwargs["auth"] == aiohttp.BasicAuth("test-key", "")
        assert kwargs["timeout"] == aiohttp.ClientTimeout(total=3.0)
        assert kwargs["params"] == {"api_key": "k"}

    def test_post_json_and_204(self) -> None:
        session = mock_session(status=204, text="")
        transport = AiohttpTransport(session)

        result = run_async(transport.post("https://sift.test/x", None, {"a": 1}, 2.0))

        assert result is None
        _, kwargs = session.request.call_args
        assert kwargs["json"] == {"a": 1}
        assert "auth" not in kwargs
        assert "params" not in kwargs

    def test_error_status_decoded(self) -> None:
        session = mock_session(status=400, text='{"status": 60, "error_message": "bad"}')
        with pytest.raises(RequestError) as exc_info:
            run_async(AiohttpTransport(session).post("https://sift.test/x", None, {}, 2.0))
        assert exc_info.value.status == 60

    def test_client_error_becomes_server_error(self) -> None:
        session = mock_session()
        session.request.side_effect = aiohttp.ClientConnectionError("reset")
        with pytest.raises(ServerError, match="reset"):
            run_async(AiohttpTransport(session).get("https://sift.test/x", None, 2.0))

    def test_timeout_becomes_server_error(self) -> None:
        session = mock_session()
        session.request.side_effect = asyncio.TimeoutError()
        with pytest.raises(ServerError, match="timed out"):
            run_async(AiohttpTransport(session).get("https://sift.test/x", None, 2.0))

    def test_supplied_session_left_open(self) -> None:
        session = mock_session()
        run_async(AiohttpTransport(session).close())
        session.close.assert_not_called()
