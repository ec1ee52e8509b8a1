"""Pluggable HTTP transports.

``SiftClient`` only talks to an ``HttpTransport``. Two engines ship with the
SDK: ``HttpxTransport`` (default) and ``AiohttpTransport``. Both send the SDK
User-Agent, authenticate with HTTP basic auth (api key as username, empty
password) when asked to, and turn every failure into a ``SiftError``.
"""

from __future__ import annotations

import abc
import asyncio
import json
import logging
from typing import Any, Dict, NamedTuple, Optional

import aiohttp
import httpx

from sift_sdk.common import QueryModel
from sift_sdk.errors import ServerError, error_from_response
from sift_sdk.version import __version__

logger = logging.getLogger(__name__)

USER_AGENT = f"sift-python/{__version__}"
DEFAULT_TIMEOUT = 2.0


def encode_query(query_params: Optional[QueryModel]) -> Optional[Dict[str, str]]:
    """Render query params as string pairs, or ``None`` when there are none."""
    if query_params is None:
        return None
    return query_params.to_query() or None


def loggable_url(url: str) -> str:
    """``url`` without its query string, which may carry the api key."""
    return url.split("?", 1)[0]


class HttpTransport(abc.ABC):
    """HTTP capability required by ``SiftClient``.

    Implementations return decoded JSON values and raise ``SiftError``
    subclasses for every failure. No retries.
    """

    @abc.abstractmethod
    async def get(
        self,
        url: str,
        query_params: Optional[QueryModel],
        timeout: float,
        username: Optional[str] = None,
    ) -> Any:
        """GET ``url`` and return the decoded JSON body."""

    @abc.abstractmethod
    async def post(
        self,
        url: str,
        query_params: Optional[QueryModel] = None,
        body: Optional[Any] = None,
        timeout: float = DEFAULT_TIMEOUT,
        username: Optional[str] = None,
    ) -> Optional[Any]:
        """POST ``body`` as JSON.

        Returns ``None`` when the API replies 204 No Content, the decoded
        JSON body otherwise.
        """

    @abc.abstractmethod
    async def put(self, url: str, body: Any, timeout: float, username: str) -> Any:
        """PUT ``body`` as JSON and return the decoded JSON body."""

    @abc.abstractmethod
    async def delete(self, url: str, timeout: float, username: str) -> None:
        """DELETE ``url``, discarding any body."""

    async def close(self) -> None:
        """Release engine resources. No-op by default."""

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


class RawResponse(NamedTuple):
    status: int
    text: str


class EngineTransport(HttpTransport):
    """Status and body handling shared by the bundled engines.

    Subclasses only implement ``_send``.
    """

    @abc.abstractmethod
    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, str]],
        body: Optional[Any],
        timeout: float,
        username: Optional[str],
    ) -> RawResponse:
        ...

    @staticmethod
    def _raise_for_status(resp: RawResponse) -> None:
        if 200 <= resp.status < 300:
            return
        body: Any
        if not resp.text:
            body = None
        else:
            try:
                body = json.loads(resp.text)
            except ValueError:
                body = resp.text
        raise error_from_response(resp.status, body)

    @staticmethod
    def _decode(resp: RawResponse) -> Any:
        try:
            value = json.loads(resp.text)
        except ValueError as e:
            raise ServerError(f"invalid JSON response body: {e}") from e
        if value is None:
            raise ServerError("unexpected null JSON response body")
        return value

    async def get(
        self,
        url: str,
        query_params: Optional[QueryModel],
        timeout: float,
        username: Optional[str] = None,
    ) -> Any:
        resp = await self._send(
            "GET", url, params=encode_query(query_params), body=None,
            timeout=timeout, username=username,
        )
        self._raise_for_status(resp)
        return self._decode(resp)

    async def post(
        self,
        url: str,
        query_params: Optional[QueryModel] = None,
        body: Optional[Any] = None,
        timeout: float = DEFAULT_TIMEOUT,
        username: Optional[str] = None,
    ) -> Optional[Any]:
        resp = await self._send(
            "POST", url, params=encode_query(query_params), body=body,
            timeout=timeout, username=username,
        )
        if resp.status == 204:
            return None
        self._raise_for_status(resp)
        return self._decode(resp)

    async def put(self, url: str, body: Any, timeout: float, username: str) -> Any:
        resp = await self._send(
            "PUT", url, params=None, body=body, timeout=timeout, username=username,
        )
        self._raise_for_status(resp)
        return self._decode(resp)

    async def delete(self, url: str, timeout: float, username: str) -> None:
        resp = await self._send(
            "DELETE", url, params=None, body=None, timeout=timeout, username=username,
        )
        self._raise_for_status(resp)


class HttpxTransport(EngineTransport):
    """Transport backed by ``httpx.AsyncClient``.

    A client passed in stays owned by the caller; otherwise one is created
    and closed by ``close()``.
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None) -> None:
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, str]],
        body: Optional[Any],
        timeout: float,
        username: Optional[str],
    ) -> RawResponse:
        kwargs: Dict[str, Any] = {
            "headers": {"User-Agent": USER_AGENT},
            "timeout": timeout,
        }
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body
        if username is not None:
            kwargs["auth"] = httpx.BasicAuth(username, "")
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("%s %s timed out after %ss", method, loggable_url(url), timeout)
            raise ServerError(f"request timed out after {timeout}s: {e}") from e
        except httpx.HTTPError as e:
            logger.error("%s %s request error: %s", method, loggable_url(url), e)
            raise ServerError(str(e)) from e
        return RawResponse(resp.status_code, resp.text)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class AiohttpTransport(EngineTransport):
    """Transport backed by ``aiohttp.ClientSession``.

    The session is created lazily inside the running event loop when none is
    supplied.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None) -> None:
        self._owns_session = session is None
        self._session = session

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, str]],
        body: Optional[Any],
        timeout: float,
        username: Optional[str],
    ) -> RawResponse:
        session = self._get_session()
        kwargs: Dict[str, Any] = {
            "headers": {"User-Agent": USER_AGENT},
            "timeout": aiohttp.ClientTimeout(total=timeout),
        }
        if params:
            kwargs["params"] = params
        if body is not None:
            kwargs["json"] = body
        if username is not None:
            kwargs["auth"] = aiohttp.BasicAuth(username, "")
        try:
            async with session.request(method, url, **kwargs) as resp:
                return RawResponse(resp.status, await resp.text())
        except asyncio.TimeoutError as e:
            logger.error("%s %s timed out after %ss", method, loggable_url(url), timeout)
            raise ServerError(f"request timed out after {timeout}s") from e
        except aiohttp.ClientError as e:
            logger.error("%s %s request error: %s", method, loggable_url(url), e)
            raise ServerError(str(e)) from e

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
