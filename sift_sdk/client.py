"""SiftClient: asynchronous client for the Sift APIs.

Usage::

    import asyncio
    from sift_sdk import ClientConfig, EventOptions, SiftClient
    from sift_sdk.reserved_events import CreateAccount

    async def main():
        async with SiftClient(ClientConfig(api_key="...")) as sift:
            scores = await sift.track(
                CreateAccount(user_id="u1", user_email="test@example.com"),
                EventOptions(return_score=True),
            )
            print(scores)

    asyncio.run(main())

Each method makes at most one request and never retries. Failures raise
``SiftError`` subclasses.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import urlencode

import pydantic
from pydantic import TypeAdapter

from sift_sdk.common import AbuseType, ErrorBody, QueryParams, ReservedModel, SiftModel, encode_path_segment
from sift_sdk.config import ClientConfig
from sift_sdk.decisions import (
    Decision,
    DecisionListOptions,
    DecisionPage,
    DecisionPageResult,
    DecisionQueryParams,
    DecisionRequest,
    DecisionResult,
    DecisionStatus,
    DecisionStatusResult,
    DecisionsApiVersion,
    Entity,
)
from sift_sdk.errors import ConfigurationError, RequestError, ServerError
from sift_sdk.events import DEFAULT_EVENTS_PATH, EventOptions, EventQueryParams, EventResponse, EventsApiVersion
from sift_sdk.labels import LabelOptions, LabelProperties, UnlabelQueryParams, labels_path
from sift_sdk.reserved_events import event_to_json
from sift_sdk.score import ScoreOptions, ScoreQueryParams, ScoreResponse, Scores
from sift_sdk.transport import HttpTransport, HttpxTransport
from sift_sdk.verification import (
    CheckOptions,
    CheckRequest,
    CheckResponse,
    ResendRequest,
    SendRequest,
    SendResponse,
    VerificationApiVersion,
)
from sift_sdk.webhooks import Webhook, WebhookListResult, WebhookRequest, WebhookResult, WebhooksApiVersion

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=SiftModel)


class SiftClient:
    """Asynchronous client for the Sift Events, Score, Labels, Verification,
    Webhooks and Decisions APIs.

    Args:
        config: Api key, account id, origin and default timeout
        transport: HTTP engine; an ``HttpxTransport`` owned by the client
            is created when omitted
    """

    def __init__(self, config: ClientConfig, transport: Optional[HttpTransport] = None) -> None:
        self._config = config
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else HttpxTransport()

    @classmethod
    def from_api_key(
        cls,
        api_key: str,
        transport: Optional[HttpTransport] = None,
        **config_fields: Any,
    ) -> "SiftClient":
        return cls(ClientConfig(api_key=api_key, **config_fields), transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def close(self) -> None:
        """Close the transport if the client created it."""
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "SiftClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ── Internal helpers ─────────────────────────────────────────

    def _url(self, *segments: str) -> str:
        return "/".join([self._config.origin, *segments])

    def _timeout(self, override: Optional[float]) -> float:
        return override if override is not None else self._config.timeout

    def _account_url(self, version: str, *segments: str) -> str:
        """URL under ``/{version}/accounts/{account_id}``.

        Raises ``ConfigurationError`` before any request when the client has
        no account id.
        """
        account_id = self._config.account_id
        if not account_id:
            raise ConfigurationError("account id not specified")
        return self._url(version, "accounts", encode_path_segment(account_id), *segments)

    @staticmethod
    def _parse(model: Type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise ServerError(f"unexpected {model.__name__} response: {e}") from e

    @staticmethod
    def _parse_result(adapter: TypeAdapter[Any], data: Any, what: str) -> Any:
        """Decode an ``{error | data}`` reply, raising on the error branch."""
        try:
            result = adapter.validate_python(data)
        except pydantic.ValidationError as e:
            raise ServerError(f"unexpected {what} response: {e}") from e
        if isinstance(result, ErrorBody):
            logger.warning("%s request failed: status=%s %s", what, result.status, result.error_message)
            raise result.to_exception()
        return result

    # ── Events ───────────────────────────────────────────────────

    async def track(
        self,
        event: ReservedModel,
        options: Optional[EventOptions] = None,
    ) -> Optional[Scores]:
        """Send a reserved event.

        Returns the scores when ``options.return_score`` is set and the API
        produced them, ``None`` otherwise. The nested score status wins over
        the outer one when both report a failure.
        """
        options = options or EventOptions()
        version = options.version or EventsApiVersion.V205
        url = self._url(str(version), options.path or DEFAULT_EVENTS_PATH)
        body = event_to_json(event, options.api_key or self._config.api_key)
        query = EventQueryParams.from_options(options).to_query_params()
        logger.debug(
            "tracking event type=%s url=%s query=%s",
            getattr(event, "type", None), url, query.to_query(),
        )

        raw = await self._transport.post(url, query, body, self._timeout(options.timeout))
        if raw is None:
            return None
        logger.debug("events API response: %s", raw)
        return self._parse(EventResponse, raw).reconcile()

    # ── Score ────────────────────────────────────────────────────

    def _score_request(self, user_id: str, options: ScoreOptions) -> Tuple[str, QueryParams]:
        version = options.version or EventsApiVersion.V205
        url = self._url(str(version), options.user_path(user_id))
        query = ScoreQueryParams.from_options(options, self._config.api_key).to_query_params()
        return url, query

    @staticmethod
    def _check_score(response: ScoreResponse) -> ScoreResponse:
        if response.status != 0:
            raise RequestError(response.status, response.error_message)
        return response

    async def get_user_score(self, user_id: str, options: Optional[ScoreOptions] = None) -> ScoreResponse:
        """Latest scores of ``user_id`` without sending an event."""
        options = options or ScoreOptions()
        url, query = self._score_request(user_id, options)
        logger.debug("retrieving score url=%s abuse_types=%s", url, options.abuse_types)

        raw = await self._transport.get(url, query, self._timeout(options.timeout))
        logger.debug("score API response: %s", raw)
        return self._check_score(self._parse(ScoreResponse, raw))

    async def rescore_user(self, user_id: str, options: Optional[ScoreOptions] = None) -> ScoreResponse:
        """Force a fresh score computation for ``user_id``."""
        options = options or ScoreOptions()
        url, query = self._score_request(user_id, options)
        logger.debug("rescoring url=%s abuse_types=%s", url, options.abuse_types)

        raw = await self._transport.post(url, query, None, self._timeout(options.timeout))
        if raw is None:
            raise ServerError("Expected a score, but received empty server response")
        logger.debug("score API response: %s", raw)
        return self._check_score(self._parse(ScoreResponse, raw))

    # ── Labels ───────────────────────────────────────────────────

    async def label(
        self,
        user_id: str,
        properties: LabelProperties,
        options: Optional[LabelOptions] = None,
    ) -> None:
        """Label a user as fraudulent or not. Any returned score is dropped."""
        options = options or LabelOptions()
        await self.track(properties.to_event(), options.to_event_options(user_id))

    async def unlabel(
        self,
        user_id: str,
        abuse_type: Optional[AbuseType] = None,
        options: Optional[LabelOptions] = None,
    ) -> None:
        """Remove the labels of ``user_id``, for one abuse type or all."""
        options = options or LabelOptions()
        api_key = options.api_key or self._config.api_key
        version = options.version or EventsApiVersion.V205
        query = UnlabelQueryParams(api_key=api_key, abuse_type=abuse_type).to_query()
        url = f"{self._url(str(version), labels_path(user_id))}?{urlencode(query)}"
        logger.debug("removing labels user_id=%s abuse_type=%s", user_id, abuse_type)

        await self._transport.delete(url, self._timeout(options.timeout), api_key)

    # ── Verification ─────────────────────────────────────────────

    async def _verification_post(self, action: str, body: Any, version: str, timeout: float) -> Any:
        url = self._url(version, "verification", action)
        logger.debug("verification %s url=%s", action, url)
        raw = await self._transport.post(url, None, body, timeout, self._config.api_key)
        if raw is None:
            raise ServerError("Expected a verification, but received empty server response")
        logger.debug("verification API response: %s", raw)
        return raw

    @staticmethod
    def _check_verification(action: str, response: Union[SendResponse, CheckResponse]) -> Any:
        if response.status != 0:
            logger.warning(
                "verification %s error: status=%s %s", action, response.status, response.error_message,
            )
            raise RequestError(response.status, response.error_message)
        return response

    async def send_verification(self, req: SendRequest, timeout: Optional[float] = None) -> SendResponse:
        """Send a one-time passcode to the user."""
        raw = await self._verification_post(
            "send", req.to_json_dict(), str(VerificationApiVersion.V1), self._timeout(timeout),
        )
        return self._check_verification("send", self._parse(SendResponse, raw))

    async def resend_verification(self, req: ResendRequest, timeout: Optional[float] = None) -> SendResponse:
        """Send a new passcode for the pending verification."""
        raw = await self._verification_post(
            "resend", req.to_json_dict(), str(VerificationApiVersion.V1), self._timeout(timeout),
        )
        return self._check_verification("resend", self._parse(SendResponse, raw))

    async def check_verification(
        self,
        user_id: str,
        code: int,
        options: Optional[CheckOptions] = None,
    ) -> CheckResponse:
        """Check the passcode the user entered."""
        options = options or CheckOptions()
        timeout = self._timeout(options.timeout)
        version = str(options.version or VerificationApiVersion.V1)
        req = CheckRequest.from_options(user_id, code, options)

        raw = await self._verification_post("check", req.to_json_dict(), version, timeout)
        return self._check_verification("check", self._parse(CheckResponse, raw))

    # ── Webhooks ─────────────────────────────────────────────────

    def _webhooks_url(self, *segments: str) -> str:
        return self._account_url(str(WebhooksApiVersion.V3), "webhooks", *segments)

    async def create_webhook(self, req: WebhookRequest) -> Webhook:
        url = self._webhooks_url()
        logger.debug("creating webhook url=%s", url)
        raw = await self._transport.post(
            url, None, req.to_json_dict(), self._config.timeout, self._config.api_key,
        )
        if raw is None:
            raise ServerError("Expected a webhook, but received empty server response")
        return self._parse_result(WebhookResult, raw, "webhook")

    async def get_webhooks(self) -> List[Webhook]:
        url = self._webhooks_url()
        logger.debug("retrieving webhooks url=%s", url)
        raw = await self._transport.get(url, None, self._config.timeout, self._config.api_key)
        return self._parse_result(WebhookListResult, raw, "webhook list").data

    async def get_webhook(self, webhook_id: int) -> Webhook:
        url = self._webhooks_url(str(webhook_id))
        logger.debug("retrieving webhook url=%s", url)
        raw = await self._transport.get(url, None, self._config.timeout, self._config.api_key)
        return self._parse_result(WebhookResult, raw, "webhook")

    async def update_webhook(self, webhook: Webhook) -> Webhook:
        """Replace the webhook with ``webhook.id``. Timestamps are not sent."""
        url = self._webhooks_url(str(webhook.id))
        logger.debug("updating webhook url=%s", url)
        raw = await self._transport.put(
            url, webhook.to_json_dict(), self._config.timeout, self._config.api_key,
        )
        return self._parse_result(WebhookResult, raw, "webhook")

    async def delete_webhook(self, webhook_id: int) -> None:
        url = self._webhooks_url(str(webhook_id))
        logger.debug("deleting webhook url=%s", url)
        await self._transport.delete(url, self._config.timeout, self._config.api_key)

    # ── Decisions ────────────────────────────────────────────────

    async def decision_status(self, entity: Entity, timeout: Optional[float] = None) -> DecisionStatus:
        """Latest decisions applied to ``entity``, per abuse type."""
        url = self._account_url(str(DecisionsApiVersion.V3), entity.path(), "decisions")
        logger.debug("retrieving decision status url=%s", url)
        raw = await self._transport.get(url, None, self._timeout(timeout), self._config.api_key)
        return self._parse_result(DecisionStatusResult, raw, "decision status")

    async def apply_decision(
        self,
        entity: Entity,
        req: DecisionRequest,
        timeout: Optional[float] = None,
    ) -> Decision:
        url = self._account_url(str(DecisionsApiVersion.V3), entity.path(), "decisions")
        logger.debug("applying decision %s url=%s", req.decision_id, url)
        raw = await self._transport.post(
            url, None, req.to_json_dict(), self._timeout(timeout), self._config.api_key,
        )
        if raw is None:
            raise ServerError("Expected a decision, but received empty server response")
        return self._parse_result(DecisionResult, raw, "decision")

    async def get_decisions(self, options: Optional[DecisionListOptions] = None) -> DecisionPage:
        """Decisions configured for the account, one page at a time."""
        options = options or DecisionListOptions()
        url = self._account_url(str(DecisionsApiVersion.V3), "decisions")
        query = DecisionQueryParams.from_options(options)
        logger.debug("listing decisions url=%s query=%s", url, query.to_query())
        raw = await self._transport.get(url, query, self._timeout(options.timeout), self._config.api_key)
        return self._parse_result(DecisionPageResult, raw, "decision list")
