"""Webhooks API models and signature verification.

Webhook replies are either an error body or the requested data; the two
shapes are told apart structurally (``WebhookResult`` /
``WebhookListResult``), not by a status field.

See https://sift.com/developers/docs/curl/webhooks-api/overview
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from enum import Enum
from typing import Annotated, List, Optional, Union

from pydantic import Field, TypeAdapter

from sift_sdk.common import EPOCH, ErrorBody, MillisTimestamp, SiftModel

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Sift-Science-Signature"
SIGNATURE_PREFIX = "sha1="


class WebhooksApiVersion(str, Enum):
    V3 = "v3"

    def __str__(self) -> str:
        return self.value


class PayloadType(str, Enum):
    ORDER_V1_0 = "ORDER_V1_0"


class WebhookStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"


class EnabledEvent(str, Enum):
    CREATE_ORDER = "$create_order"
    UPDATE_ORDER = "$update_order"
    ORDER_STATUS = "$order_status"
    TRANSACTION = "$transaction"
    CHARGEBACK = "$chargeback"


class WebhookRequest(SiftModel):
    payload_type: PayloadType
    status: WebhookStatus
    url: str
    enabled_events: List[EnabledEvent]
    name: Optional[str] = None
    description: Optional[str] = None


class Webhook(SiftModel):
    """A configured webhook.

    ``id``, ``created`` and ``last_updated`` are assigned by the server;
    the timestamps are never sent back.
    """

    id: int
    payload_type: PayloadType
    status: WebhookStatus
    url: str
    enabled_events: List[EnabledEvent]
    name: Optional[str] = None
    description: Optional[str] = None
    created: MillisTimestamp = Field(default=EPOCH, exclude=True)
    last_updated: MillisTimestamp = Field(default=EPOCH, exclude=True)

    def to_request(self) -> WebhookRequest:
        return WebhookRequest(
            payload_type=self.payload_type,
            status=self.status,
            url=self.url,
            enabled_events=list(self.enabled_events),
            name=self.name,
            description=self.description,
        )


class WebhookList(SiftModel):
    data: List[Webhook]


WebhookResult = TypeAdapter(
    Annotated[Union[Webhook, ErrorBody], Field(union_mode="left_to_right")]
)
WebhookListResult = TypeAdapter(
    Annotated[Union[WebhookList, ErrorBody], Field(union_mode="left_to_right")]
)


# ── Signatures ───────────────────────────────────────────────────

def compute_webhook_signature(body: Union[bytes, str], secret: str) -> str:
    """Hex HMAC-SHA1 of the raw request body keyed with the webhook secret."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha1).hexdigest()


def verify_webhook_signature(body: Union[bytes, str], header: Optional[str], secret: str) -> bool:
    """Check the ``X-Sift-Science-Signature`` header of a webhook delivery.

    ``body`` must be the raw bytes as received; re-serialized JSON will not
    match. The comparison runs in constant time.
    """
    if not header or not header.startswith(SIGNATURE_PREFIX):
        logger.warning("webhook signature header missing or malformed")
        return False
    expected = compute_webhook_signature(body, secret)
    ok = hmac.compare_digest(expected, header[len(SIGNATURE_PREFIX):].strip().lower())
    if not ok:
        logger.warning("webhook signature mismatch")
    return ok
