"""Shared wire types: abuse types, timestamps, base models and query params."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Annotated, Any, Dict, Iterable, List, Optional
from urllib.parse import quote

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer, field_serializer

from sift_sdk.errors import RequestError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class AbuseType(str, Enum):
    """Type of abuse scored by Sift."""

    ACCOUNT_ABUSE = "account_abuse"
    ACCOUNT_TAKEOVER = "account_takeover"
    CONTENT_ABUSE = "content_abuse"
    PAYMENT_ABUSE = "payment_abuse"
    PROMO_ABUSE = "promo_abuse"

    def __str__(self) -> str:
        return self.value


def join_abuse_types(types: Optional[Iterable[AbuseType]]) -> Optional[str]:
    """Serialize abuse types as one comma separated query value.

    Query encoders used by the transports reject list values, so the API
    accepts ``payment_abuse,promo_abuse`` instead of repeated keys.
    An empty or missing list yields ``None`` and the parameter is omitted.
    """
    if not types:
        return None
    return ",".join(AbuseType(t).value for t in types)


def encode_path_segment(value: str) -> str:
    """Percent-encode a value for use as a single URL path segment."""
    return quote(str(value), safe="")


# ── Timestamps ───────────────────────────────────────────────────

def from_millis(value: Any) -> Any:
    """Convert integer milliseconds since epoch to an aware ``datetime``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return EPOCH + timedelta(milliseconds=value)
    return value


def to_millis(value: datetime) -> int:
    """Convert a ``datetime`` to integer milliseconds since epoch.

    Naive values are taken as UTC. Times before the epoch clamp to 0.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return max(0, (value - EPOCH) // timedelta(milliseconds=1))


MillisTimestamp = Annotated[
    datetime,
    BeforeValidator(from_millis),
    PlainSerializer(to_millis, return_type=int),
]


def micros(base_units: int) -> int:
    """Convert an amount in a currency's base unit to micros.

    1 cent = 10,000 micros. $1.23 USD = 123 cents = 1,230,000 micros.
    """
    return base_units * 10_000


# ── Base models ──────────────────────────────────────────────────

class SiftModel(BaseModel):
    """API payload with plain field names.

    Keys the model does not declare are kept in ``model_extra`` and written
    back unchanged on serialization.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def reserved_alias(name: str) -> str:
    return f"${name}"


class ReservedModel(SiftModel):
    """Payload whose declared fields are ``$``-prefixed on the wire.

    Python attributes keep plain names (``user_id``); the wire key is
    ``$user_id``. Custom fields go into the extras unprefixed.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=reserved_alias,
    )


# ── Query params ─────────────────────────────────────────────────

class QueryModel(BaseModel):
    """Base for query string models; unset fields are left out."""

    model_config = ConfigDict(populate_by_name=True)

    def to_query(self) -> Dict[str, str]:
        """Flatten to string pairs, dropping unset values."""
        query: Dict[str, str] = {}
        for key, value in self.model_dump(mode="json", by_alias=True, exclude_none=True).items():
            if value is None:
                continue
            if isinstance(value, bool):
                query[key] = "true" if value else "false"
            else:
                query[key] = str(value)
        return query


class QueryParams(QueryModel):
    """Query string accepted by the events, score and labels APIs."""

    api_key: Optional[str] = None
    return_score: Optional[bool] = None
    abuse_types: Optional[List[AbuseType]] = None
    return_action: Optional[bool] = None
    return_workflow_status: Optional[bool] = None

    @field_serializer("abuse_types")
    def serialize_abuse_types(self, value: Optional[List[AbuseType]]) -> Optional[str]:
        return join_abuse_types(value)


# ── Error replies ────────────────────────────────────────────────

class ErrorBody(SiftModel):
    """The API's ``{status, error_message}`` error reply."""

    status: int
    error_message: str

    def to_exception(self) -> RequestError:
        return RequestError(self.status, self.error_message)
