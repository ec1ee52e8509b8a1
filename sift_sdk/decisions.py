"""Decisions API: apply decisions to entities and read them back.

See https://sift.com/developers/docs/curl/decisions-api/overview
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, List, Optional, Union

from pydantic import Field, TypeAdapter, field_serializer

from sift_sdk.common import (
    AbuseType,
    ErrorBody,
    MillisTimestamp,
    QueryModel,
    SiftModel,
    encode_path_segment,
    join_abuse_types,
)


class DecisionsApiVersion(str, Enum):
    V3 = "v3"

    def __str__(self) -> str:
        return self.value


class EntityType(str, Enum):
    USER = "user"
    ORDER = "order"
    SESSION = "session"
    CONTENT = "content"


_CHILD_SEGMENTS = {
    EntityType.ORDER: "orders",
    EntityType.SESSION: "sessions",
    EntityType.CONTENT: "content",
}


@dataclass(frozen=True)
class Entity:
    """The user, order, session or content item a decision applies to.

    Build with ``Entity.user("u1")``, ``Entity.order("u1", "o1")``, ...
    """

    entity_type: EntityType
    user_id: str
    child_id: Optional[str] = None

    @classmethod
    def user(cls, user_id: str) -> "Entity":
        return cls(EntityType.USER, user_id)

    @classmethod
    def order(cls, user_id: str, order_id: str) -> "Entity":
        return cls(EntityType.ORDER, user_id, order_id)

    @classmethod
    def session(cls, user_id: str, session_id: str) -> "Entity":
        return cls(EntityType.SESSION, user_id, session_id)

    @classmethod
    def content(cls, user_id: str, content_id: str) -> "Entity":
        return cls(EntityType.CONTENT, user_id, content_id)

    def path(self) -> str:
        """URL path of the entity, e.g. ``users/u1/orders/o1``."""
        base = f"users/{encode_path_segment(self.user_id)}"
        if self.entity_type is EntityType.USER:
            return base
        if self.child_id is None:
            raise ValueError(f"{self.entity_type.value} entity needs an id")
        return f"{base}/{_CHILD_SEGMENTS[self.entity_type]}/{encode_path_segment(self.child_id)}"


class Source(str, Enum):
    MANUAL_REVIEW = "MANUAL_REVIEW"
    AUTOMATED_RULE = "AUTOMATED_RULE"
    CHARGEBACK = "CHARGEBACK"


class DecisionRequest(SiftModel):
    """Body of ``apply_decision``.

    ``time`` backfills when the decision was made; the server uses the
    current time when it is omitted.
    """

    decision_id: str
    source: Source
    analyst: Optional[str] = None
    time: Optional[MillisTimestamp] = None
    description: Optional[str] = None


class DecisionIdentifier(SiftModel):
    id: str


class EntityIdentifier(SiftModel):
    entity_type: EntityType = Field(alias="type")
    id: str


class Decision(SiftModel):
    """Reply of ``apply_decision``."""

    entity: EntityIdentifier
    decision: DecisionIdentifier
    time: MillisTimestamp


class LatestDecision(SiftModel):
    decision: DecisionIdentifier
    webhook_succeeded: Optional[bool] = None
    time: MillisTimestamp


class Decisions(SiftModel):
    payment_abuse: Optional[LatestDecision] = None
    promo_abuse: Optional[LatestDecision] = None
    content_abuse: Optional[LatestDecision] = None
    account_abuse: Optional[LatestDecision] = None
    account_takeover: Optional[LatestDecision] = None
    legacy: Optional[LatestDecision] = None


class DecisionStatus(SiftModel):
    """Latest decision per abuse type for one entity."""

    decisions: Decisions


class DecisionData(SiftModel):
    """A decision configured in the Sift console."""

    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    entity_type: EntityType
    abuse_type: AbuseType
    category: str
    webhook_url: Optional[str] = None
    created_at: MillisTimestamp
    created_by: Optional[str] = None
    updated_at: MillisTimestamp
    updated_by: Optional[str] = None


class DecisionPage(SiftModel):
    decisions: List[DecisionData] = Field(alias="data")
    has_more: bool
    schema_type: str = Field(alias="schema")
    total_results: int


@dataclass
class DecisionListOptions:
    """Filters and paging for ``get_decisions``."""

    entity_type: Optional[EntityType] = None
    abuse_types: Optional[List[AbuseType]] = None
    offset: Optional[int] = None
    limit: Optional[int] = None
    timeout: Optional[float] = None


class DecisionQueryParams(QueryModel):
    entity_type: Optional[EntityType] = None
    abuse_types: Optional[List[AbuseType]] = None
    offset: Optional[int] = Field(default=None, alias="from")
    limit: Optional[int] = None

    @field_serializer("abuse_types")
    def serialize_abuse_types(self, value: Optional[List[AbuseType]]) -> Optional[str]:
        return join_abuse_types(value)

    @classmethod
    def from_options(cls, options: DecisionListOptions) -> "DecisionQueryParams":
        return cls(
            entity_type=options.entity_type,
            abuse_types=options.abuse_types,
            offset=options.offset,
            limit=options.limit,
        )


DecisionResult = TypeAdapter(
    Annotated[Union[Decision, ErrorBody], Field(union_mode="left_to_right")]
)
DecisionStatusResult = TypeAdapter(
    Annotated[Union[DecisionStatus, ErrorBody], Field(union_mode="left_to_right")]
)
DecisionPageResult = TypeAdapter(
    Annotated[Union[DecisionPage, ErrorBody], Field(union_mode="left_to_right")]
)
