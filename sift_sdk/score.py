"""Score API: options, query params and response models.

A score measures how likely a user is to commit a given type of abuse.
Scores come back from ``get_user_score``, from ``rescore_user``, or nested
in a track response when ``return_score`` is set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import field_serializer

from sift_sdk.common import (
    AbuseType,
    MillisTimestamp,
    QueryModel,
    QueryParams,
    SiftModel,
    encode_path_segment,
    join_abuse_types,
)

DEFAULT_PATH_PREFIX = "users"
DEFAULT_PATH_SUFFIX = "score"


@dataclass
class ScoreOptions:
    """Per-call overrides for ``get_user_score`` and ``rescore_user``.

    ``path_prefix`` and ``path_suffix`` default to ``users`` and ``score``
    and may be overridden separately.
    """

    abuse_types: Optional[List[AbuseType]] = None
    api_key: Optional[str] = None
    timeout: Optional[float] = None
    version: Optional[str] = None
    path_prefix: Optional[str] = None
    path_suffix: Optional[str] = None

    def user_path(self, user_id: str) -> str:
        prefix = self.path_prefix or DEFAULT_PATH_PREFIX
        suffix = self.path_suffix or DEFAULT_PATH_SUFFIX
        return f"{prefix}/{encode_path_segment(user_id)}/{suffix}"


class ScoreQueryParams(QueryModel):
    api_key: str
    abuse_types: Optional[List[AbuseType]] = None

    @field_serializer("abuse_types")
    def serialize_abuse_types(self, value: Optional[List[AbuseType]]) -> Optional[str]:
        return join_abuse_types(value)

    @classmethod
    def from_options(cls, options: ScoreOptions, default_api_key: str = "") -> "ScoreQueryParams":
        return cls(
            api_key=options.api_key or default_api_key,
            abuse_types=options.abuse_types,
        )

    def to_query_params(self) -> QueryParams:
        return QueryParams(api_key=self.api_key, abuse_types=self.abuse_types)


class AbuseScoreReason(SiftModel):
    name: str
    value: str
    details: Optional[Any] = None


class AbuseScore(SiftModel):
    score: float
    reasons: List[AbuseScoreReason] = []


class Scores(SiftModel):
    payment_abuse: Optional[AbuseScore] = None
    promotion_abuse: Optional[AbuseScore] = None
    account_abuse: Optional[AbuseScore] = None
    account_takeover: Optional[AbuseScore] = None
    content_abuse: Optional[AbuseScore] = None


class LatestLabel(SiftModel):
    is_bad: bool
    time: MillisTimestamp
    description: Optional[str] = None


class LatestLabels(SiftModel):
    """Most recent label per abuse type."""

    payment_abuse: Optional[LatestLabel] = None
    promotion_abuse: Optional[LatestLabel] = None
    account_abuse: Optional[LatestLabel] = None
    account_takeover: Optional[LatestLabel] = None
    content_abuse: Optional[LatestLabel] = None


class ScoreResponse(SiftModel):
    status: int
    error_message: str = ""
    scores: Optional[Scores] = None
    entity_id: Optional[str] = None
    entity_type: Optional[str] = None
    latest_labels: Optional[LatestLabels] = None
    latest_decisions: Optional[Any] = None
