"""Events API: options, query params and the tracking response.

The event payload classes live in ``sift_sdk.reserved_events``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import field_serializer

from sift_sdk.common import AbuseType, QueryModel, QueryParams, SiftModel, join_abuse_types
from sift_sdk.errors import RequestError
from sift_sdk.score import ScoreResponse, Scores


class EventsApiVersion(str, Enum):
    V205 = "v205"

    def __str__(self) -> str:
        return self.value


DEFAULT_EVENTS_PATH = "events"


@dataclass
class EventOptions:
    """Per-call overrides for ``SiftClient.track``.

    Unset fields fall back to the client configuration or to the defaults
    (``v205``, path ``events``).
    """

    return_score: Optional[bool] = None
    abuse_types: Optional[List[AbuseType]] = None
    return_action: Optional[bool] = None
    return_workflow_status: Optional[bool] = None
    timeout: Optional[float] = None
    api_key: Optional[str] = None
    version: Optional[EventsApiVersion] = None
    path: Optional[str] = None


class EventQueryParams(QueryModel):
    """Query string of a track call. The api key travels in the body."""

    return_score: Optional[bool] = None
    abuse_types: Optional[List[AbuseType]] = None
    return_action: Optional[bool] = None
    return_workflow_status: Optional[bool] = None

    @field_serializer("abuse_types")
    def serialize_abuse_types(self, value: Optional[List[AbuseType]]) -> Optional[str]:
        return join_abuse_types(value)

    @classmethod
    def from_options(cls, options: EventOptions) -> "EventQueryParams":
        return cls(
            return_score=options.return_score,
            abuse_types=options.abuse_types,
            return_action=options.return_action,
            return_workflow_status=options.return_workflow_status,
        )

    def to_query_params(self) -> QueryParams:
        return QueryParams(
            return_score=self.return_score,
            abuse_types=self.abuse_types,
            return_action=self.return_action,
            return_workflow_status=self.return_workflow_status,
        )


class EventResponse(SiftModel):
    """Body returned by the Events API.

    ``score_response`` is only present when a score was requested and has
    its own ``status`` / ``error_message`` pair.
    """

    status: int
    error_message: str = ""
    score_response: Optional[ScoreResponse] = None

    def reconcile(self) -> Optional[Scores]:
        """Resolve the outer and nested statuses into scores or an error.

        Populated scores win. Otherwise a non-zero status raises
        ``RequestError``, the nested one first since it is more specific.
        """
        inner = self.score_response
        if inner is not None and inner.scores is not None:
            return inner.scores
        if inner is not None and inner.status != 0:
            raise RequestError(inner.status, inner.error_message)
        if self.status != 0:
            raise RequestError(self.status, self.error_message)
        return None
