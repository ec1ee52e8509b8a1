"""Labels API (legacy).

Labels are sent as ``$label`` events on ``users/{user_id}/labels``. New
integrations should send decisions instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sift_sdk.common import AbuseType, QueryModel, encode_path_segment
from sift_sdk.events import EventOptions, EventsApiVersion
from sift_sdk.reserved_events import Label


def labels_path(user_id: str) -> str:
    return f"users/{encode_path_segment(user_id)}/labels"


@dataclass
class LabelProperties:
    is_fraud: bool
    abuse_type: AbuseType
    description: Optional[str] = None
    source: Optional[str] = None
    analyst: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_event(self) -> Label:
        return Label(
            is_fraud=self.is_fraud,
            abuse_type=self.abuse_type,
            description=self.description,
            source=self.source,
            analyst=self.analyst,
            **self.extra,
        )


@dataclass
class LabelOptions:
    timeout: Optional[float] = None
    api_key: Optional[str] = None
    version: Optional[EventsApiVersion] = None

    def to_event_options(self, user_id: str) -> EventOptions:
        """Event options addressing the labels path of ``user_id``."""
        return EventOptions(
            timeout=self.timeout,
            api_key=self.api_key,
            version=self.version,
            path=labels_path(user_id),
        )


class UnlabelQueryParams(QueryModel):
    api_key: str
    abuse_type: Optional[AbuseType] = None
