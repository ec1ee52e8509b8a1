"""Sift Python SDK: async typed client for the Sift fraud detection APIs."""

from sift_sdk.client import SiftClient
from sift_sdk.common import AbuseType, micros
from sift_sdk.config import ClientConfig
from sift_sdk.decisions import DecisionListOptions, DecisionRequest, Entity, Source
from sift_sdk.errors import (
    ConfigurationError,
    RequestError,
    ServerError,
    SiftError,
    ValidationError,
)
from sift_sdk.events import EventOptions
from sift_sdk.labels import LabelOptions, LabelProperties
from sift_sdk.reserved_events import Event, parse_event
from sift_sdk.score import ScoreOptions
from sift_sdk.transport import AiohttpTransport, HttpTransport, HttpxTransport
from sift_sdk.verification import CheckOptions, ResendRequest, SendRequest
from sift_sdk.version import __version__
from sift_sdk.webhooks import WebhookRequest, verify_webhook_signature

__all__ = [
    "SiftClient",
    "ClientConfig",
    "HttpTransport",
    "HttpxTransport",
    "AiohttpTransport",
    "AbuseType",
    "micros",
    "Event",
    "parse_event",
    "EventOptions",
    "ScoreOptions",
    "LabelOptions",
    "LabelProperties",
    "CheckOptions",
    "SendRequest",
    "ResendRequest",
    "WebhookRequest",
    "verify_webhook_signature",
    "DecisionListOptions",
    "DecisionRequest",
    "Entity",
    "Source",
    "SiftError",
    "ServerError",
    "ConfigurationError",
    "RequestError",
    "ValidationError",
    "__version__",
]
