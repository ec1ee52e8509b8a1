"""Verification API: send, resend and check one-time passcodes.

See https://sift.com/developers/docs/curl/verification-api/overview
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from sift_sdk.common import MillisTimestamp, ReservedModel, SiftModel
from sift_sdk.complex_fields import App, Browser
from sift_sdk.reserved_fields import VerificationReason, VerificationType, VerifiedEvent


class VerificationApiVersion(str, Enum):
    V1 = "v1"

    def __str__(self) -> str:
        return self.value


class SendRequestEvent(ReservedModel):
    """The user action being verified."""

    session_id: str
    verified_event: VerifiedEvent
    ip: Optional[str] = None
    reason: Optional[VerificationReason] = None
    browser: Optional[Browser] = None
    app: Optional[App] = None


class SendRequest(ReservedModel):
    user_id: str
    send_to: str
    verification_type: VerificationType
    event: SendRequestEvent
    verified_entity_id: Optional[str] = None
    brand_name: Optional[str] = None
    site_country: Optional[str] = None


class ResendRequest(ReservedModel):
    user_id: str
    verified_event: Optional[VerifiedEvent] = None
    verified_entity_id: Optional[str] = None


class SendResponse(SiftModel):
    status: int
    error_message: str = ""
    sent_at: Optional[MillisTimestamp] = None
    brand_name: Optional[str] = None
    site_country: Optional[str] = None
    content_language: Optional[str] = None
    segment_id: Optional[str] = None
    segment_name: Optional[str] = None


@dataclass
class CheckOptions:
    verified_event: Optional[VerifiedEvent] = None
    verified_entity_id: Optional[str] = None
    timeout: Optional[float] = None
    version: Optional[VerificationApiVersion] = None


class CheckRequest(ReservedModel):
    user_id: str
    code: int
    verified_event: Optional[VerifiedEvent] = None
    verified_entity_id: Optional[str] = None

    @classmethod
    def from_options(cls, user_id: str, code: int, options: CheckOptions) -> "CheckRequest":
        return cls(
            user_id=user_id,
            code=code,
            verified_event=options.verified_event,
            verified_entity_id=options.verified_entity_id,
        )


class CheckResponse(SiftModel):
    status: int
    error_message: str = ""
    # Absent on failed checks.
    checked_at: Optional[MillisTimestamp] = None

