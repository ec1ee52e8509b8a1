"""Tests for SiftClient.track, label and unlabel."""

from __future__ import annotations

import asyncio
import logging

import pytest

from sift_sdk import AbuseType, EventOptions, LabelOptions, LabelProperties, SiftClient
from sift_sdk.errors import RequestError, ServerError
from sift_sdk.events import EventsApiVersion
from sift_sdk.reserved_events import CreateAccount, Login, Transaction
from sift_sdk.reserved_fields import LoginStatus, TransactionType


def run_async(coro):
    """Helper to run async coroutine in sync test."""
    return asyncio.run(coro)


SCORES = {
    "payment_abuse": {
        "score": 0.91,
        "reasons": [{"name": "Number of users with the same billing address", "value": "3"}],
    },
}


class TestTrackRequest:
    def test_posts_event_with_api_key_in_body(self, client, transport) -> None:
        run_async(client.track(Login(user_id="u1", login_status=LoginStatus.SUCCESS)))

        call = transport.calls[0]
        assert call.method == "POST"
        assert call.url == "https://sift.test/v205/events"
        assert call.query is None
        assert call.username is None
        assert call.timeout == 2.0
        assert call.body == {
            "$type": "$login",
            "$user_id": "u1",
            "$login_status": "$success",
            "$api_key": "test-key",
        }

    def test_custom_fields_sent_unprefixed(self, client, transport) -> None:
        run_async(client.track(CreateAccount(user_id="u1", referral_code="abc")))
        body = transport.calls[0].body
        assert body["referral_code"] == "abc"
        assert body["$type"] == "$create_account"

    def test_options_shape_query_and_overrides(self, client, transport) -> None:
        options = EventOptions(
            return_score=True,
            abuse_types=[AbuseType.PAYMENT_ABUSE, AbuseType.PROMO_ABUSE],
            api_key="other-key",
            timeout=5.0,
            version=EventsApiVersion.V205,
            path="custom/events",
        )
        event = Transaction(
            user_id="u1",
            amount=5_000_000,
            currency_code="USD",
            transaction_type=TransactionType.SALE,
        )
        run_async(client.track(event, options))

        call = transport.calls[0]
        assert call.url == "https://sift.test/v205/custom/events"
        assert call.query == {
            "return_score": "true",
            "abuse_types": "payment_abuse,promo_abuse",
        }
        assert call.timeout == 5.0
        assert call.body["$api_key"] == "other-key"
        assert call.body["$amount"] == 5_000_000

    def test_api_key_not_logged(self, client, transport, caplog) -> None:
        transport.queue({"status": 0, "error_message": "OK"})
        with caplog.at_level(logging.DEBUG, logger="sift_sdk"):
            run_async(client.track(Login(user_id="u1"), EventOptions(return_score=True)))
        assert "test-key" not in caplog.text


class TestTrackReconciliation:
    def test_no_content_is_no_score(self, client, transport) -> None:
        assert run_async(client.track(Login(user_id="u1"))) is None

    def test_scores_returned(self, client, transport) -> None:
        transport.queue({
            "status": 0,
            "error_message": "OK",
            "score_response": {"status": 0, "error_message": "OK", "scores": SCORES},
        })
        scores = run_async(client.track(Login(user_id="u1"), EventOptions(return_score=True)))
        assert scores.payment_abuse.score == pytest.approx(0.91)
        assert scores.payment_abuse.reasons[0].value == "3"
        assert scores.account_abuse is None

    def test_inner_failure_wins(self, client, transport) -> None:
        transport.queue({
            "status": 0,
            "error_message": "OK",
            "score_response": {"status": 54, "error_message": "Specified user_id has no scoreable events"},
        })
        with pytest.raises(RequestError) as exc_info:
            run_async(client.track(Login(user_id="u1"), EventOptions(return_score=True)))
        assert exc_info.value.status == 54
        assert "scoreable" in exc_info.value.error_message

    def test_inner_failure_preferred_over_outer(self, client, transport) -> None:
        transport.queue({
            "status": 1,
            "error_message": "outer",
            "score_response": {"status": 2, "error_message": "inner"},
        })
        with pytest.raises(RequestError) as exc_info:
            run_async(client.track(Login(user_id="u1")))
        assert (exc_info.value.status, exc_info.value.error_message) == (2, "inner")

    def test_outer_failure(self, client, transport) -> None:
        transport.queue({"status": 51, "error_message": "Invalid API key"})
        with pytest.raises(RequestError, match=r"Sift error \(51\): Invalid API key"):
            run_async(client.track(Login(user_id="u1")))

    def test_success_without_scores(self, client, transport) -> None:
        transport.queue({"status": 0, "error_message": "OK"})
        assert run_async(client.track(Login(user_id="u1"))) is None

    def test_malformed_body_is_server_error(self, client, transport) -> None:
        transport.queue({"unexpected": True})
        with pytest.raises(ServerError, match="EventResponse"):
            run_async(client.track(Login(user_id="u1")))

    def test_transport_error_propagates(self, client, transport) -> None:
        transport.queue(ServerError("request timed out after 2.0s"))
        with pytest.raises(ServerError, match="timed out"):
            run_async(client.track(Login(user_id="u1")))
        assert len(transport.calls) == 1


class TestLabels:
    def test_label_tracks_label_event(self, client, transport) -> None:
        props = LabelProperties(
            is_fraud=True,
            abuse_type=AbuseType.PAYMENT_ABUSE,
            description="chargeback",
            source="manual review",
            analyst="analyst@example.com",
        )
        transport.queue({"status": 0, "error_message": "OK"})
        assert run_async(client.label("user 1", props)) is None

        call = transport.calls[0]
        assert call.method == "POST"
        assert call.url == "https://sift.test/v205/users/user%201/labels"
        assert call.body == {
            "$type": "$label",
            "$is_fraud": True,
            "$abuse_type": "payment_abuse",
            "$description": "chargeback",
            "$source": "manual review",
            "$analyst": "analyst@example.com",
            "$api_key": "test-key",
        }

    def test_label_drops_scores(self, client, transport) -> None:
        transport.queue({
            "status": 0,
            "error_message": "OK",
            "score_response": {"status": 0, "error_message": "OK", "scores": SCORES},
        })
        props = LabelProperties(is_fraud=False, abuse_type=AbuseType.ACCOUNT_ABUSE)
        assert run_async(client.label("u1", props, LabelOptions(timeout=4.0))) is None
        assert transport.calls[0].timeout == 4.0

    def test_label_extra_fields(self, client, transport) -> None:
        props = LabelProperties(
            is_fraud=True,
            abuse_type=AbuseType.CONTENT_ABUSE,
            extra={"ticket": "T-1"},
        )
        run_async(client.label("u1", props))
        assert transport.calls[0].body["ticket"] == "T-1"

    def test_unlabel_deletes_with_query(self, client, transport) -> None:
        run_async(client.unlabel("user 1", AbuseType.PAYMENT_ABUSE))

        call = transport.calls[0]
        assert call.method == "DELETE"
        assert call.url == (
            "https://sift.test/v205/users/user%201/labels"
            "?api_key=test-key&abuse_type=payment_abuse"
        )
        assert call.username == "test-key"

    def test_unlabel_all_abuse_types(self, client, transport) -> None:
        run_async(client.unlabel("u1", options=LabelOptions(api_key="other")))
        assert transport.calls[0].url == "https://sift.test/v205/users/u1/labels?api_key=other"


class TestClientLifecycle:
    def test_supplied_transport_not_closed(self, client, transport) -> None:
        async def use():
            async with client:
                pass

        run_async(use())
        assert transport.closed is False

    def test_from_api_key(self, transport) -> None:
        client = SiftClient.from_api_key("k", transport, account_id="a1")
        assert client.config.api_key == "k"
        assert client.config.account_id == "a1"
        assert client.config.origin == "https://api.sift.com"
