"""Tests for the error hierarchy and HTTP error mapping."""

from __future__ import annotations

import pytest

from sift_sdk.errors import (
    ConfigurationError,
    RequestError,
    ServerError,
    SiftError,
    ValidationError,
    error_from_response,
    is_error_body,
)


class TestErrorText:
    def test_request_error(self) -> None:
        err = RequestError(51, "Invalid API key")
        assert str(err) == "Sift error (51): Invalid API key"
        assert err.status == 51
        assert err.error_message == "Invalid API key"

    def test_server_error(self) -> None:
        assert str(ServerError("boom")) == "Sift server error: boom"

    def test_configuration_error_is_server_error(self) -> None:
        err = ConfigurationError("account id not specified")
        assert isinstance(err, ServerError)
        assert isinstance(err, SiftError)
        assert err.message == "account id not specified"

    def test_validation_error(self) -> None:
        err = ValidationError(422, "bad field", issues=[{"loc": "x"}])
        assert str(err) == "[422] bad field"
        assert err.issues == [{"loc": "x"}]


class TestIsErrorBody:
    def test_api_error_shape(self) -> None:
        assert is_error_body({"status": 51, "error_message": "nope"})

    def test_bool_status_rejected(self) -> None:
        assert not is_error_body({"status": True, "error_message": "nope"})

    def test_missing_message_rejected(self) -> None:
        assert not is_error_body({"status": 51})
        assert not is_error_body(["status", 51])


class TestErrorFromResponse:
    def test_error_body_becomes_request_error(self) -> None:
        err = error_from_response(400, {"status": 51, "error_message": "Invalid API key"})
        assert isinstance(err, RequestError)
        assert err.status == 51

    @pytest.mark.parametrize("http_status", [400, 401, 403, 422])
    def test_validation_statuses(self, http_status: int) -> None:
        body = {"message": "rejected", "fields": ["$user_id"]}
        err = error_from_response(http_status, body)
        assert isinstance(err, ValidationError)
        assert err.http_status == http_status
        assert err.message == "rejected"
        assert err.issues == body

    def test_validation_without_body(self) -> None:
        err = error_from_response(401, None)
        assert isinstance(err, ValidationError)
        assert err.message == "HTTP 401"
        assert err.issues is None

    def test_nested_error_message(self) -> None:
        err = error_from_response(403, {"error": {"message": "forbidden"}})
        assert err.message == "forbidden"

    def test_empty_body_is_server_error(self) -> None:
        err = error_from_response(500, None)
        assert isinstance(err, ServerError)
        assert err.message == "HTTP 500 with empty response body"

    def test_text_body_is_server_error(self) -> None:
        err = error_from_response(502, "Bad Gateway")
        assert isinstance(err, ServerError)
        assert err.message == "HTTP 502: Bad Gateway"
