"""Tests for the error hierarchy and classification."""

import pytest

from nylas_client.errors import (
    ApiError,
    ContractViolation,
    ErrorClass,
    ErrorContext,
    NylasError,
    TransportError,
    ValidationError,
    classify_http_error,
    extract_error_message,
    is_retryable,
)


class TestErrorContext:
    """Tests for ErrorContext."""

    def test_empty(self) -> None:
        """Test an empty context renders as nothing."""
        assert str(ErrorContext()) == ""

    def test_full(self) -> None:
        """Test all parts are rendered."""
        ctx = ErrorContext(field_path="[1].id", source="validation", hint="pass a string")
        assert str(ctx) == "[validation] at '[1].id' (hint: pass a string)"


class TestErrorHierarchy:
    """Tests for error classes."""

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            TransportError("down"),
            ApiError("nope", status_code=400),
            ContractViolation("bug"),
        ],
    )
    def test_base_class(self, error: NylasError) -> None:
        """Test every error derives from NylasError."""
        assert isinstance(error, NylasError)

    def test_validation_error_fields(self) -> None:
        """Test field, expected and actual are kept."""
        error = ValidationError("must be a string", field="[0].id", expected="str", actual=5)

        assert error.field == "[0].id"
        assert error.context.details == {"expected": "str", "actual": 5}
        assert "at '[0].id'" in str(error)

    def test_transport_error(self) -> None:
        """Test transport details are recorded."""
        cause = OSError("refused")
        error = TransportError("down", url="https://x", timed_out=True, cause=cause)

        assert error.timed_out is True
        assert error.__cause__ is cause
        assert error.context.details["url"] == "https://x"


class TestApiError:
    """Tests for ApiError construction."""

    def test_from_response(self) -> None:
        """Test classification from status and body."""
        error = ApiError.from_response(
            404,
            {"message": "Couldn't find event", "type": "invalid_request_error"},
        )

        assert error.error_class == ErrorClass.NOT_FOUND
        assert error.retryable is False
        assert error.is_classified
        assert error.message == "Couldn't find event"
        assert error.raw_error["type"] == "invalid_request_error"

    def test_request_id_from_body(self) -> None:
        """Test a request id in the body wins over headers."""
        error = ApiError.from_response(
            500, {"request_id": "body-id"}, {"x-request-id": "header-id"}
        )
        assert error.request_id == "body-id"
        assert error.retryable is True

    def test_no_body(self) -> None:
        """Test a missing body falls back to the status line."""
        error = ApiError.from_response(503)
        assert error.message == "HTTP 503"
        assert error.error_class == ErrorClass.OVERLOADED

    def test_unclassified(self) -> None:
        """Test unclassified errors carry the raw text."""
        error = ApiError.unclassified(418, "I'm a teapot")

        assert error.error_class is None
        assert not error.is_classified
        assert error.raw_error == "I'm a teapot"
        assert error.status_code == 418


class TestClassification:
    """Tests for status and body classification."""

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (400, ErrorClass.INVALID_REQUEST),
            (401, ErrorClass.AUTHENTICATION),
            (402, ErrorClass.PAYMENT_REQUIRED),
            (403, ErrorClass.PERMISSION_DENIED),
            (404, ErrorClass.NOT_FOUND),
            (409, ErrorClass.CONFLICT),
            (429, ErrorClass.RATE_LIMITED),
            (500, ErrorClass.SERVER_ERROR),
            (503, ErrorClass.OVERLOADED),
            (504, ErrorClass.TIMEOUT),
            (418, ErrorClass.INVALID_REQUEST),
            (599, ErrorClass.SERVER_ERROR),
            (302, ErrorClass.OTHER),
        ],
    )
    def test_status(self, status: int, expected: ErrorClass) -> None:
        """Test status code mapping."""
        assert classify_http_error(status) == expected

    def test_body_type_for_unmapped_status(self) -> None:
        """Test the error type is consulted for statuses without a mapping."""
        assert classify_http_error(420, {"type": "rate_limit_error"}) == ErrorClass.RATE_LIMITED
        assert classify_http_error(404, {"type": "rate_limit_error"}) == ErrorClass.NOT_FOUND

    def test_retryable(self) -> None:
        """Test retryable classes."""
        assert is_retryable(ErrorClass.RATE_LIMITED)
        assert is_retryable(ErrorClass.SERVER_ERROR)
        assert not is_retryable(ErrorClass.NOT_FOUND)
        assert not is_retryable(ErrorClass.AUTHENTICATION)

    @pytest.mark.parametrize(
        ("body", "expected"),
        [
            ({"message": "top"}, "top"),
            ({"error": {"message": "nested"}}, "nested"),
            ({"error": "flat"}, "flat"),
            ({"detail": "detail"}, "detail"),
            ({"detail": ["first", "second"]}, "first"),
            ({"other": 1}, None),
            (None, None),
        ],
    )
    def test_extract_message(self, body: dict | None, expected: str | None) -> None:
        """Test error message extraction."""
        assert extract_error_message(body) == expected
