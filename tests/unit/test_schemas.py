"""Tests for parameter validation rule sets."""

import pytest

from nylas_client.errors import ValidationError
from nylas_client.schemas import (
    AddEventParams,
    DateWhen,
    DeltaParams,
    EventListParams,
    LongPollDeltaParams,
    RsvpParams,
    TimespanWhen,
    UpdateEventParams,
)
from nylas_client.validation import require_string, require_token, validate

PARTICIPANT = {
    "email": "ada@example.com",
    "status": "noreply",
    "name": "Ada",
    "comment": "",
}


class TestValidate:
    """Tests for validate and the require helpers."""

    def test_not_a_mapping(self) -> None:
        """Test non-mapping parameters are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate(EventListParams, ["limit", 5])
        assert exc_info.value.expected == "mapping"

    def test_require_token(self) -> None:
        """Test a missing token names the field and carries a hint."""
        with pytest.raises(ValidationError) as exc_info:
            require_token(None)

        assert exc_info.value.field == "access_token"
        assert exc_info.value.context.hint is not None
        assert "hint:" in str(exc_info.value)
        assert require_token("t") == "t"

    @pytest.mark.parametrize("value", ["", "   ", None, 5])
    def test_require_string(self, value: object) -> None:
        """Test empty and non-string values are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            require_string(value, "id")
        assert exc_info.value.field == "id"


class TestEventSchemas:
    """Tests for event parameter rule sets."""

    def test_list_params(self) -> None:
        """Test list filters accept their declared types."""
        params = validate(EventListParams, {"limit": 5, "show_cancelled": True})
        assert params.limit == 5
        assert params.show_cancelled is True

    @pytest.mark.parametrize(
        ("values", "field"),
        [
            ({"limit": "5"}, "limit"),
            ({"show_cancelled": "yes"}, "show_cancelled"),
            ({"starts_after": 1}, "starts_after"),
        ],
    )
    def test_list_params_strict(self, values: dict, field: str) -> None:
        """Test strings are not coerced and unknown keys are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate(EventListParams, values)
        assert exc_info.value.field is not None
        assert exc_info.value.field.startswith(field)

    def test_add_event_when_shapes(self) -> None:
        """Test each accepted shape of ``when``."""
        timespan = validate(
            AddEventParams,
            {"calendar_id": "cal", "when": {"start_time": 1, "end_time": 2}},
        )
        datespan = validate(
            AddEventParams,
            {"calendar_id": "cal", "when": {"date": "2024-03-01"}},
        )

        assert isinstance(timespan.when, TimespanWhen)
        assert isinstance(datespan.when, DateWhen)

    def test_add_event_requires_calendar(self) -> None:
        """Test required keys must be present."""
        with pytest.raises(ValidationError) as exc_info:
            validate(AddEventParams, {"when": {"time": 1}})
        assert exc_info.value.field == "calendar_id"

    def test_bad_date(self) -> None:
        """Test dates must be ISO formatted."""
        with pytest.raises(ValidationError):
            validate(AddEventParams, {"calendar_id": "cal", "when": {"date": "tomorrow"}})

    def test_participants(self) -> None:
        """Test participant entries are checked."""
        event = validate(UpdateEventParams, {"id": "e1", "participants": [PARTICIPANT]})
        assert event.participants[0].email == "ada@example.com"

        with pytest.raises(ValidationError) as exc_info:
            validate(
                UpdateEventParams,
                {"id": "e1", "participants": [{**PARTICIPANT, "email": "not-an-email"}]},
            )
        assert exc_info.value.field is not None
        assert exc_info.value.field.startswith("participants")

    @pytest.mark.parametrize("status", ["yes", "no", "maybe"])
    def test_rsvp_status(self, status: str) -> None:
        """Test the accepted RSVP statuses."""
        reply = validate(RsvpParams, {"status": status, "event_id": "e", "account_id": "a"})
        assert reply.status == status

    def test_rsvp_bad_status(self) -> None:
        """Test other RSVP statuses are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validate(RsvpParams, {"status": "perhaps", "event_id": "e", "account_id": "a"})
        assert exc_info.value.field == "status"


class TestDeltaSchemas:
    """Tests for delta parameter rule sets."""

    def test_types_single_or_list(self) -> None:
        """Test include/exclude types accept one value or a list."""
        single = validate(DeltaParams, {"cursor": "c", "include_types": "event"})
        many = validate(DeltaParams, {"cursor": "c", "exclude_types": ["event", "message"]})

        assert single.include_types == "event"
        assert many.exclude_types == ["event", "message"]

    def test_unknown_type(self) -> None:
        """Test unknown object types are rejected."""
        with pytest.raises(ValidationError):
            validate(DeltaParams, {"cursor": "c", "include_types": "calendar"})

    def test_long_poll_timeout(self) -> None:
        """Test long polling needs a positive timeout."""
        assert validate(LongPollDeltaParams, {"cursor": "c", "timeout": 30}).timeout == 30
        with pytest.raises(ValidationError) as exc_info:
            validate(LongPollDeltaParams, {"cursor": "c"})
        assert exc_info.value.field == "timeout"
