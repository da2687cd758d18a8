"""Tests for Task construction."""

import dataclasses

import pytest

from nylas_client.batch import HttpMethod, ResponseFormat, Task
from nylas_client.errors import ContractViolation

AUTH = {"Authorization": "Bearer t"}


class TestTask:
    """Tests for Task."""

    def test_path_substitution(self) -> None:
        """Test the path parameter fills the slot."""
        task = Task(HttpMethod.GET, "/events/%s", "abc", headers=AUTH)
        assert task.path == "/events/abc"
        assert task.url("https://api.nylas.com/") == "https://api.nylas.com/events/abc"

    def test_path_param_is_encoded(self) -> None:
        """Test reserved characters cannot escape the path segment."""
        task = Task(HttpMethod.DELETE, "/events/%s", "a/b c?", headers=AUTH)
        assert task.path == "/events/a%2Fb%20c%3F"

    def test_no_slot(self) -> None:
        """Test templates without a slot need no path parameter."""
        task = Task(HttpMethod.GET, "/events", headers=AUTH)
        assert task.path == "/events"
        assert task.response_format == ResponseFormat.JSON

    def test_two_slots_rejected(self) -> None:
        """Test templates with more than one slot are rejected."""
        with pytest.raises(ContractViolation):
            Task(HttpMethod.GET, "/calendars/%s/events/%s", "a", headers=AUTH)

    def test_slot_without_param(self) -> None:
        """Test a slot requires a path parameter."""
        with pytest.raises(ContractViolation):
            Task(HttpMethod.GET, "/events/%s", headers=AUTH)

    def test_param_without_slot(self) -> None:
        """Test a path parameter requires a slot."""
        with pytest.raises(ContractViolation):
            Task(HttpMethod.GET, "/events", "abc", headers=AUTH)

    def test_authorization_required(self) -> None:
        """Test headers must carry Authorization."""
        with pytest.raises(ContractViolation):
            Task(HttpMethod.GET, "/events", headers={"Accept": "application/json"})

    def test_authorization_case_insensitive(self) -> None:
        """Test the Authorization header name is matched case-insensitively."""
        task = Task(HttpMethod.GET, "/events", headers={"authorization": "Bearer t"})
        assert task.headers["authorization"] == "Bearer t"

    def test_method_from_string(self) -> None:
        """Test string methods are coerced to HttpMethod."""
        task = Task("PUT", "/events/%s", "a", headers=AUTH)  # type: ignore[arg-type]
        assert task.method is HttpMethod.PUT

    def test_query_params(self) -> None:
        """Test query values are rendered as wire strings."""
        task = Task(
            HttpMethod.GET,
            "/delta",
            query={"cursor": "c1", "notify": False, "include_types": ["event", "message"], "n": 5},
            headers=AUTH,
        )
        assert task.query_params() == {
            "cursor": "c1",
            "notify": "false",
            "include_types": "event,message",
            "n": "5",
        }

    def test_immutable(self) -> None:
        """Test a Task cannot change after construction."""
        headers = dict(AUTH)
        query = {"limit": 1}
        task = Task(HttpMethod.GET, "/events", query=query, headers=headers, body={"a": 1})

        headers["Authorization"] = "Bearer other"
        query["limit"] = 2
        assert task.headers["Authorization"] == "Bearer t"
        assert task.query["limit"] == 1

        with pytest.raises(TypeError):
            task.headers["X-Extra"] = "1"  # type: ignore[index]
        with pytest.raises(TypeError):
            task.body["a"] = 2  # type: ignore[index]
        with pytest.raises(dataclasses.FrozenInstanceError):
            task.path_param = "other"  # type: ignore[misc]
