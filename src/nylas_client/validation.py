"""
Parameter validation.

Rule sets are pydantic models (see ``nylas_client.schemas``). Validation runs
once per logical call, before any Task is built, and reports the first
failing field as a ValidationError.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from nylas_client.errors import ErrorContext, ValidationError

M = TypeVar("M", bound=BaseModel)


def validate(schema: type[M], params: Any) -> M:
    """Validate one parameter object against a schema.

    Args:
        schema: Pydantic model describing the allowed keys
        params: Candidate object (a mapping)

    Returns:
        Validated model instance

    Raises:
        ValidationError: If params do not satisfy the schema
    """
    if not isinstance(params, Mapping):
        raise ValidationError(
            "parameters must be a mapping",
            expected="mapping",
            actual=type(params).__name__,
        )
    try:
        return schema.model_validate(dict(params))
    except pydantic.ValidationError as e:
        raise to_validation_error(e) from e


def validate_all(schema: type[M], items: Sequence[Any]) -> list[M]:
    """Validate every item, failing on the first invalid one.

    Field paths are prefixed with the item index (e.g. ``[2].id``).
    """
    validated: list[M] = []
    for index, item in enumerate(items):
        try:
            validated.append(validate(schema, item))
        except ValidationError as e:
            path = f"[{index}].{e.field}" if e.field else f"[{index}]"
            raise ValidationError(
                e.message, field=path, expected=e.expected, actual=e.actual
            ) from e
    return validated


def require_token(token: str | None) -> str:
    """Ensure an access token is configured.

    Raises:
        ValidationError: If the token is missing or empty
    """
    if not isinstance(token, str) or not token.strip():
        raise ValidationError(
            "access token is required",
            ErrorContext(source="validation", hint="set access_token on the client options"),
            field="access_token",
        )
    return token


def require_string(value: Any, name: str) -> str:
    """Ensure value is a non-empty string."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{name} must be a non-empty string",
            field=name,
            expected="non-empty string",
            actual=value if isinstance(value, (int, float, bool)) else None,
        )
    return value


def to_validation_error(error: pydantic.ValidationError) -> ValidationError:
    """Convert the first pydantic error into a ValidationError."""
    first = error.errors()[0]
    field_path = _format_loc(first.get("loc", ()))
    return ValidationError(
        first.get("msg", "invalid value"),
        field=field_path or None,
        expected=first.get("type"),
        actual=_safe_input(first.get("input")),
    )


def _format_loc(loc: tuple[Any, ...]) -> str:
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        elif parts:
            parts.append(f".{item}")
        else:
            parts.append(str(item))
    return "".join(parts)


def _safe_input(value: Any) -> Any:
    # Mappings may carry credentials, only echo scalars
    if isinstance(value, (int, float, bool)):
        return value
    if isinstance(value, str) and len(value) <= 64:
        return value
    return None
