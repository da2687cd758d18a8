"""
Batch construction.

Turns one logical call, with a single parameter object or a list of
them, into an ordered list of identifiers and an equally long list of
Tasks. All items are validated before the first Task is built.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

from nylas_client.errors import ContractViolation, ValidationError
from nylas_client.validation import validate_all

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from nylas_client.batch.task import Task

K = TypeVar("K", bound=Hashable)
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Batch(Generic[K]):
    """Identifiers and Tasks of one logical call, index-aligned."""

    identifiers: tuple[K, ...]
    tasks: tuple[Task, ...]

    def __post_init__(self) -> None:
        if len(self.identifiers) != len(self.tasks):
            raise ContractViolation(
                f"batch has {len(self.identifiers)} identifiers but {len(self.tasks)} tasks"
            )

    def __len__(self) -> int:
        return len(self.tasks)


def normalize_items(value: Any) -> list[Any]:
    """Normalize a single item or a sequence of items into a list.

    Mappings and scalars become a one-element list; lists and tuples are
    copied as they are.

    Raises:
        ValidationError: If value is None
    """
    if value is None:
        raise ValidationError("no parameters given", expected="item or list of items")
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_identifiers(value: Any) -> list[Any]:
    """Normalize one identifier or an iterable of them into a list.

    Strings, bytes, mappings and non-iterables count as one identifier.

    Raises:
        ValidationError: If value is None
    """
    if value is None:
        raise ValidationError(
            "no identifiers given", expected="identifier or iterable of identifiers"
        )
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def ensure_unique(identifiers: Iterable[Any]) -> None:
    """Reject repeated identifiers, which could not be told apart in the result.

    Raises:
        ValidationError: On an unhashable or the first repeated identifier
    """
    seen: set[Any] = set()
    for index, identifier in enumerate(identifiers):
        try:
            hash(identifier)
        except TypeError as e:
            raise ValidationError(
                f"identifier must be hashable, got {type(identifier).__name__}",
                field=f"[{index}]",
                expected="hashable identifier",
            ) from e
        if identifier in seen:
            raise ValidationError(
                f"duplicate identifier {identifier!r}",
                field=f"[{index}]",
            )
        seen.add(identifier)


def build_batch(
    items: Mapping[str, Any] | Sequence[Mapping[str, Any]],
    *,
    schema: type[M],
    identify: Callable[[M], K],
    make_task: Callable[[M], Task],
) -> Batch[K]:
    """Validate items and build one Task per item.

    Args:
        items: One parameter mapping or a list of them
        schema: Pydantic model every item must satisfy
        identify: Extracts the identifier of a validated item
        make_task: Builds the Task of a validated item

    Returns:
        Batch with identifiers and Tasks in input order

    Raises:
        ValidationError: If any item is invalid or identifiers repeat
    """
    validated = validate_all(schema, normalize_items(items))

    identifiers = [identify(model) for model in validated]
    ensure_unique(identifiers)

    return Batch(
        identifiers=tuple(identifiers),
        tasks=tuple(make_task(model) for model in validated),
    )
