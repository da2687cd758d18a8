"""
Result correlation.

Zips the identifiers of a batch with the Outcomes the pool produced, so
each result can be traced back to the input that produced it.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping, Sequence
from typing import Generic, TypeVar

from nylas_client.batch.outcome import Cancelled, Failure, Outcome, Success
from nylas_client.errors import ContractViolation

K = TypeVar("K", bound=Hashable)


class CorrelatedResult(Mapping[K, Outcome], Generic[K]):
    """Read-only mapping from identifier to Outcome.

    Iteration follows the input order of the identifiers.

    Attributes:
        total_time_ms: Wall time of the batch in milliseconds
    """

    def __init__(self, entries: dict[K, Outcome], total_time_ms: float = 0.0) -> None:
        self._entries = entries
        self.total_time_ms = total_time_ms

    def __getitem__(self, key: K) -> Outcome:
        return self._entries[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"CorrelatedResult({self._entries!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CorrelatedResult):
            return self._entries == other._entries
        return super().__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    @property
    def successful_count(self) -> int:
        """Get count of successful outcomes."""
        return sum(1 for o in self._entries.values() if o.is_success)

    @property
    def failed_count(self) -> int:
        """Get count of failed or cancelled outcomes."""
        return len(self._entries) - self.successful_count

    @property
    def all_successful(self) -> bool:
        """Check if every Task succeeded."""
        return all(o.is_success for o in self._entries.values())

    def succeeded(self) -> dict[K, Success]:
        """Get successful outcomes by identifier."""
        return {k: o for k, o in self._entries.items() if isinstance(o, Success)}

    def failed(self) -> dict[K, Failure]:
        """Get failed outcomes by identifier."""
        return {k: o for k, o in self._entries.items() if isinstance(o, Failure)}

    def cancelled(self) -> dict[K, Cancelled]:
        """Get cancelled outcomes by identifier."""
        return {k: o for k, o in self._entries.items() if isinstance(o, Cancelled)}


def correlate(
    identifiers: Sequence[K],
    outcomes: Sequence[Outcome],
    total_time_ms: float = 0.0,
) -> CorrelatedResult[K]:
    """Map each identifier to the Outcome at the same index.

    Args:
        identifiers: Input identifiers, in batch order
        outcomes: Outcomes from the pool, in batch order
        total_time_ms: Batch wall time to record on the result

    Returns:
        CorrelatedResult with one entry per identifier

    Raises:
        ContractViolation: If the sequences differ in length or an
            identifier repeats
    """
    if len(identifiers) != len(outcomes):
        raise ContractViolation(
            f"{len(identifiers)} identifiers but {len(outcomes)} outcomes"
        )

    entries: dict[K, Outcome] = {}
    for identifier, outcome in zip(identifiers, outcomes, strict=True):
        if identifier in entries:
            raise ContractViolation(f"duplicate identifier in batch: {identifier!r}")
        entries[identifier] = outcome

    return CorrelatedResult(entries, total_time_ms=total_time_ms)
