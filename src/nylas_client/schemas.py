"""
Parameter schemas.

Each model is the rule set of one API call. Unknown keys are rejected,
scalar types are strict, and optional keys may be omitted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    StringConstraints,
)

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _iso_date(value: str) -> str:
    datetime.fromisoformat(value)
    return value


NonEmptyStr = Annotated[StrictStr, StringConstraints(min_length=1)]
Timestamp = Annotated[StrictInt, Field(ge=0)]
IsoDate = Annotated[StrictStr, AfterValidator(_iso_date)]
Email = Annotated[StrictStr, StringConstraints(pattern=_EMAIL_PATTERN)]

DeltaType = Literal["contact", "event", "file", "message", "draft", "thread", "folder", "label"]
RsvpStatus = Literal["yes", "no", "maybe"]


class _Params(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# Events -----------------------------------------------------------------------


class EventListParams(_Params):
    """Filters for listing events."""

    limit: Annotated[StrictInt, Field(ge=1)] | None = None
    offset: Annotated[StrictInt, Field(ge=0)] | None = None
    event_id: NonEmptyStr | None = None
    calendar_id: NonEmptyStr | None = None

    title: NonEmptyStr | None = None
    location: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    show_cancelled: StrictBool | None = None
    expand_recurring: StrictBool | None = None

    ends_after: Timestamp | None = None
    ends_before: Timestamp | None = None
    start_after: Timestamp | None = None
    start_before: Timestamp | None = None


class TimeWhen(_Params):
    time: Timestamp


class DateWhen(_Params):
    date: IsoDate


class TimespanWhen(_Params):
    start_time: Timestamp
    end_time: Timestamp


class DatespanWhen(_Params):
    start_date: IsoDate
    end_date: IsoDate


When = Union[TimeWhen, DateWhen, TimespanWhen, DatespanWhen]


class Participant(_Params):
    email: Email
    status: StrictStr
    name: StrictStr
    comment: StrictStr


class UpdateEventParams(_Params):
    """Fields of an event update; ``id`` selects the event."""

    id: NonEmptyStr

    when: When | None = None
    busy: StrictBool | None = None
    title: NonEmptyStr | None = None
    location: NonEmptyStr | None = None
    description: NonEmptyStr | None = None
    notify_participants: StrictBool | None = None
    participants: list[Participant] | None = None


class AddEventParams(_Params):
    """Fields of a new event."""

    when: When
    calendar_id: NonEmptyStr

    busy: StrictBool | None = None
    title: NonEmptyStr | None = None
    location: NonEmptyStr | None = None
    recurrence: list[StrictStr] | None = None
    description: NonEmptyStr | None = None
    notify_participants: StrictBool | None = None
    participants: list[Participant] | None = None


class RsvpParams(_Params):
    status: RsvpStatus
    event_id: NonEmptyStr
    account_id: NonEmptyStr
    notify_participants: StrictBool | None = None


class EventIdParams(_Params):
    id: NonEmptyStr


class DeleteEventParams(_Params):
    id: NonEmptyStr
    notify_participants: StrictBool | None = None


# Deltas -----------------------------------------------------------------------


class DeltaParams(_Params):
    cursor: NonEmptyStr

    view: NonEmptyStr | None = None
    exclude_types: DeltaType | list[DeltaType] | None = None
    include_types: DeltaType | list[DeltaType] | None = None


class LongPollDeltaParams(DeltaParams):
    timeout: Annotated[StrictInt, Field(ge=1)]


# Threads ----------------------------------------------------------------------


class SearchParams(_Params):
    q: NonEmptyStr
