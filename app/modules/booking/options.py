"""Booking option set helpers."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar
from uuid import UUID

from app.shared.exceptions import ValidationException

TIME_RANGE_SEPARATOR = " - "


class OptionInput(Protocol):
    date: dt.date
    start_time: str
    end_time: str


class HasOptionId(Protocol):
    id: UUID


OptionT = TypeVar("OptionT", bound=HasOptionId)


@dataclass(frozen=True, slots=True)
class OptionDraft:
    """Validated option waiting to be inserted."""

    position: int
    date: dt.date
    time: str


def format_time_range(start_time: str, end_time: str) -> str:
    """Render a start/end pair as the stored display range.

    Bounds are kept as opaque tokens: neither ordering nor overlap with other
    bookings is checked.
    """
    return f"{start_time.strip()}{TIME_RANGE_SEPARATOR}{end_time.strip()}"


def build_option_drafts(options: Sequence[OptionInput]) -> list[OptionDraft]:
    """Turn input options into ordered drafts, rejecting an empty set."""
    if not options:
        raise ValidationException("At least one option is required")

    drafts: list[OptionDraft] = []
    for position, option in enumerate(options):
        if not option.start_time.strip():
            raise ValidationException("Start time is required")
        if not option.end_time.strip():
            raise ValidationException("End time is required")
        drafts.append(
            OptionDraft(
                position=position,
                date=option.date,
                time=format_time_range(option.start_time, option.end_time),
            ),
        )
    return drafts


def find_option(options: Iterable[OptionT], option_id: UUID) -> OptionT | None:
    """Return the option with the given id if it belongs to the set."""
    for option in options:
        if option.id == option_id:
            return option
    return None
