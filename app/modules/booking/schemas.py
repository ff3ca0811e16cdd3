"""Booking schemas."""

from __future__ import annotations

import datetime as dt
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.config import get_settings
from app.core.enums import BookingStatusEnum, TutorResponseStatusEnum
from app.modules.courses.schemas import CourseSummaryRead
from app.modules.identity.schemas import TouristContactRead, TouristPublicRead
from app.shared.utils import normalize_optional_text

settings = get_settings()

T = TypeVar("T")


class BookingOptionInput(BaseModel):
    """Candidate date with a start/end time proposed by the tourist."""

    date: dt.date
    start_time: str = Field(min_length=1, max_length=32)
    end_time: str = Field(min_length=1, max_length=32)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def strip_time_token(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class _MessageMixin(BaseModel):
    message: str | None = Field(default=None, max_length=settings.booking_message_max_length)

    @field_validator("message", mode="before")
    @classmethod
    def normalize_message(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return normalize_optional_text(value)
        return value


class BookingCreateRequest(_MessageMixin):
    """Create booking request."""

    course_id: UUID
    options: list[BookingOptionInput] = Field(min_length=1)


class BookingRescheduleRequest(_MessageMixin):
    """Replace the option set of an existing booking."""

    options: list[BookingOptionInput] = Field(min_length=1)


class TutorResponseRequest(_MessageMixin):
    """Tutor decision on a booking."""

    status: TutorResponseStatusEnum
    selected_option_id: UUID | None = None


class BookingOptionRead(BaseModel):
    """Booking option response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_id: UUID
    position: int
    date: dt.date
    time: str


class TutorResponseRead(BaseModel):
    """Tutor response schema with the resolved selected option."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_id: UUID
    status: TutorResponseStatusEnum
    selected_option_id: UUID | None
    selected_option: BookingOptionRead | None = None
    message: str | None
    created_at: datetime
    updated_at: datetime


class BookingRead(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    course_id: UUID
    tourist_id: UUID
    message: str | None
    status: BookingStatusEnum
    options: list[BookingOptionRead]
    tutor_response: TutorResponseRead | None = None
    course: CourseSummaryRead | None = None
    created_at: datetime
    updated_at: datetime


class TutorBookingRead(BookingRead):
    """Booking as seen by the course tutor."""

    tourist: TouristPublicRead


class CourseBookingRead(BookingRead):
    """Booking as listed on the tutor's course detail view."""

    tourist: TouristContactRead


class BookingList(BaseModel, Generic[T]):
    """Counted list of bookings, newest first."""

    count: int
    bookings: list[T]


class BookingCreatedResponse(BaseModel):
    """Create booking response."""

    message: str = "Booking created"
    booking: BookingRead


class BookingRespondedResponse(BaseModel):
    """Tutor response outcome."""

    message: str = "Booking response saved"
    booking: TutorBookingRead
    tutor_response: TutorResponseRead


class BookingRescheduledResponse(BaseModel):
    """Reschedule outcome."""

    message: str = "Booking rescheduled"
    booking: BookingRead


def build_booking_list(items: list[T]) -> BookingList[T]:
    """Wrap serialized bookings with their count."""
    return BookingList(count=len(items), bookings=items)
