"""Booking ORM models."""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Date, Enum as SAEnum, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, BaseModelMixin
from app.core.enums import BookingStatusEnum, TutorResponseStatusEnum

if TYPE_CHECKING:
    from app.modules.courses.models import Course
    from app.modules.identity.models import User

_PENDING_ONLY = text("status = 'PENDING'")


class Booking(BaseModelMixin, Base):
    """A tourist's request to take a course, with its negotiation state."""

    __tablename__ = "bookings"
    __table_args__ = (
        Index(
            "uq_bookings_pending_tourist_course",
            "tourist_id",
            "course_id",
            unique=True,
            postgresql_where=_PENDING_ONLY,
            sqlite_where=_PENDING_ONLY,
        ),
    )

    course_id: Mapped[UUID] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    tourist_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Mirrors tutor_response.status; written only by BookingRepository.
    status: Mapped[BookingStatusEnum] = mapped_column(
        SAEnum(BookingStatusEnum, name="booking_status_enum", native_enum=False),
        default=BookingStatusEnum.PENDING,
        nullable=False,
        index=True,
    )

    options: Mapped[list["BookingOption"]] = relationship(
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingOption.position",
    )
    tutor_response: Mapped["TutorResponse | None"] = relationship(
        back_populates="booking",
        cascade="all, delete-orphan",
        uselist=False,
    )
    course: Mapped["Course"] = relationship(back_populates="bookings")
    tourist: Mapped["User"] = relationship(back_populates="bookings")


class BookingOption(BaseModelMixin, Base):
    """One candidate date and time range proposed for a booking."""

    __tablename__ = "booking_options"

    booking_id: Mapped[UUID] = mapped_column(ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time: Mapped[str] = mapped_column(String(80), nullable=False)

    booking: Mapped[Booking] = relationship(back_populates="options")


class TutorResponse(BaseModelMixin, Base):
    """The tutor's decision on a booking (at most one per booking)."""

    __tablename__ = "tutor_responses"

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    status: Mapped[TutorResponseStatusEnum] = mapped_column(
        SAEnum(TutorResponseStatusEnum, name="tutor_response_status_enum", native_enum=False),
        nullable=False,
    )
    selected_option_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("booking_options.id", ondelete="SET NULL"),
        nullable=True,
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    booking: Mapped[Booking] = relationship(back_populates="tutor_response")
    selected_option: Mapped[BookingOption | None] = relationship()
