"""Booking repository layer."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Select, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.enums import BookingStatusEnum, TutorResponseStatusEnum
from app.modules.booking.models import Booking, BookingOption, TutorResponse
from app.modules.booking.options import OptionDraft
from app.modules.booking.state import status_for_response
from app.modules.courses.models import Course
from app.shared.exceptions import DuplicatePendingBookingException


def _with_details(stmt: Select[tuple[Booking]]) -> Select[tuple[Booking]]:
    return stmt.options(
        selectinload(Booking.options),
        selectinload(Booking.tutor_response).selectinload(TutorResponse.selected_option),
        selectinload(Booking.course),
        selectinload(Booking.tourist),
    )


class BookingRepository:
    """DB operations for booking domain.

    ``apply_tutor_response`` and ``replace_option_set`` are the only writers of
    ``Booking.status``; both run inside the caller's transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def has_pending_booking(
        self,
        tourist_id: UUID,
        course_id: UUID,
        exclude_booking_id: UUID | None = None,
    ) -> bool:
        condition = (
            (Booking.tourist_id == tourist_id)
            & (Booking.course_id == course_id)
            & (Booking.status == BookingStatusEnum.PENDING)
        )
        if exclude_booking_id is not None:
            condition = condition & (Booking.id != exclude_booking_id)
        return bool(await self.session.scalar(select(exists().where(condition))))

    async def create_booking(
        self,
        course_id: UUID,
        tourist_id: UUID,
        message: str | None,
        options: Sequence[OptionDraft],
    ) -> Booking:
        booking = Booking(
            course_id=course_id,
            tourist_id=tourist_id,
            message=message,
            status=status_for_response(None),
            options=[_option_from_draft(draft) for draft in options],
        )
        self.session.add(booking)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # Concurrent create slipped past has_pending_booking.
            raise DuplicatePendingBookingException(
                "You already have a pending booking for this course",
            ) from exc
        return await self.get_booking_by_id(booking.id, refresh=True)

    async def get_booking_by_id(self, booking_id: UUID, *, refresh: bool = False) -> Booking | None:
        stmt = _with_details(select(Booking)).where(Booking.id == booking_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        return await self.session.scalar(stmt)

    async def get_booking_for_update(self, booking_id: UUID) -> Booking | None:
        """Load booking and hold its row lock until the transaction ends."""
        stmt = (
            _with_details(select(Booking))
            .where(Booking.id == booking_id)
            .with_for_update(of=Booking)
            .execution_options(populate_existing=True)
        )
        return await self.session.scalar(stmt)

    async def list_for_tourist(self, tourist_id: UUID) -> list[Booking]:
        stmt = (
            _with_details(select(Booking))
            .where(Booking.tourist_id == tourist_id)
            .order_by(Booking.created_at.desc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def list_for_tutor(self, tutor_id: UUID) -> list[Booking]:
        stmt = (
            _with_details(select(Booking))
            .join(Booking.course)
            .where(Course.tutor_id == tutor_id)
            .order_by(Booking.created_at.desc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def list_for_course(self, course_id: UUID) -> list[Booking]:
        stmt = (
            _with_details(select(Booking))
            .where(Booking.course_id == course_id)
            .order_by(Booking.created_at.desc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def apply_tutor_response(
        self,
        booking: Booking,
        status: TutorResponseStatusEnum,
        selected_option_id: UUID | None,
        message: str | None,
    ) -> Booking:
        """Upsert the tutor response and set the booking status from it."""
        response = booking.tutor_response
        if response is None:
            booking.tutor_response = TutorResponse(
                booking_id=booking.id,
                status=status,
                selected_option_id=selected_option_id,
                message=message,
            )
        else:
            response.status = status
            response.selected_option_id = selected_option_id
            response.message = message
        booking.status = status_for_response(status)
        await self.session.flush()
        return await self.get_booking_by_id(booking.id, refresh=True)

    async def replace_option_set(
        self,
        booking: Booking,
        options: Sequence[OptionDraft],
        message: str | None = None,
    ) -> Booking:
        """Swap the whole option set and reopen negotiation.

        Old options and the tutor response are deleted, the booking is moved
        back to PENDING, and only then are the new options inserted. Nothing is
        committed here: a failure in any step leaves the transaction to be
        rolled back as a whole.
        """
        booking.options.clear()
        booking.tutor_response = None
        booking.status = status_for_response(None)
        if message is not None:
            booking.message = message
        try:
            await self.session.flush()
        except IntegrityError as exc:
            # Another PENDING booking for the same course committed after the service check.
            raise DuplicatePendingBookingException(
                "You already have a pending booking for this course",
            ) from exc

        booking.options.extend(_option_from_draft(draft) for draft in options)
        await self.session.flush()
        return await self.get_booking_by_id(booking.id, refresh=True)


def _option_from_draft(draft: OptionDraft) -> BookingOption:
    return BookingOption(position=draft.position, date=draft.date, time=draft.time)
