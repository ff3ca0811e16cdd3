"""Booking negotiation business logic layer."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.core.enums import (
    BookingStatusEnum,
    NotificationTypeEnum,
    RoleEnum,
    TutorResponseStatusEnum,
)
from app.core.metrics import record_booking_transition
from app.modules.booking.models import Booking, TutorResponse
from app.modules.booking.options import build_option_drafts
from app.modules.booking.policies import enforce, has_role, owns_booking, owns_course
from app.modules.booking.repository import BookingRepository
from app.modules.booking.schemas import (
    BookingCreateRequest,
    BookingRescheduleRequest,
    TutorResponseRequest,
)
from app.modules.booking.state import ensure_reschedulable, resolve_tutor_response
from app.modules.courses.repository import CourseRepository
from app.modules.identity.models import User
from app.modules.notifications.repository import NotificationsRepository
from app.modules.notifications.service import NotificationsService
from app.shared.exceptions import DuplicatePendingBookingException, NotFoundException

logger = logging.getLogger(__name__)

_RESPONSE_NOTIFICATIONS: dict[TutorResponseStatusEnum, tuple[NotificationTypeEnum, str, str]] = {
    TutorResponseStatusEnum.CONFIRMED: (
        NotificationTypeEnum.BOOKING_CONFIRMED,
        "Booking confirmed",
        'Your booking for "{title}" has been confirmed by the tutor.',
    ),
    TutorResponseStatusEnum.DECLINED: (
        NotificationTypeEnum.BOOKING_DECLINED,
        "Booking declined",
        'Your booking for "{title}" has been declined by the tutor.',
    ),
    TutorResponseStatusEnum.RESCHEDULED: (
        NotificationTypeEnum.BOOKING_RESCHEDULED,
        "Reschedule requested",
        'The tutor asked you to propose different times for "{title}".',
    ),
}


class BookingService:
    """Booking domain service: create, respond, reschedule and list."""

    def __init__(
        self,
        booking_repository: BookingRepository,
        course_repository: CourseRepository,
        notifications_service: NotificationsService,
        *,
        allow_reschedule_confirmed: bool = True,
        allow_reschedule_declined: bool = True,
    ) -> None:
        self.booking_repository = booking_repository
        self.course_repository = course_repository
        self.notifications_service = notifications_service
        self.allow_reschedule_confirmed = allow_reschedule_confirmed
        self.allow_reschedule_declined = allow_reschedule_declined

    async def _get_booking_for_update(self, booking_id: UUID) -> Booking:
        booking = await self.booking_repository.get_booking_for_update(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found")
        return booking

    async def create_booking(self, payload: BookingCreateRequest, actor: User) -> Booking:
        """Create a PENDING booking with the proposed options."""
        enforce(has_role(actor, RoleEnum.TOURIST, "Only tourists can book courses"))
        drafts = build_option_drafts(payload.options)

        course = await self.course_repository.get_course_by_id(payload.course_id)
        if course is None:
            raise NotFoundException("Course not found")

        if await self.booking_repository.has_pending_booking(actor.id, course.id):
            raise DuplicatePendingBookingException("You already have a pending booking for this course")

        booking = await self.booking_repository.create_booking(
            course_id=course.id,
            tourist_id=actor.id,
            message=payload.message,
            options=drafts,
        )
        record_booking_transition("create", booking.status)
        logger.info("Booking %s created by tourist %s for course %s", booking.id, actor.id, course.id)

        await self.notifications_service.notify(
            user_id=course.tutor_id,
            booking_id=booking.id,
            notification_type=NotificationTypeEnum.BOOKING_PENDING,
            title="New booking request",
            message=f'You have a new booking request for "{course.title}".',
        )
        return booking

    async def respond_to_booking(
        self,
        booking_id: UUID,
        payload: TutorResponseRequest,
        actor: User,
    ) -> tuple[Booking, TutorResponse]:
        """Record the tutor decision and move the booking to the matching status."""
        enforce(has_role(actor, RoleEnum.TUTOR, "Only tutors can respond to bookings"))
        booking = await self._get_booking_for_update(booking_id)
        enforce(owns_course(actor, booking.course, "You can only respond to your own course bookings"))

        resolved = resolve_tutor_response(booking, payload.status, payload.selected_option_id)
        booking = await self.booking_repository.apply_tutor_response(
            booking,
            status=resolved.status,
            selected_option_id=resolved.selected_option_id,
            message=payload.message,
        )
        record_booking_transition("respond", resolved.booking_status)
        logger.info("Booking %s moved to %s by tutor %s", booking.id, resolved.booking_status, actor.id)

        notification_type, title, template = _RESPONSE_NOTIFICATIONS[resolved.status]
        await self.notifications_service.notify(
            user_id=booking.tourist_id,
            booking_id=booking.id,
            notification_type=notification_type,
            title=title,
            message=template.format(title=booking.course.title),
        )
        return booking, booking.tutor_response

    async def reschedule_booking(
        self,
        booking_id: UUID,
        payload: BookingRescheduleRequest,
        actor: User,
    ) -> Booking:
        """Replace the option set, drop the tutor response and reopen as PENDING."""
        enforce(has_role(actor, RoleEnum.TOURIST, "Only tourists can reschedule"))
        drafts = build_option_drafts(payload.options)

        booking = await self._get_booking_for_update(booking_id)
        enforce(owns_booking(actor, booking, "You can only reschedule your own bookings"))
        ensure_reschedulable(
            booking,
            allow_confirmed=self.allow_reschedule_confirmed,
            allow_declined=self.allow_reschedule_declined,
        )
        if booking.status != BookingStatusEnum.PENDING and await self.booking_repository.has_pending_booking(
            actor.id,
            booking.course_id,
            exclude_booking_id=booking.id,
        ):
            raise DuplicatePendingBookingException("You already have a pending booking for this course")

        previous_status = booking.status
        booking = await self.booking_repository.replace_option_set(booking, drafts, message=payload.message)
        record_booking_transition("reschedule", booking.status)
        logger.info(
            "Booking %s rescheduled by tourist %s (was %s, %d new options)",
            booking.id,
            actor.id,
            previous_status,
            len(booking.options),
        )

        await self.notifications_service.notify(
            user_id=booking.course.tutor_id,
            booking_id=booking.id,
            notification_type=NotificationTypeEnum.BOOKING_RESCHEDULED,
            title="Booking rescheduled",
            message=f'A tourist proposed new times for "{booking.course.title}".',
        )
        return booking

    async def list_tourist_bookings(self, actor: User) -> list[Booking]:
        """List bookings made by the current tourist."""
        enforce(has_role(actor, RoleEnum.TOURIST, "Only tourists can view their bookings"))
        return await self.booking_repository.list_for_tourist(actor.id)

    async def list_tutor_bookings(self, actor: User) -> list[Booking]:
        """List bookings across all courses of the current tutor."""
        enforce(has_role(actor, RoleEnum.TUTOR, "Only tutors can view bookings"))
        return await self.booking_repository.list_for_tutor(actor.id)

    async def list_course_bookings(self, course_id: UUID, actor: User) -> list[Booking]:
        """List bookings of one course owned by the current tutor."""
        enforce(has_role(actor, RoleEnum.TUTOR, "Only tutors can view course bookings"))
        course = await self.course_repository.get_course_by_id(course_id)
        if course is None:
            raise NotFoundException("Course not found")
        enforce(owns_course(actor, course, "You can only view bookings for your own courses"))
        return await self.booking_repository.list_for_course(course.id)


async def get_booking_service(session: AsyncSession = Depends(get_db_session)) -> BookingService:
    """Dependency provider for booking service."""
    settings = get_settings()
    return BookingService(
        booking_repository=BookingRepository(session),
        course_repository=CourseRepository(session),
        notifications_service=NotificationsService(NotificationsRepository(session)),
        allow_reschedule_confirmed=settings.booking_reschedule_confirmed_allowed,
        allow_reschedule_declined=settings.booking_reschedule_declined_allowed,
    )
