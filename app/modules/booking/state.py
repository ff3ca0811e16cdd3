"""Booking negotiation state machine.

A booking's status is a function of its tutor response: no response means
PENDING, otherwise the booking mirrors the response status. Tourist
reschedules drop the response and so return the booking to PENDING.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from app.core.enums import BookingStatusEnum, TutorResponseStatusEnum
from app.modules.booking.options import find_option
from app.shared.exceptions import BusinessRuleException, InvalidSelectedOptionException

_STATUS_BY_RESPONSE: dict[TutorResponseStatusEnum, BookingStatusEnum] = {
    TutorResponseStatusEnum.CONFIRMED: BookingStatusEnum.CONFIRMED,
    TutorResponseStatusEnum.DECLINED: BookingStatusEnum.DECLINED,
    TutorResponseStatusEnum.RESCHEDULED: BookingStatusEnum.RESCHEDULED,
}


@dataclass(frozen=True, slots=True)
class ResolvedTutorResponse:
    """Tutor decision after validation against the booking option set."""

    status: TutorResponseStatusEnum
    selected_option_id: UUID | None

    @property
    def booking_status(self) -> BookingStatusEnum:
        return status_for_response(self.status)


def status_for_response(response_status: TutorResponseStatusEnum | None) -> BookingStatusEnum:
    """Derive booking status from the tutor response status (None = no response)."""
    if response_status is None:
        return BookingStatusEnum.PENDING
    return _STATUS_BY_RESPONSE[TutorResponseStatusEnum(response_status)]


def resolve_tutor_response(
    booking,
    status: TutorResponseStatusEnum,
    selected_option_id: UUID | None,
) -> ResolvedTutorResponse:
    """Validate a tutor decision and normalize its selected option."""
    if status != TutorResponseStatusEnum.CONFIRMED:
        # Declines and reschedule requests never point at an option.
        return ResolvedTutorResponse(status=status, selected_option_id=None)

    if selected_option_id is not None and find_option(booking.options, selected_option_id) is None:
        raise InvalidSelectedOptionException("Selected option must be one of the booking options")

    return ResolvedTutorResponse(status=status, selected_option_id=selected_option_id)


def ensure_reschedulable(
    booking,
    *,
    allow_confirmed: bool = True,
    allow_declined: bool = True,
) -> None:
    """Apply the configured policy for reopening resolved bookings."""
    if booking.status == BookingStatusEnum.CONFIRMED and not allow_confirmed:
        raise BusinessRuleException("Confirmed bookings cannot be rescheduled")
    if booking.status == BookingStatusEnum.DECLINED and not allow_declined:
        raise BusinessRuleException("Declined bookings cannot be rescheduled")


def is_consistent(booking) -> bool:
    """Check that status, response and selected option agree."""
    response = booking.tutor_response
    if response is None:
        return booking.status == BookingStatusEnum.PENDING
    if booking.status != status_for_response(response.status):
        return False
    if response.selected_option_id is None:
        return True
    return find_option(booking.options, response.selected_option_id) is not None
