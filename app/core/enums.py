"""Core enums used across modules."""

from enum import StrEnum


class RoleEnum(StrEnum):
    """System roles."""

    TOURIST = "TOURIST"
    TUTOR = "TUTOR"


class BookingStatusEnum(StrEnum):
    """Booking negotiation status."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"
    RESCHEDULED = "RESCHEDULED"


class TutorResponseStatusEnum(StrEnum):
    """Decision a tutor can record on a booking."""

    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"
    RESCHEDULED = "RESCHEDULED"


class NotificationTypeEnum(StrEnum):
    """Booking event a notification was raised for."""

    BOOKING_PENDING = "BOOKING_PENDING"
    BOOKING_CONFIRMED = "BOOKING_CONFIRMED"
    BOOKING_DECLINED = "BOOKING_DECLINED"
    BOOKING_RESCHEDULED = "BOOKING_RESCHEDULED"
