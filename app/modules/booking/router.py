"""Booking API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.modules.booking.schemas import (
    BookingCreatedResponse,
    BookingCreateRequest,
    BookingList,
    BookingRead,
    BookingRescheduledResponse,
    BookingRescheduleRequest,
    BookingRespondedResponse,
    CourseBookingRead,
    TutorBookingRead,
    TutorResponseRead,
    TutorResponseRequest,
    build_booking_list,
)
from app.modules.booking.service import BookingService, get_booking_service
from app.modules.identity.service import get_current_user

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreateRequest,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingCreatedResponse:
    """Tourist proposes one or more date/time options for a course."""
    booking = await service.create_booking(payload, current_user)
    return BookingCreatedResponse(booking=BookingRead.model_validate(booking))


@router.get("/tourist", response_model=BookingList[BookingRead])
async def list_tourist_bookings(
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingList[BookingRead]:
    """List bookings of the current tourist."""
    items = await service.list_tourist_bookings(current_user)
    return build_booking_list([BookingRead.model_validate(item) for item in items])


@router.get("/tutor", response_model=BookingList[TutorBookingRead])
async def list_tutor_bookings(
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingList[TutorBookingRead]:
    """List bookings across the current tutor's courses."""
    items = await service.list_tutor_bookings(current_user)
    return build_booking_list([TutorBookingRead.model_validate(item) for item in items])


@router.get("/course/{course_id}", response_model=BookingList[CourseBookingRead])
async def list_course_bookings(
    course_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingList[CourseBookingRead]:
    """List bookings of one course owned by the current tutor."""
    items = await service.list_course_bookings(course_id, current_user)
    return build_booking_list([CourseBookingRead.model_validate(item) for item in items])


@router.put("/{booking_id}/respond", response_model=BookingRespondedResponse)
async def respond_to_booking(
    booking_id: UUID,
    payload: TutorResponseRequest,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingRespondedResponse:
    """Tutor confirms, declines or asks for a reschedule."""
    booking, tutor_response = await service.respond_to_booking(booking_id, payload, current_user)
    return BookingRespondedResponse(
        booking=TutorBookingRead.model_validate(booking),
        tutor_response=TutorResponseRead.model_validate(tutor_response),
    )


@router.put("/{booking_id}/reschedule", response_model=BookingRescheduledResponse)
async def reschedule_booking(
    booking_id: UUID,
    payload: BookingRescheduleRequest,
    service: BookingService = Depends(get_booking_service),
    current_user=Depends(get_current_user),
) -> BookingRescheduledResponse:
    """Tourist replaces the option set and reopens negotiation."""
    booking = await service.reschedule_booking(booking_id, payload, current_user)
    return BookingRescheduledResponse(booking=BookingRead.model_validate(booking))
