from __future__ import annotations

import datetime as dt
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from types import SimpleNamespace
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.enums import BookingStatusEnum, RoleEnum, TutorResponseStatusEnum
from app.main import app
from app.modules.booking.service import get_booking_service
from app.modules.identity.service import get_current_user, get_identity_service
from app.shared.exceptions import (
    DuplicatePendingBookingException,
    NotFoundException,
    UnauthorizedException,
)

TOURIST = SimpleNamespace(id=uuid4(), role=RoleEnum.TOURIST, name="Marta")
TUTOR = SimpleNamespace(id=uuid4(), role=RoleEnum.TUTOR, name="Aiko")
COURSE = SimpleNamespace(id=uuid4(), tutor_id=TUTOR.id, title="Tea ceremony basics", location="Kyoto")


def _booking_view(status: BookingStatusEnum = BookingStatusEnum.PENDING, tutor_response=None) -> SimpleNamespace:
    now = datetime.now(UTC)
    booking_id = uuid4()
    option = SimpleNamespace(
        id=uuid4(),
        booking_id=booking_id,
        position=0,
        date=dt.date(2025, 6, 1),
        time="09:00 - 10:00",
    )
    return SimpleNamespace(
        id=booking_id,
        course_id=COURSE.id,
        tourist_id=TOURIST.id,
        message=None,
        status=status,
        options=[option],
        tutor_response=tutor_response,
        course=COURSE,
        tourist=SimpleNamespace(id=TOURIST.id, name="Marta", email="marta@example.com", phone="+48 600 100 200"),
        created_at=now,
        updated_at=now,
    )


class StubBookingService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, object]] = []

    def _record(self, name: str, payload: object) -> None:
        self.calls.append((name, payload))
        if self.error is not None:
            raise self.error

    async def create_booking(self, payload, actor):
        self._record("create", payload)
        return _booking_view()

    async def respond_to_booking(self, booking_id, payload, actor):
        self._record("respond", payload)
        booking = _booking_view(BookingStatusEnum.CONFIRMED)
        now = datetime.now(UTC)
        response = SimpleNamespace(
            id=uuid4(),
            booking_id=booking.id,
            status=TutorResponseStatusEnum.CONFIRMED,
            selected_option_id=booking.options[0].id,
            selected_option=booking.options[0],
            message=None,
            created_at=now,
            updated_at=now,
        )
        booking.tutor_response = response
        return booking, response

    async def reschedule_booking(self, booking_id, payload, actor):
        self._record("reschedule", payload)
        return _booking_view()

    async def list_course_bookings(self, course_id, actor):
        self._record("list_course", course_id)
        return [_booking_view(), _booking_view(BookingStatusEnum.DECLINED)]


@asynccontextmanager
async def _api(service: StubBookingService, user=TOURIST):
    app.dependency_overrides[get_booking_service] = lambda: service
    app.dependency_overrides[get_current_user] = lambda: user
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def _create_body(options=None) -> dict:
    if options is None:
        options = [{"date": "2025-06-01", "start_time": "09:00", "end_time": "10:00"}]
    return {"course_id": str(COURSE.id), "options": options, "message": "  First time in Kyoto  "}


@pytest.mark.asyncio
async def test_create_booking_returns_201_with_booking() -> None:
    service = StubBookingService()
    async with _api(service) as client:
        response = await client.post("/api/v1/bookings", json=_create_body())

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Booking created"
    assert body["booking"]["status"] == "PENDING"
    assert body["booking"]["options"][0]["time"] == "09:00 - 10:00"
    assert service.calls[0][1].message == "First time in Kyoto"


@pytest.mark.asyncio
async def test_create_booking_without_options_is_a_validation_error() -> None:
    service = StubBookingService()
    async with _api(service) as client:
        response = await client.post("/api/v1/bookings", json=_create_body(options=[]))

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "validation_error"
    assert error["details"]
    assert service.calls == []


@pytest.mark.asyncio
async def test_create_booking_with_blank_time_is_a_validation_error() -> None:
    service = StubBookingService()
    body = _create_body(options=[{"date": "2025-06-01", "start_time": "   ", "end_time": "10:00"}])
    async with _api(service) as client:
        response = await client.post("/api/v1/bookings", json=body)

    assert response.status_code == 400
    assert service.calls == []


@pytest.mark.asyncio
async def test_duplicate_pending_booking_maps_to_400() -> None:
    service = StubBookingService(DuplicatePendingBookingException("You already have a pending booking for this course"))
    async with _api(service) as client:
        response = await client.post("/api/v1/bookings", json=_create_body())

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "duplicate_pending_booking"


@pytest.mark.asyncio
async def test_respond_returns_booking_and_tutor_response() -> None:
    service = StubBookingService()
    async with _api(service, user=TUTOR) as client:
        response = await client.put(
            f"/api/v1/bookings/{uuid4()}/respond",
            json={"status": "CONFIRMED", "selected_option_id": str(uuid4())},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["booking"]["status"] == "CONFIRMED"
    assert body["booking"]["tourist"]["email"] == "marta@example.com"
    assert "phone" not in body["booking"]["tourist"]
    assert body["tutor_response"]["selected_option"]["id"] == body["booking"]["options"][0]["id"]


@pytest.mark.asyncio
async def test_respond_with_unknown_status_is_rejected() -> None:
    service = StubBookingService()
    async with _api(service, user=TUTOR) as client:
        response = await client.put(f"/api/v1/bookings/{uuid4()}/respond", json={"status": "MAYBE"})

    assert response.status_code == 400
    assert service.calls == []


@pytest.mark.asyncio
async def test_respond_by_non_owner_is_forbidden() -> None:
    service = StubBookingService(UnauthorizedException("You can only respond to your own course bookings"))
    async with _api(service, user=TUTOR) as client:
        response = await client.put(f"/api/v1/bookings/{uuid4()}/respond", json={"status": "DECLINED"})

    assert response.status_code == 403
    assert response.json()["error"] == {
        "code": "forbidden",
        "message": "You can only respond to your own course bookings",
    }


@pytest.mark.asyncio
async def test_reschedule_missing_booking_is_not_found() -> None:
    service = StubBookingService(NotFoundException("Booking not found"))
    async with _api(service) as client:
        response = await client.put(
            f"/api/v1/bookings/{uuid4()}/reschedule",
            json={"options": [{"date": "2025-06-05", "start_time": "14:00", "end_time": "15:00"}]},
        )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


@pytest.mark.asyncio
async def test_course_listing_includes_tourist_contact() -> None:
    service = StubBookingService()
    async with _api(service, user=TUTOR) as client:
        response = await client.get(f"/api/v1/bookings/course/{COURSE.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert body["bookings"][0]["tourist"]["phone"] == "+48 600 100 200"


@pytest.mark.asyncio
async def test_missing_bearer_token_is_unauthenticated() -> None:
    app.dependency_overrides[get_booking_service] = lambda: StubBookingService()
    app.dependency_overrides[get_identity_service] = lambda: None
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/bookings/tourist")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
