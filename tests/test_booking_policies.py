from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest

from app.core.enums import RoleEnum
from app.modules.booking.policies import PolicyDecision, enforce, has_role, owns_booking, owns_course
from app.shared.exceptions import UnauthorizedException


def _actor(role: RoleEnum) -> SimpleNamespace:
    return SimpleNamespace(id=uuid4(), role=role)


def test_has_role_denies_other_roles_and_anonymous_callers() -> None:
    tourist = _actor(RoleEnum.TOURIST)

    assert has_role(tourist, RoleEnum.TOURIST, "nope").allowed
    assert has_role(tourist, RoleEnum.TUTOR, "nope") == PolicyDecision.deny("nope")
    assert not has_role(None, RoleEnum.TOURIST, "nope").allowed


def test_owns_course_requires_tutor_of_that_course() -> None:
    tutor = _actor(RoleEnum.TUTOR)
    course = SimpleNamespace(tutor_id=tutor.id)

    assert owns_course(tutor, course, "nope").allowed
    assert not owns_course(_actor(RoleEnum.TUTOR), course, "nope").allowed

    impostor = SimpleNamespace(id=tutor.id, role=RoleEnum.TOURIST)
    assert not owns_course(impostor, course, "nope").allowed


def test_owns_booking_requires_the_booking_tourist() -> None:
    tourist = _actor(RoleEnum.TOURIST)
    booking = SimpleNamespace(tourist_id=tourist.id)

    assert owns_booking(tourist, booking, "nope").allowed
    assert not owns_booking(_actor(RoleEnum.TOURIST), booking, "nope").allowed
    assert not owns_booking(SimpleNamespace(id=tourist.id, role=RoleEnum.TUTOR), booking, "nope").allowed


def test_enforce_raises_with_denial_reason() -> None:
    enforce(PolicyDecision.allow())

    with pytest.raises(UnauthorizedException) as exc:
        enforce(PolicyDecision.deny("Only tourists can book courses"))
    assert exc.value.message == "Only tourists can book courses"
    assert exc.value.status_code == 403
