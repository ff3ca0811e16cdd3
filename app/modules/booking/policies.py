"""Authorization policies for booking operations."""

from __future__ import annotations

from dataclasses import dataclass

from app.core.enums import RoleEnum
from app.shared.exceptions import UnauthorizedException


@dataclass(frozen=True, slots=True)
class PolicyDecision:
    """Outcome of an authorization check."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> "PolicyDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "PolicyDecision":
        return cls(allowed=False, reason=reason)


def enforce(decision: PolicyDecision) -> None:
    """Raise forbidden error for denied decisions."""
    if not decision.allowed:
        raise UnauthorizedException(decision.reason or "Operation not permitted")


def has_role(actor, role: RoleEnum, reason: str) -> PolicyDecision:
    if actor is None or actor.role != role:
        return PolicyDecision.deny(reason)
    return PolicyDecision.allow()


def owns_course(actor, course, reason: str) -> PolicyDecision:
    """Tutor owns the course (and therefore every booking made for it)."""
    if actor.role != RoleEnum.TUTOR or course.tutor_id != actor.id:
        return PolicyDecision.deny(reason)
    return PolicyDecision.allow()


def owns_booking(actor, booking, reason: str) -> PolicyDecision:
    """Tourist created the booking."""
    if actor.role != RoleEnum.TOURIST or booking.tourist_id != actor.id:
        return PolicyDecision.deny(reason)
    return PolicyDecision.allow()
