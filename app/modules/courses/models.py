"""Course directory ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, BaseModelMixin

if TYPE_CHECKING:
    from app.modules.booking.models import Booking
    from app.modules.identity.models import User


class Course(BaseModelMixin, Base):
    """Cultural course offered by a tutor."""

    __tablename__ = "courses"

    tutor_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)

    tutor: Mapped["User"] = relationship(back_populates="courses")
    bookings: Mapped[list["Booking"]] = relationship(back_populates="course", passive_deletes=True)
