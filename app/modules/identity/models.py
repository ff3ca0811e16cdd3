"""Identity ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, BaseModelMixin
from app.core.enums import RoleEnum

if TYPE_CHECKING:
    from app.modules.booking.models import Booking
    from app.modules.courses.models import Course
    from app.modules.notifications.models import Notification


class User(BaseModelMixin, Base):
    """Platform user as provisioned by the identity provider."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    country: Mapped[str | None] = mapped_column(String(64), nullable=True)
    role: Mapped[RoleEnum] = mapped_column(
        SAEnum(RoleEnum, name="role_enum", native_enum=False),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    courses: Mapped[list["Course"]] = relationship(back_populates="tutor")
    bookings: Mapped[list["Booking"]] = relationship(back_populates="tourist")
    notifications: Mapped[list["Notification"]] = relationship(back_populates="user")
