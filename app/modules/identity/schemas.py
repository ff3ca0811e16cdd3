"""Identity schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr

from app.core.enums import RoleEnum


class UserRead(BaseModel):
    """User output schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: EmailStr
    phone: str | None
    country: str | None
    role: RoleEnum
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TouristPublicRead(BaseModel):
    """Non-sensitive tourist projection shown to tutors."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: EmailStr


class TouristContactRead(TouristPublicRead):
    """Tourist projection with contact phone for the owning tutor's course view."""

    phone: str | None
