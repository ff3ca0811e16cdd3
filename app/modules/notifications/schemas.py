"""Notifications schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.core.enums import NotificationTypeEnum


class NotificationRead(BaseModel):
    """Notification response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    booking_id: UUID | None
    type: NotificationTypeEnum
    title: str
    message: str
    is_read: bool
    created_at: datetime
    updated_at: datetime


class NotificationList(BaseModel):
    """Counted notifications, newest first."""

    count: int
    notifications: list[NotificationRead]


class NotificationActionResult(BaseModel):
    """Acknowledgement for inbox actions."""

    message: str
    affected: int = 1
