"""Notifications business logic layer."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.core.enums import NotificationTypeEnum
from app.core.metrics import NOTIFICATION_FAILURES_TOTAL
from app.modules.identity.models import User
from app.modules.notifications.models import Notification
from app.modules.notifications.repository import NotificationsRepository
from app.shared.exceptions import NotFoundException, UnauthorizedException

logger = logging.getLogger(__name__)


class NotificationsService:
    """Notification sink for booking events plus the recipient inbox."""

    def __init__(self, repository: NotificationsRepository) -> None:
        self.repository = repository

    async def notify(
        self,
        user_id: UUID,
        title: str,
        message: str,
        notification_type: NotificationTypeEnum,
        booking_id: UUID | None = None,
    ) -> Notification | None:
        """Store a notification; failures are logged and never propagated."""
        try:
            return await self.repository.create_notification(
                user_id=user_id,
                booking_id=booking_id,
                notification_type=notification_type,
                title=title,
                message=message,
            )
        except Exception:
            NOTIFICATION_FAILURES_TOTAL.inc()
            logger.exception(
                "Failed to create notification for user %s (booking %s)",
                user_id,
                booking_id,
            )
            return None

    async def list_my_notifications(self, actor: User) -> list[Notification]:
        """List notifications for current user."""
        return await self.repository.list_notifications_for_user(actor.id)

    async def _get_owned(self, notification_id: UUID, actor: User) -> Notification:
        notification = await self.repository.get_notification_by_id(notification_id)
        if notification is None:
            raise NotFoundException("Notification not found")
        if notification.user_id != actor.id:
            raise UnauthorizedException("Only the recipient can manage this notification")
        return notification

    async def mark_read(self, notification_id: UUID, actor: User) -> Notification:
        """Mark one notification as read."""
        notification = await self._get_owned(notification_id, actor)
        return await self.repository.mark_read(notification)

    async def mark_all_read(self, actor: User) -> int:
        """Mark every notification of the current user as read."""
        return await self.repository.mark_all_read(actor.id)

    async def delete_notification(self, notification_id: UUID, actor: User) -> None:
        """Delete one notification."""
        notification = await self._get_owned(notification_id, actor)
        await self.repository.delete_notification(notification)

    async def clear_all(self, actor: User) -> int:
        """Delete every notification of the current user."""
        return await self.repository.delete_all_for_user(actor.id)


async def get_notifications_service(session: AsyncSession = Depends(get_db_session)) -> NotificationsService:
    """Dependency provider for notifications service."""
    return NotificationsService(NotificationsRepository(session))
