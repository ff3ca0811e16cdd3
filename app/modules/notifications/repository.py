"""Notifications repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import NotificationTypeEnum
from app.modules.notifications.models import Notification


class NotificationsRepository:
    """DB operations for notifications domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_notification(
        self,
        user_id: UUID,
        booking_id: UUID | None,
        notification_type: NotificationTypeEnum,
        title: str,
        message: str,
    ) -> Notification:
        """Insert inside a savepoint so a failure leaves the outer transaction usable."""
        notification = Notification(
            user_id=user_id,
            booking_id=booking_id,
            type=notification_type,
            title=title,
            message=message,
        )
        async with self.session.begin_nested():
            self.session.add(notification)
            await self.session.flush()
        return notification

    async def get_notification_by_id(self, notification_id: UUID) -> Notification | None:
        stmt = select(Notification).where(Notification.id == notification_id)
        return await self.session.scalar(stmt)

    async def list_notifications_for_user(self, user_id: UUID) -> list[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
        )
        return list((await self.session.scalars(stmt)).all())

    async def mark_read(self, notification: Notification) -> Notification:
        notification.is_read = True
        await self.session.flush()
        return notification

    async def mark_all_read(self, user_id: UUID) -> int:
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        return int(result.rowcount or 0)

    async def delete_notification(self, notification: Notification) -> None:
        await self.session.delete(notification)
        await self.session.flush()

    async def delete_all_for_user(self, user_id: UUID) -> int:
        result = await self.session.execute(delete(Notification).where(Notification.user_id == user_id))
        return int(result.rowcount or 0)
