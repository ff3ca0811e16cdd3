"""Notifications API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from app.modules.identity.service import get_current_user
from app.modules.notifications.schemas import (
    NotificationActionResult,
    NotificationList,
    NotificationRead,
)
from app.modules.notifications.service import NotificationsService, get_notifications_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationList)
async def list_my_notifications(
    service: NotificationsService = Depends(get_notifications_service),
    current_user=Depends(get_current_user),
) -> NotificationList:
    """List notifications for current user."""
    items = await service.list_my_notifications(current_user)
    serialized = [NotificationRead.model_validate(item) for item in items]
    return NotificationList(count=len(serialized), notifications=serialized)


@router.patch("/mark-all-read", response_model=NotificationActionResult)
async def mark_all_notifications_read(
    service: NotificationsService = Depends(get_notifications_service),
    current_user=Depends(get_current_user),
) -> NotificationActionResult:
    """Mark all notifications as read."""
    affected = await service.mark_all_read(current_user)
    return NotificationActionResult(message="All notifications marked as read", affected=affected)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_read(
    notification_id: UUID,
    service: NotificationsService = Depends(get_notifications_service),
    current_user=Depends(get_current_user),
) -> NotificationRead:
    """Mark one notification as read."""
    notification = await service.mark_read(notification_id, current_user)
    return NotificationRead.model_validate(notification)


@router.delete("/clear/all", response_model=NotificationActionResult)
async def clear_notifications(
    service: NotificationsService = Depends(get_notifications_service),
    current_user=Depends(get_current_user),
) -> NotificationActionResult:
    """Delete all notifications of current user."""
    affected = await service.clear_all(current_user)
    return NotificationActionResult(message="All notifications deleted", affected=affected)


@router.delete("/{notification_id}", response_model=NotificationActionResult)
async def delete_notification(
    notification_id: UUID,
    service: NotificationsService = Depends(get_notifications_service),
    current_user=Depends(get_current_user),
) -> NotificationActionResult:
    """Delete one notification."""
    await service.delete_notification(notification_id, current_user)
    return NotificationActionResult(message="Notification deleted")
