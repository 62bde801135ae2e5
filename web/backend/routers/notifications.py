#!/usr/bin/env python3
"""
Notification endpoints - list and manage a user's notifications.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from notification import NotificationService
from ..dependencies import get_notification_service
from ..models.responses import ActionResponse, NotificationItem, UnreadCountResponse

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/users/{user_id}", response_model=List[NotificationItem])
def list_notifications(
    user_id: str,
    type: Optional[str] = Query(None, description="Only this notification type"),
    service: NotificationService = Depends(get_notification_service)
):
    """Notifications for a user, newest first."""
    return service.list_for_user(user_id, type)


@router.get("/users/{user_id}/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    user_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    return UnreadCountResponse(user_id=user_id, unread=service.unread_count(user_id))


@router.post("/users/{user_id}/read-all", response_model=ActionResponse)
def mark_all_read(
    user_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    count = service.mark_all_read(user_id)
    return ActionResponse(
        success=True,
        message=f"Marked {count} notification(s) as read",
        details={"count": count}
    )


@router.post("/{notification_id}/read", response_model=ActionResponse)
def mark_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    service.mark_read(notification_id)
    return ActionResponse(success=True, message="Notification marked as read")


@router.delete("/{notification_id}", response_model=ActionResponse)
def delete_notification(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service)
):
    service.delete(notification_id)
    return ActionResponse(success=True, message="Notification deleted")
