#!/usr/bin/env python3
"""
Notification Service - records user-facing notifications.

emit() is fire-and-forget: it writes in its own transaction, after the
triggering operation has committed, and never raises. A failed emit is
logged and otherwise ignored, so it can never roll back or fail the
application / admission change that triggered it.

Usage:
    from notification.service import NotificationService

    service = NotificationService()
    service.emit(
        user_id="student123",
        content=NotificationMessageBuilder.application_submitted("Computer Science"),
        related_application_id="app456"
    )
"""

import logging
from typing import Any, Dict, List, Optional

from core.exceptions import NotFound
from database.models import utcnow
from database.store import to_document
from database.repositories import NotificationRepository
from database.uow import SessionFactory, store_uow
from notification.message_builder import NotificationContent

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        enabled: bool = True
    ):
        """
        Args:
            session_factory: Session factory for the store (defaults to SessionLocal).
            enabled: When False, emit() is a no-op (reads still work).
        """
        self.session_factory = session_factory
        self.enabled = enabled

    def emit(
        self,
        user_id: str,
        content: NotificationContent,
        related_application_id: Optional[str] = None
    ) -> Optional[str]:
        """
        Record a notification for a user.

        Returns:
            The notification id, or None if disabled or the write failed.
        """
        if not self.enabled:
            logger.debug(f"Notifications disabled, dropping '{content.type}' for {user_id}")
            return None

        try:
            with store_uow(self.session_factory) as store:
                notification = NotificationRepository(store).create({
                    'user_id': user_id,
                    'type': content.type,
                    'title': content.title,
                    'message': content.message,
                    'related_application_id': related_application_id,
                })
                notification_id = notification.id
            logger.info(f"Notification '{content.type}' recorded for user {user_id}")
            return notification_id
        except Exception as e:
            logger.error(f"Error creating notification for user {user_id}: {e}", exc_info=True)
            return None

    def list_for_user(self, user_id: str, notification_type: Optional[str] = None) -> List[Dict[str, Any]]:
        """Newest first; optionally only one notification type."""
        with store_uow(self.session_factory) as store:
            notifications = NotificationRepository(store).get_for_user(user_id, notification_type)
            return [to_document(n) for n in notifications]

    def unread_count(self, user_id: str) -> int:
        with store_uow(self.session_factory) as store:
            return len(NotificationRepository(store).get_unread(user_id))

    def mark_read(self, notification_id: str) -> None:
        with store_uow(self.session_factory) as store:
            notification = NotificationRepository(store).get(notification_id)
            if notification is None:
                raise NotFound(f"Notification {notification_id} not found")
            notification.read = True
            notification.read_at = utcnow()

    def mark_all_read(self, user_id: str) -> int:
        with store_uow(self.session_factory) as store:
            unread = NotificationRepository(store).get_unread(user_id)
            now = utcnow()
            for notification in unread:
                notification.read = True
                notification.read_at = now
            return len(unread)

    def delete(self, notification_id: str) -> None:
        with store_uow(self.session_factory) as store:
            repo = NotificationRepository(store)
            if repo.get(notification_id) is None:
                raise NotFound(f"Notification {notification_id} not found")
            repo.delete(notification_id)
