"""
Notification Module

In-app notifications for application and admission events. Writes are
best effort and happen after the triggering transaction has committed.

Usage:
    from notification import NotificationService, NotificationMessageBuilder

    service = NotificationService()
    service.emit(
        user_id='student123',
        content=NotificationMessageBuilder.admission_selected('Computer Science', declined_count=2),
        related_application_id='app456'
    )

    service.list_for_user('student123')
    service.mark_all_read('student123')
"""

from notification.message_builder import (
    NotificationContent,
    NotificationMessageBuilder,
    APPLICATION_SUBMITTED,
    APPLICATION_UPDATE,
    ADMISSION_SELECTED,
    JOB_APPLICATION_SUBMITTED,
    JOB_APPLICATION_UPDATE,
)

from notification.service import NotificationService

__all__ = [
    'NotificationService',
    'NotificationContent',
    'NotificationMessageBuilder',
    'APPLICATION_SUBMITTED',
    'APPLICATION_UPDATE',
    'ADMISSION_SELECTED',
    'JOB_APPLICATION_SUBMITTED',
    'JOB_APPLICATION_UPDATE',
]
