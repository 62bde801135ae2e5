from sqlalchemy import Column, Text, String, Boolean, TIMESTAMP, Index

from .base import Base, utcnow, new_id


class Notification(Base):
    """
    A user-facing notification.

    Created by the core as a side effect of application events; delivery
    to the user (email, push, ...) is handled elsewhere.
    """
    __tablename__ = 'notifications'

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False)

    type = Column(Text, nullable=False)  # application_submitted, application_update, admission_selected, ...
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    related_application_id = Column(String(36), nullable=True)

    read = Column(Boolean, nullable=False, default=False)
    read_at = Column(TIMESTAMP(timezone=True))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index('idx_notification_user', 'user_id', 'created_at'),
        Index('idx_notification_user_read', 'user_id', 'read'),
    )
