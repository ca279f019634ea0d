"""Notification repository for data access operations."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.models.notification import Notification


class NotificationRepository:
    """Repository for in-app notifications."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    def create_notification(self, notification_data: dict) -> Notification:
        """Create a new notification."""
        notification = Notification(**notification_data)
        self.db.add(notification)
        self.db.commit()
        self.db.refresh(notification)
        return notification

    def get_notifications_by_recipient(
        self, recipient_id: UUID, unread_only: bool = False
    ) -> list[Notification]:
        """Get notifications of a user, newest first."""
        query = self.db.query(Notification).filter(
            Notification.recipient_id == recipient_id
        )
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return query.order_by(Notification.created_at.desc()).all()
