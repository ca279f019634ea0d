"""Notification service for sending in-app notifications."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.notification import Notification, NotificationType
from app.repositories.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for managing notifications."""

    def __init__(self, db: Session):
        """Initialize service with database session."""
        self.db = db
        self.repository = NotificationRepository(db)

    async def send_notification(
        self,
        recipient_id: UUID,
        notification_type: NotificationType,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> Notification:
        """Send a notification to a user.

        Args:
            recipient_id: User ID to send notification to
            notification_type: Notification category
            message: Notification text
            context: Related entity as ``{"id": ..., "type": ...}`` (optional)

        Returns:
            Stored notification
        """
        context = context or {}
        notification = self.repository.create_notification(
            {
                "recipient_id": recipient_id,
                "type": NotificationType(notification_type).value,
                "message": message,
                "context_id": str(context["id"]) if context.get("id") else None,
                "context_type": context.get("type"),
            }
        )
        logger.info(
            f"Notification {notification.id} ({notification.type}) sent to user {recipient_id}"
        )
        return notification

    def get_notifications(self, user_id: UUID, unread_only: bool = False) -> list[Notification]:
        """Get a user's notifications, newest first."""
        return self.repository.get_notifications_by_recipient(user_id, unread_only)
