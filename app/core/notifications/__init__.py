"""Notifications module for in-app notifications."""

from app.core.notifications.service import NotificationService

__all__ = [
    "NotificationService",
]
