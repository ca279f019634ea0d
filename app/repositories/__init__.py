"""Repositories for data access operations."""

from app.repositories.automation_repository import AutomationRepository
from app.repositories.comment_repository import CommentRepository
from app.repositories.notification_repository import NotificationRepository
from app.repositories.project_repository import ProjectRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "AutomationRepository",
    "CommentRepository",
    "NotificationRepository",
    "ProjectRepository",
    "UserRepository",
]
