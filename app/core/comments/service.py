"""Comment service with task comment notification fan-out."""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.automation.exceptions import TaskNotFoundError
from app.core.notifications.service import NotificationService
from app.models.comment import Comment
from app.models.notification import NotificationType
from app.models.task import Task
from app.models.user import User
from app.repositories.comment_repository import CommentRepository
from app.repositories.project_repository import ProjectRepository

logger = logging.getLogger(__name__)


def comment_notification_recipients(
    author_id: UUID,
    assignee_id: UUID | None,
    owner_id: UUID | None,
) -> list[UUID]:
    """Users to notify about a new comment.

    The task assignee comes first, then the project owner. The author is
    never notified and nobody is notified twice.

    Args:
        author_id: Comment author
        assignee_id: Current task assignee (optional)
        owner_id: Owner of the task's project (optional)

    Returns:
        Distinct recipient IDs
    """
    recipients: list[UUID] = []
    for candidate in (assignee_id, owner_id):
        if candidate and candidate != author_id and candidate not in recipients:
            recipients.append(candidate)
    return recipients


class CommentService:
    """Service for managing task comments."""

    def __init__(
        self,
        db: Session,
        notification_service: NotificationService | None = None,
    ):
        """Initialize comment service.

        Args:
            db: Database session
            notification_service: NotificationService instance
        """
        self.db = db
        self.repository = CommentRepository(db)
        self.project_repository = ProjectRepository(db)
        self.notification_service = notification_service or NotificationService(db)

    async def create_comment(self, task_id: UUID, content: str, author: User) -> Comment:
        """Create a comment and notify the task's assignee and project owner.

        Args:
            task_id: Commented task
            content: Comment text
            author: Comment author

        Returns:
            Created Comment

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        task = self.project_repository.get_task_by_id(task_id)
        if not task:
            raise TaskNotFoundError(task_id)

        comment = self.repository.create_comment(
            {"content": content, "task_id": task.id, "author_id": author.id}
        )

        await self.notify_comment_created(task, author)
        return comment

    async def notify_comment_created(self, task: Task, author: User) -> int:
        """Send one TASK_COMMENT notification per distinct recipient.

        Returns:
            Number of notifications sent
        """
        owner_id = task.project.owner_id if task.project else None
        recipients = comment_notification_recipients(author.id, task.assignee_id, owner_id)

        message = f'{author.name} commented on task "{task.title}"'
        for recipient_id in recipients:
            await self.notification_service.send_notification(
                recipient_id,
                NotificationType.TASK_COMMENT,
                message,
                {"id": task.id, "type": "task"},
            )

        logger.debug(f"Comment on task {task.id} notified {len(recipients)} user(s)")
        return len(recipients)

    def get_comments(self, task_id: UUID) -> list[Comment]:
        """Get comments of a task, oldest first."""
        return self.repository.get_comments_by_task(task_id)
