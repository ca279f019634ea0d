"""Comment repository for data access operations."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.models.comment import Comment


class CommentRepository:
    """Repository for comment data access."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    def create_comment(self, comment_data: dict) -> Comment:
        """Create a new comment."""
        comment = Comment(**comment_data)
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def get_comments_by_task(self, task_id: UUID) -> list[Comment]:
        """Get comments of a task, oldest first."""
        return (
            self.db.query(Comment)
            .filter(Comment.task_id == task_id)
            .order_by(Comment.created_at.asc())
            .all()
        )
