"""Project and task repository for data access operations."""

from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from app.models.project import Project
from app.models.task import Task


class ProjectRepository:
    """Repository for projects and the tasks they contain."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    def get_project_by_id(self, project_id: UUID, with_owner: bool = False) -> Project | None:
        """Get project by ID, optionally eager-loading its owner."""
        query = self.db.query(Project)
        if with_owner:
            query = query.options(joinedload(Project.owner))
        return query.filter(Project.id == project_id).first()

    def get_task_by_id(self, task_id: UUID) -> Task | None:
        """Get task with its assignee and project owner loaded."""
        return (
            self.db.query(Task)
            .options(
                joinedload(Task.assignee),
                joinedload(Task.project).joinedload(Project.owner),
            )
            .filter(Task.id == task_id)
            .first()
        )
