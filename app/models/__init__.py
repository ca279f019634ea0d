from app.core.db.session import Base
from app.models.automation import (
    ActionType,
    AutomationExecutionStatus,
    AutomationLog,
    AutomationRule,
    TriggerType,
)
from app.models.comment import Comment
from app.models.notification import Notification, NotificationType
from app.models.project import Project, Section
from app.models.task import Task
from app.models.user import User

__all__ = [
    "ActionType",
    "AutomationExecutionStatus",
    "AutomationLog",
    "AutomationRule",
    "Base",
    "Comment",
    "Notification",
    "NotificationType",
    "Project",
    "Section",
    "Task",
    "TriggerType",
    "User",
]
