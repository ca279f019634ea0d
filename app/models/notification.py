"""Notification models for in-app notifications."""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text, Uuid

from app.core.db.session import Base


class NotificationType(str, Enum):
    """Notification categories."""

    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_COMPLETED = "TASK_COMPLETED"
    TASK_MOVED = "TASK_MOVED"
    TASK_COMMENT = "TASK_COMMENT"
    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_UPDATED = "PROJECT_UPDATED"
    DEADLINE_APPROACHING = "DEADLINE_APPROACHING"
    SYSTEM = "SYSTEM"


class Notification(Base):
    """Notification delivered to a user's in-app inbox."""

    __tablename__ = "notifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    recipient_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    context_id = Column(String(64), nullable=True)  # e.g. task ID
    context_type = Column(String(50), nullable=True)  # e.g. 'task'
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_notifications_recipient_read", "recipient_id", "is_read"),
    )
