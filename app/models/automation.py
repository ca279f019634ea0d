"""Automation models for the rule-based automation engine."""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.core.db.session import Base


class TriggerType(str, Enum):
    """Domain events that can activate automation rules."""

    TASK_CREATED = "TASK_CREATED"
    TASK_COMPLETED = "TASK_COMPLETED"
    TASK_MOVED = "TASK_MOVED"
    TASK_ASSIGNED = "TASK_ASSIGNED"
    TASK_DUE_DATE = "TASK_DUE_DATE"
    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_COMPLETED = "PROJECT_COMPLETED"


class ActionType(str, Enum):
    """Side-effecting operations a rule can perform."""

    SEND_NOTIFICATION = "SEND_NOTIFICATION"
    ASSIGN_TASK = "ASSIGN_TASK"
    MOVE_TASK = "MOVE_TASK"
    CREATE_TASK = "CREATE_TASK"
    UPDATE_TASK_PRIORITY = "UPDATE_TASK_PRIORITY"
    SEND_EMAIL = "SEND_EMAIL"


class AutomationExecutionStatus(str, Enum):
    """Status of automation execution."""

    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"  # Condition not met


class AutomationRule(Base):
    """Automation rule owned by a user, optionally scoped to a project."""

    __tablename__ = "automation_rules"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    trigger_type = Column(String(50), nullable=False, index=True)
    trigger_conditions = Column(Text, nullable=True)  # JSON-encoded, opaque to storage
    action_type = Column(String(50), nullable=False)
    action_parameters = Column(Text, nullable=True)  # JSON-encoded, opaque to storage
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_by_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )  # NULL means global to its creator
    execution_count = Column(Integer, default=0, nullable=False)
    last_executed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    created_by = relationship("User", foreign_keys=[created_by_id])
    project = relationship("Project", foreign_keys=[project_id])
    logs = relationship(
        "AutomationLog", back_populates="automation", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_automation_rules_trigger_active", "trigger_type", "is_active"),
    )


class AutomationLog(Base):
    """One row per rule execution attempt."""

    __tablename__ = "automation_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    automation_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("automation_rules.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False, index=True)
    error_message = Column(Text, nullable=True)  # Only for FAILED
    trigger_data = Column(Text, nullable=True)  # Serialized event payload
    action_result = Column(Text, nullable=True)  # Serialized acknowledgement, only for SUCCESS
    related_task_id = Column(String(64), nullable=True, index=True)
    triggered_by_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    executed_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
    )
    execution_time_ms = Column(Integer, default=0, nullable=False)

    # Relationships
    automation = relationship("AutomationRule", back_populates="logs")
    triggered_by = relationship("User", foreign_keys=[triggered_by_id])

    __table_args__ = (
        Index("idx_automation_logs_automation_status", "automation_id", "status"),
    )
