"""Execution logger writing one audit row per rule execution attempt."""

import json
import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from app.core.automation.exceptions import LoggingPersistenceError
from app.models.automation import AutomationExecutionStatus, AutomationLog, AutomationRule
from app.repositories.automation_repository import AutomationRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def serialize_payload(value: Any) -> str | None:
    """Serialize a payload or action result to stored text.

    Values JSON cannot encode (e.g. mappings with non-string keys) are
    stored as ``{"unserializable": repr(value)}``.
    """
    if value is None:
        return None
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError) as e:
        logger.warning(f"Storing unserializable payload as repr: {e}")
        return json.dumps({"unserializable": repr(value)})


def extract_related_task_id(trigger_data: dict[str, Any]) -> str | None:
    """Get the correlated task ID from an event payload, if any."""
    task_id = trigger_data.get("taskId", trigger_data.get("task_id"))
    return str(task_id) if task_id is not None else None


class ExecutionLogger:
    """Persist execution outcomes of automation rules."""

    def __init__(
        self,
        repository: AutomationRepository,
        user_repository: UserRepository,
    ):
        """Initialize execution logger.

        Args:
            repository: Automation repository used to insert log rows
            user_repository: User lookup for the causing user
        """
        self.repository = repository
        self.user_repository = user_repository

    def record(
        self,
        rule: AutomationRule,
        status: AutomationExecutionStatus,
        trigger_data: dict[str, Any],
        action_result: Any = None,
        error_message: str | None = None,
        execution_time_ms: int = 0,
        user_id: UUID | str | None = None,
    ) -> AutomationLog:
        """Record one execution attempt.

        Args:
            rule: Rule that was attempted
            status: Outcome of the attempt
            trigger_data: Event payload that caused the attempt
            action_result: Action acknowledgement (SUCCESS only)
            error_message: Failure message (FAILED only)
            execution_time_ms: Duration of the attempt
            user_id: User who caused the trigger (optional)

        Returns:
            Created AutomationLog

        Raises:
            LoggingPersistenceError: If the row cannot be written
        """
        try:
            triggered_by_id = self._resolve_user_id(user_id)
            return self.repository.create_log(
                {
                    "automation_id": rule.id,
                    "status": AutomationExecutionStatus(status).value,
                    "trigger_data": serialize_payload(trigger_data),
                    "action_result": serialize_payload(action_result),
                    "error_message": error_message,
                    "related_task_id": extract_related_task_id(trigger_data),
                    "triggered_by_id": triggered_by_id,
                    "execution_time_ms": execution_time_ms,
                }
            )
        except SQLAlchemyError as e:
            self.repository.db.rollback()
            raise LoggingPersistenceError(
                f"Failed to write execution log for rule {rule.id}: {e}",
                {"rule_id": str(rule.id), "status": str(status)},
            ) from e

    def _resolve_user_id(self, user_id: UUID | str | None) -> UUID | None:
        if not user_id:
            return None
        try:
            user = self.user_repository.get_by_id(
                user_id if isinstance(user_id, UUID) else UUID(str(user_id))
            )
        except ValueError:
            logger.debug(f"Ignoring invalid triggering user ID: {user_id}")
            return None
        return user.id if user else None
