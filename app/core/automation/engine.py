"""Automation engine for executing rules."""

import asyncio
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.automation.action_executor import ActionExecutor
from app.core.automation.condition_evaluator import ConditionEvaluator
from app.core.automation.exceptions import ActionError, LoggingPersistenceError
from app.core.automation.execution_logger import ExecutionLogger
from app.core.config_file import get_settings
from app.core.logging import log_automation_execution
from app.models.automation import (
    AutomationExecutionStatus,
    AutomationLog,
    AutomationRule,
    TriggerType,
)
from app.repositories.automation_repository import AutomationRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class ExecutionAttempt:
    """Mutable outcome of one rule execution attempt."""

    status: AutomationExecutionStatus | None = None
    action_result: Any = None
    error_message: str | None = None
    execution_time_ms: int = 0
    log: AutomationLog | None = None

    def skip(self) -> None:
        self.status = AutomationExecutionStatus.SKIPPED

    def succeed(self, action_result: Any) -> None:
        self.status = AutomationExecutionStatus.SUCCESS
        self.action_result = action_result

    def fail(self, error_message: str) -> None:
        self.status = AutomationExecutionStatus.FAILED
        self.action_result = None
        self.error_message = error_message


class AutomationEngine:
    """Engine for executing automation rules."""

    def __init__(
        self,
        repository: AutomationRepository,
        execution_logger: ExecutionLogger,
        condition_evaluator: ConditionEvaluator | None = None,
        action_executor: ActionExecutor | None = None,
        action_timeout: float | None = None,
    ):
        """Initialize automation engine.

        Args:
            repository: Rule store
            execution_logger: Writer for execution logs
            condition_evaluator: Condition evaluator (default: accept all)
            action_executor: Action executor (default: built-in handlers)
            action_timeout: Seconds an action may run before it fails (optional)
        """
        self.repository = repository
        self.execution_logger = execution_logger
        self.condition_evaluator = condition_evaluator or ConditionEvaluator()
        self.action_executor = action_executor or ActionExecutor()
        self.action_timeout = action_timeout

    async def execute_automations(
        self,
        trigger_type: TriggerType | str,
        trigger_data: dict[str, Any],
        user_id: UUID | str | None = None,
    ) -> None:
        """Run every active rule matching a trigger.

        Rules are attempted one after another in store order. Each attempt
        writes exactly one execution log; a failing rule never stops the
        remaining ones.

        Args:
            trigger_type: Trigger that fired
            trigger_data: Event payload (conventional keys: taskId, projectId)
            user_id: User who caused the event (optional)

        Raises:
            LoggingPersistenceError: If an execution log cannot be written
        """
        try:
            trigger = TriggerType(trigger_type)
        except ValueError:
            logger.warning(f"Ignoring unknown trigger type: {trigger_type}")
            return

        project_id, global_only = self._project_scope(trigger_data)
        rules = self.repository.find_active_rules_for_trigger(
            trigger, project_id=project_id, global_only=global_only
        )
        logger.debug(f"Trigger {trigger.value} matched {len(rules)} rule(s)")

        for rule in rules:
            await self.execute_rule(rule, trigger_data, user_id)

    async def execute_rule(
        self,
        rule: AutomationRule,
        trigger_data: dict[str, Any],
        user_id: UUID | str | None = None,
    ) -> AutomationLog:
        """Execute a rule for a given event.

        Args:
            rule: Rule to execute
            trigger_data: Triggering event payload
            user_id: User who caused the event (optional)

        Returns:
            AutomationLog written for this attempt
        """
        with self._execution_attempt(rule, trigger_data, user_id) as attempt:
            if not self.condition_evaluator.conditions_satisfied(rule, trigger_data):
                logger.debug(f"Conditions not met for rule {rule.id}")
                attempt.skip()
            else:
                result = await self._run_action(rule, trigger_data)

                rule.execution_count = (rule.execution_count or 0) + 1
                rule.last_executed_at = datetime.now(UTC)
                self.repository.save_rule(rule)

                attempt.succeed(result)

        return attempt.log

    @contextmanager
    def _execution_attempt(
        self,
        rule: AutomationRule,
        trigger_data: dict[str, Any],
        user_id: UUID | str | None,
    ) -> Iterator[ExecutionAttempt]:
        """Scope one attempt; its log row is written on every exit path."""
        attempt = ExecutionAttempt()
        rule_id, trigger_type = rule.id, rule.trigger_type
        started = time.perf_counter()
        try:
            yield attempt
        except LoggingPersistenceError:
            raise
        except Exception as e:
            if isinstance(e, SQLAlchemyError):
                self.repository.db.rollback()
            logger.error(
                f"Failed to execute rule {rule_id}: {e}",
                exc_info=not isinstance(e, ActionError),
            )
            attempt.fail(str(e) or e.__class__.__name__)
        finally:
            if attempt.status is None:
                attempt.fail("Execution interrupted")
            attempt.execution_time_ms = int((time.perf_counter() - started) * 1000)
            try:
                attempt.log = self.execution_logger.record(
                    rule,
                    attempt.status,
                    trigger_data,
                    action_result=attempt.action_result,
                    error_message=attempt.error_message,
                    execution_time_ms=attempt.execution_time_ms,
                    user_id=user_id,
                )
            except LoggingPersistenceError:
                logger.error(
                    f"Execution log lost for rule {rule_id} "
                    f"(status={attempt.status.value})",
                    exc_info=True,
                )
                raise
            log_automation_execution(
                rule_id,
                trigger_type,
                attempt.status.value,
                attempt.execution_time_ms,
                error_message=attempt.error_message,
                user_id=user_id,
            )

    async def _run_action(
        self, rule: AutomationRule, trigger_data: dict[str, Any]
    ) -> dict[str, Any]:
        execution = self.action_executor.execute(
            rule.action_type, rule.action_parameters, trigger_data
        )
        if self.action_timeout is None:
            return await execution
        try:
            return await asyncio.wait_for(execution, timeout=self.action_timeout)
        except TimeoutError as e:
            raise ActionError(
                f"Action {rule.action_type} timed out after {self.action_timeout}s"
            ) from e

    @staticmethod
    def _project_scope(trigger_data: dict[str, Any]) -> tuple[UUID | None, bool]:
        """Read the event's project scope.

        Returns:
            (project_id, global_only); an unparsable project ID can only
            match global rules
        """
        raw = trigger_data.get("projectId", trigger_data.get("project_id"))
        if raw is None or raw == "":
            return None, False
        if isinstance(raw, UUID):
            return raw, False
        try:
            return UUID(str(raw)), False
        except ValueError:
            logger.warning(f"Invalid project scope in trigger data: {raw}")
            return None, True


def create_automation_engine(db: Session) -> AutomationEngine:
    """Build an engine wired to the database session and settings."""
    settings = get_settings()
    repository = AutomationRepository(db)
    return AutomationEngine(
        repository=repository,
        execution_logger=ExecutionLogger(repository, UserRepository(db)),
        condition_evaluator=ConditionEvaluator(),
        action_executor=ActionExecutor(
            validate_parameters=settings.AUTOMATION_VALIDATE_ACTION_PARAMETERS
        ),
        action_timeout=settings.AUTOMATION_ACTION_TIMEOUT_SECONDS,
    )
