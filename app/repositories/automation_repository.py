"""Automation repository for data access operations."""

from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.automation.exceptions import AutomationPermissionError, RuleNotFoundError
from app.models.automation import AutomationLog, AutomationRule, TriggerType


class AutomationRepository:
    """Repository for automation rules and their execution logs."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    # Rule operations
    def create_rule(self, rule_data: dict) -> AutomationRule:
        """Create a new rule."""
        rule = AutomationRule(**rule_data)
        self.db.add(rule)
        self.db.commit()
        self.db.refresh(rule)
        return rule

    def get_rule_by_id(self, rule_id: UUID) -> AutomationRule | None:
        """Get rule by ID."""
        return self.db.query(AutomationRule).filter(AutomationRule.id == rule_id).first()

    def get_rule_owned_by(self, rule_id: UUID, user_id: UUID) -> AutomationRule:
        """Get a rule that must belong to the given user.

        Raises:
            RuleNotFoundError: If the rule does not exist.
            AutomationPermissionError: If the rule belongs to someone else.
        """
        rule = self.get_rule_by_id(rule_id)
        if not rule:
            raise RuleNotFoundError(rule_id)
        if rule.created_by_id != user_id:
            raise AutomationPermissionError(
                "You do not have permission to access this automation rule",
                {"rule_id": str(rule_id)},
            )
        return rule

    def get_rules_by_owner(
        self, user_id: UUID, project_id: UUID | None = None
    ) -> list[AutomationRule]:
        """Get rules created by a user, optionally restricted to one project."""
        query = self.db.query(AutomationRule).filter(
            AutomationRule.created_by_id == user_id
        )
        if project_id:
            query = query.filter(AutomationRule.project_id == project_id)
        return query.order_by(AutomationRule.created_at, AutomationRule.id).all()

    def find_active_rules_for_trigger(
        self,
        trigger_type: TriggerType,
        project_id: UUID | None = None,
        global_only: bool = False,
    ) -> list[AutomationRule]:
        """Get active rules listening to a trigger, in creation order.

        Args:
            trigger_type: Trigger that fired
            project_id: Project scope of the event; matches rules of that
                project and global rules
            global_only: Only match rules without a project

        Returns:
            Matching rules
        """
        query = self.db.query(AutomationRule).filter(
            AutomationRule.trigger_type == TriggerType(trigger_type).value,
            AutomationRule.is_active.is_(True),
        )
        if global_only:
            query = query.filter(AutomationRule.project_id.is_(None))
        elif project_id:
            query = query.filter(
                or_(
                    AutomationRule.project_id == project_id,
                    AutomationRule.project_id.is_(None),
                )
            )
        return query.order_by(AutomationRule.created_at, AutomationRule.id).all()

    def save_rule(self, rule: AutomationRule) -> AutomationRule:
        """Persist changes made to a rule."""
        self.db.add(rule)
        self.db.commit()
        self.db.refresh(rule)
        return rule

    def update_rule(self, rule: AutomationRule, rule_data: dict) -> AutomationRule:
        """Update a rule."""
        for key, value in rule_data.items():
            setattr(rule, key, value)
        return self.save_rule(rule)

    def delete_rule(self, rule: AutomationRule) -> None:
        """Delete a rule and its execution logs."""
        self.db.delete(rule)
        self.db.commit()

    # AutomationLog operations
    def create_log(self, log_data: dict) -> AutomationLog:
        """Create a new execution log record."""
        log = AutomationLog(**log_data)
        self.db.add(log)
        self.db.commit()
        self.db.refresh(log)
        return log

    def get_logs_by_rule(self, rule_id: UUID, limit: int = 50) -> list[AutomationLog]:
        """Get the most recent execution logs for a rule."""
        return (
            self.db.query(AutomationLog)
            .filter(AutomationLog.automation_id == rule_id)
            .order_by(AutomationLog.executed_at.desc(), AutomationLog.id)
            .limit(limit)
            .all()
        )

    def count_logs_by_rule(self, rule_id: UUID) -> int:
        """Count all execution logs for a rule."""
        return (
            self.db.query(func.count(AutomationLog.id))
            .filter(AutomationLog.automation_id == rule_id)
            .scalar()
            or 0
        )
