"""Automation service for rule management."""

import logging
from typing import Any
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.automation.exceptions import (
    ActionError,
    AutomationPermissionError,
    ConditionDeserializationError,
    InvalidRuleDefinitionError,
    ProjectNotFoundError,
    UserNotFoundError,
)
from app.core.automation.rule_parser import RuleParser
from app.core.config_file import get_settings
from app.models.automation import ActionType, AutomationLog, AutomationRule
from app.repositories.automation_repository import AutomationRepository
from app.repositories.project_repository import ProjectRepository
from app.repositories.user_repository import UserRepository
from app.schemas.automation import ACTION_PARAMETER_SCHEMAS

logger = logging.getLogger(__name__)


class AutomationService:
    """Service for automation rule management.

    Only the creator of a rule may read, change, toggle or delete it, or see
    its execution logs.
    """

    # Rule columns an update may change but never clear
    REQUIRED_FIELDS = ("name", "trigger_type", "action_type", "is_active")

    def __init__(self, db: Session):
        """Initialize service with database session."""
        self.db = db
        self.repository = AutomationRepository(db)
        self.user_repository = UserRepository(db)
        self.project_repository = ProjectRepository(db)

    def create_rule(self, rule_data: dict[str, Any], user_id: UUID) -> AutomationRule:
        """Create a new automation rule.

        Args:
            rule_data: Rule fields (name, description, trigger_type,
                trigger_conditions, action_type, action_parameters, is_active,
                project_id)
            user_id: Creating user

        Returns:
            Created rule

        Raises:
            UserNotFoundError: If the user does not exist
            ProjectNotFoundError: If the project does not exist
            AutomationPermissionError: If the user does not own the project
            InvalidRuleDefinitionError: If conditions or parameters are invalid
        """
        user = self.user_repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        project_id = rule_data.get("project_id")
        if project_id:
            project = self.project_repository.get_project_by_id(project_id, with_owner=True)
            if not project:
                raise ProjectNotFoundError(project_id)
            if project.owner_id and project.owner_id != user_id:
                raise AutomationPermissionError(
                    "You do not have permission to create automations in this project",
                    {"project_id": str(project_id)},
                )

        action_type = ActionType(rule_data["action_type"])
        rule = self.repository.create_rule(
            {
                "name": rule_data["name"],
                "description": rule_data.get("description"),
                "trigger_type": getattr(rule_data["trigger_type"], "value", rule_data["trigger_type"]),
                "trigger_conditions": self._prepare_conditions(
                    rule_data.get("trigger_conditions")
                ),
                "action_type": action_type.value,
                "action_parameters": self._prepare_parameters(
                    action_type, rule_data.get("action_parameters")
                ),
                "is_active": rule_data.get("is_active", True),
                "created_by_id": user.id,
                "project_id": project_id,
            }
        )

        logger.info(f"Created automation rule '{rule.name}' (ID: {rule.id}) for user {user_id}")
        return rule

    def list_rules(self, user_id: UUID, project_id: UUID | None = None) -> list[AutomationRule]:
        """List the user's rules, optionally for a single project."""
        return self.repository.get_rules_by_owner(user_id, project_id)

    def get_rule(self, rule_id: UUID, user_id: UUID) -> AutomationRule:
        """Get a rule owned by the user.

        Raises:
            RuleNotFoundError: If the rule does not exist
            AutomationPermissionError: If the user is not the owner
        """
        return self.repository.get_rule_owned_by(rule_id, user_id)

    def update_rule(
        self, rule_id: UUID, rule_data: dict[str, Any], user_id: UUID
    ) -> AutomationRule:
        """Update a rule owned by the user.

        Only keys present in ``rule_data`` are changed.

        Raises:
            RuleNotFoundError: If the rule does not exist
            AutomationPermissionError: If the user is not the owner
            InvalidRuleDefinitionError: If conditions or parameters are invalid,
                or a required field is set to null
        """
        rule = self.repository.get_rule_owned_by(rule_id, user_id)

        null_fields = sorted(
            key for key in self.REQUIRED_FIELDS if key in rule_data and rule_data[key] is None
        )
        if null_fields:
            raise InvalidRuleDefinitionError(
                f"Fields cannot be null: {', '.join(null_fields)}",
                {"fields": null_fields},
            )

        update_data: dict[str, Any] = {}
        for key in ("name", "description", "is_active"):
            if key in rule_data:
                update_data[key] = rule_data[key]
        if "trigger_type" in rule_data:
            update_data["trigger_type"] = getattr(
                rule_data["trigger_type"], "value", rule_data["trigger_type"]
            )
        if "trigger_conditions" in rule_data:
            update_data["trigger_conditions"] = self._prepare_conditions(
                rule_data["trigger_conditions"]
            )
        if "action_type" in rule_data or "action_parameters" in rule_data:
            action_type = ActionType(rule_data.get("action_type") or rule.action_type)
            parameters = rule_data.get("action_parameters", rule.action_parameters)
            update_data["action_type"] = action_type.value
            update_data["action_parameters"] = self._prepare_parameters(
                action_type, parameters
            )

        updated_rule = self.repository.update_rule(rule, update_data)
        logger.info(f"Updated automation rule {rule_id} for user {user_id}")
        return updated_rule

    def remove_rule(self, rule_id: UUID, user_id: UUID) -> None:
        """Delete a rule owned by the user."""
        rule = self.repository.get_rule_owned_by(rule_id, user_id)
        self.repository.delete_rule(rule)
        logger.info(f"Deleted automation rule {rule_id} for user {user_id}")

    def toggle_active(self, rule_id: UUID, user_id: UUID) -> AutomationRule:
        """Flip the active flag of a rule owned by the user."""
        rule = self.repository.get_rule_owned_by(rule_id, user_id)
        rule.is_active = not rule.is_active
        rule = self.repository.save_rule(rule)
        logger.info(f"Automation rule {rule_id} is now {'active' if rule.is_active else 'inactive'}")
        return rule

    def get_execution_logs(
        self, rule_id: UUID, user_id: UUID, limit: int | None = None
    ) -> list[AutomationLog]:
        """Get the most recent execution logs of a rule owned by the user."""
        self.repository.get_rule_owned_by(rule_id, user_id)
        max_logs = get_settings().AUTOMATION_LOG_LIMIT
        limit = min(limit, max_logs) if limit else max_logs
        return self.repository.get_logs_by_rule(rule_id, limit)

    @staticmethod
    def _prepare_conditions(conditions: Any) -> str | None:
        try:
            decoded = RuleParser.parse_conditions(conditions)
        except ConditionDeserializationError as e:
            raise InvalidRuleDefinitionError(e.message) from e
        if decoded is None:
            return None
        if not isinstance(decoded, (dict, list)):
            raise InvalidRuleDefinitionError(
                "Trigger conditions must be a JSON object or array"
            )
        return RuleParser.serialize(conditions)

    @staticmethod
    def _prepare_parameters(action_type: ActionType, parameters: Any) -> str | None:
        try:
            decoded = RuleParser.parse_parameters(parameters)
        except ActionError as e:
            raise InvalidRuleDefinitionError(e.message) from e

        schema = ACTION_PARAMETER_SCHEMAS[action_type]
        try:
            schema.model_validate(decoded)
        except ValidationError as e:
            raise InvalidRuleDefinitionError(
                f"Invalid parameters for {action_type.value}",
                {"errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ]},
            ) from e

        if parameters is None or parameters == "":
            return None
        return RuleParser.serialize(parameters)
