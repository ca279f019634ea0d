"""Domain exceptions for the automation engine and rule management."""

from typing import Any


class AutomationError(Exception):
    """Base class for automation errors."""

    code = "AUTOMATION_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AutomationError):
    """A referenced rule, user, project or task does not exist."""

    code = "NOT_FOUND"
    resource = "Resource"

    def __init__(self, resource_id: Any | None = None) -> None:
        message = f"{self.resource} not found"
        if resource_id is not None:
            message += f" (ID: {resource_id})"
        super().__init__(message, {"id": str(resource_id)} if resource_id else None)
        self.resource_id = resource_id


class RuleNotFoundError(NotFoundError):
    code = "AUTOMATION_RULE_NOT_FOUND"
    resource = "Automation rule"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    resource = "User"


class ProjectNotFoundError(NotFoundError):
    code = "PROJECT_NOT_FOUND"
    resource = "Project"


class TaskNotFoundError(NotFoundError):
    code = "TASK_NOT_FOUND"
    resource = "Task"


class AutomationPermissionError(AutomationError):
    """Caller does not own the rule, or lacks permission on the rule's project."""

    code = "AUTOMATION_FORBIDDEN"


class InvalidRuleDefinitionError(AutomationError):
    """Conditions or action parameters were rejected at rule creation/update."""

    code = "INVALID_RULE_DEFINITION"


class ActionError(AutomationError):
    """An action could not be executed.

    Raised for unknown action types, malformed parameters and failed action
    preconditions. The engine turns it into a FAILED execution log.
    """

    code = "AUTOMATION_ACTION_FAILED"


class ConditionDeserializationError(AutomationError):
    """Stored condition data could not be decoded."""

    code = "AUTOMATION_CONDITIONS_MALFORMED"


class LoggingPersistenceError(AutomationError):
    """The execution log row itself could not be written."""

    code = "AUTOMATION_LOG_PERSISTENCE_FAILED"
