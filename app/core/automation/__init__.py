"""Automation module for rule-based automation engine.

The engine and the rule service live in ``app.core.automation.engine`` and
``app.core.automation.service``; they depend on the repositories, which in
turn import the exceptions defined here.
"""

from app.core.automation.action_executor import ActionExecutor
from app.core.automation.condition_evaluator import (
    ConditionEvaluator,
    accept_all,
    field_match_predicate,
)
from app.core.automation.exceptions import (
    ActionError,
    AutomationError,
    AutomationPermissionError,
    ConditionDeserializationError,
    InvalidRuleDefinitionError,
    LoggingPersistenceError,
    NotFoundError,
    ProjectNotFoundError,
    RuleNotFoundError,
    TaskNotFoundError,
    UserNotFoundError,
)
from app.core.automation.rule_parser import RuleParser

__all__ = [
    "ActionError",
    "ActionExecutor",
    "AutomationError",
    "AutomationPermissionError",
    "ConditionDeserializationError",
    "ConditionEvaluator",
    "InvalidRuleDefinitionError",
    "LoggingPersistenceError",
    "NotFoundError",
    "ProjectNotFoundError",
    "RuleNotFoundError",
    "RuleParser",
    "TaskNotFoundError",
    "UserNotFoundError",
    "accept_all",
    "field_match_predicate",
]
