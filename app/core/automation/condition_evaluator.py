"""Condition evaluator for automation rules."""

import logging
from collections.abc import Callable
from typing import Any

from app.core.automation.exceptions import ConditionDeserializationError
from app.core.automation.rule_parser import RuleParser
from app.models.automation import AutomationRule

logger = logging.getLogger(__name__)

ConditionPredicate = Callable[[Any, dict[str, Any]], bool]


def accept_all(conditions: Any, trigger_data: dict[str, Any]) -> bool:
    """Default predicate: any decodable condition set is satisfied."""
    return True


def field_match_predicate(conditions: Any, trigger_data: dict[str, Any]) -> bool:
    """Opt-in predicate matching payload fields.

    Accepts either a mapping of ``{field: expected_value}`` (equality) or a
    list of ``{"field", "operator", "value"}`` dictionaries. Field paths are
    dot-separated. Every condition must hold.
    """
    if isinstance(conditions, dict):
        conditions = [
            {"field": field, "operator": "==", "value": value}
            for field, value in conditions.items()
        ]
    if not isinstance(conditions, list):
        return False

    for condition in conditions:
        if not isinstance(condition, dict):
            return False
        if not _evaluate_condition(condition, trigger_data):
            return False
    return True


def _evaluate_condition(condition: dict[str, Any], trigger_data: dict[str, Any]) -> bool:
    operator = condition.get("operator", "==")
    expected_value = condition.get("value")
    actual_value = _get_field_value(trigger_data, condition.get("field", ""))

    try:
        if operator == "==":
            return actual_value == expected_value
        elif operator == "!=":
            return actual_value != expected_value
        elif operator == ">":
            return actual_value > expected_value
        elif operator == "<":
            return actual_value < expected_value
        elif operator == ">=":
            return actual_value >= expected_value
        elif operator == "<=":
            return actual_value <= expected_value
        elif operator == "in":
            return (
                actual_value in expected_value
                if isinstance(expected_value, (list, tuple))
                else False
            )
        elif operator == "contains":
            if isinstance(actual_value, str) and isinstance(expected_value, str):
                return expected_value in actual_value
            if isinstance(actual_value, (list, tuple)):
                return expected_value in actual_value
            return False
        else:
            logger.warning(f"Unknown operator: {operator}")
            return False
    except TypeError as e:
        logger.warning(f"Error evaluating condition {condition}: {e}")
        return False


def _get_field_value(trigger_data: dict[str, Any], field_path: str) -> Any:
    if not field_path:
        return None

    value: Any = trigger_data
    for part in field_path.split("."):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return None
    return value


class ConditionEvaluator:
    """Decide whether a rule's trigger conditions hold for an event."""

    def __init__(self, predicate: ConditionPredicate | None = None):
        """Initialize condition evaluator.

        Args:
            predicate: Matching strategy applied to decoded conditions
                (defaults to accepting every decodable condition set)
        """
        self.predicate = predicate or accept_all

    def conditions_satisfied(
        self, rule: AutomationRule, trigger_data: dict[str, Any]
    ) -> bool:
        """Evaluate a rule's conditions against an event payload.

        Args:
            rule: Rule whose conditions are checked
            trigger_data: Event payload

        Returns:
            True if the rule has no conditions or they are met, False if they
            are not met or cannot be decoded
        """
        return self.evaluate(rule.trigger_conditions, trigger_data)

    def evaluate(self, conditions_blob: Any, trigger_data: dict[str, Any]) -> bool:
        """Evaluate a raw conditions blob against an event payload."""
        if conditions_blob is None:
            return True

        try:
            conditions = RuleParser.parse_conditions(conditions_blob)
        except ConditionDeserializationError as e:
            logger.warning(f"Treating malformed conditions as unsatisfied: {e}")
            return False

        if conditions is None:
            return True

        return self.predicate(conditions, trigger_data)
