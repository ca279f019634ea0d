"""Unit tests for API exception helpers."""

from uuid import uuid4

import pytest

from app.core.automation.exceptions import (
    ActionError,
    AutomationPermissionError,
    InvalidRuleDefinitionError,
    LoggingPersistenceError,
    ProjectNotFoundError,
    RuleNotFoundError,
    TaskNotFoundError,
)
from app.core.exceptions import (
    APIException,
    api_exception_from_domain,
    raise_unauthorized,
    status_for_domain_error,
)


@pytest.mark.parametrize(
    "error,expected_status",
    [
        (RuleNotFoundError(uuid4()), 404),
        (ProjectNotFoundError(uuid4()), 404),
        (TaskNotFoundError(), 404),
        (AutomationPermissionError("not yours"), 403),
        (InvalidRuleDefinitionError("bad conditions"), 400),
        (ActionError("unsupported"), 500),
        (LoggingPersistenceError("disk full"), 500),
    ],
)
def test_status_for_domain_error(error, expected_status):
    assert status_for_domain_error(error) == expected_status


def test_api_exception_from_domain_keeps_code_and_details():
    rule_id = uuid4()

    exc = api_exception_from_domain(RuleNotFoundError(rule_id))

    assert isinstance(exc, APIException)
    assert exc.status_code == 404
    assert exc.code == "AUTOMATION_RULE_NOT_FOUND"
    assert exc.message == f"Automation rule not found (ID: {rule_id})"
    assert exc.details == {"id": str(rule_id)}


def test_raise_unauthorized():
    with pytest.raises(APIException) as exc_info:
        raise_unauthorized("AUTH_INVALID_TOKEN", "Invalid or expired token")

    assert exc_info.value.status_code == 401
    assert exc_info.value.code == "AUTH_INVALID_TOKEN"
    assert exc_info.value.details is None
