"""Integration tests for AutomationService."""

import json
from uuid import uuid4

import pytest

from app.core.automation.engine import create_automation_engine
from app.core.automation.exceptions import (
    AutomationPermissionError,
    InvalidRuleDefinitionError,
    ProjectNotFoundError,
    RuleNotFoundError,
    UserNotFoundError,
)
from app.core.automation.service import AutomationService
from app.models.automation import AutomationLog


@pytest.fixture
def automation_service(db_session):
    """Create AutomationService instance."""
    return AutomationService(db_session)


@pytest.fixture
def rule_data():
    return {
        "name": "Notify on move",
        "description": "Tell the team when a card moves",
        "trigger_type": "TASK_MOVED",
        "trigger_conditions": None,
        "action_type": "SEND_NOTIFICATION",
        "action_parameters": {"message": "A task was moved"},
    }


@pytest.fixture
def test_rule(automation_service, rule_data, test_user):
    return automation_service.create_rule(rule_data, test_user.id)


def test_create_rule(automation_service, rule_data, test_user):
    rule = automation_service.create_rule(rule_data, test_user.id)

    assert rule.id is not None
    assert rule.trigger_type == "TASK_MOVED"
    assert rule.action_type == "SEND_NOTIFICATION"
    assert json.loads(rule.action_parameters) == {"message": "A task was moved"}
    assert rule.is_active is True
    assert rule.created_by_id == test_user.id
    assert rule.project_id is None
    assert rule.execution_count == 0
    assert rule.last_executed_at is None


def test_create_rule_in_own_project(automation_service, rule_data, test_user, test_project):
    rule = automation_service.create_rule({**rule_data, "project_id": test_project.id}, test_user.id)
    assert rule.project_id == test_project.id


def test_create_rule_in_foreign_project_forbidden(
    automation_service, rule_data, other_user, test_project
):
    with pytest.raises(AutomationPermissionError):
        automation_service.create_rule({**rule_data, "project_id": test_project.id}, other_user.id)


def test_create_rule_unknown_project(automation_service, rule_data, test_user):
    with pytest.raises(ProjectNotFoundError):
        automation_service.create_rule({**rule_data, "project_id": uuid4()}, test_user.id)


def test_create_rule_unknown_user(automation_service, rule_data):
    with pytest.raises(UserNotFoundError):
        automation_service.create_rule(rule_data, uuid4())


def test_create_rule_rejects_missing_required_parameter(automation_service, rule_data, test_user):
    with pytest.raises(InvalidRuleDefinitionError) as exc_info:
        automation_service.create_rule(
            {**rule_data, "action_type": "SEND_EMAIL", "action_parameters": {"subject": "Hi"}},
            test_user.id,
        )
    assert exc_info.value.details["errors"][0]["field"] == "to"


@pytest.mark.parametrize("conditions", ["{broken", '"HIGH"', "42"])
def test_create_rule_rejects_bad_conditions(automation_service, rule_data, test_user, conditions):
    with pytest.raises(InvalidRuleDefinitionError):
        automation_service.create_rule({**rule_data, "trigger_conditions": conditions}, test_user.id)


def test_create_rule_rejects_malformed_parameter_text(automation_service, rule_data, test_user):
    with pytest.raises(InvalidRuleDefinitionError):
        automation_service.create_rule({**rule_data, "action_parameters": "{message"}, test_user.id)


def test_create_rule_accepts_json_text(automation_service, rule_data, test_user):
    rule = automation_service.create_rule(
        {
            **rule_data,
            "trigger_conditions": '{"priority": "HIGH"}',
            "action_parameters": '{"message": "hi"}',
        },
        test_user.id,
    )
    assert rule.trigger_conditions == '{"priority": "HIGH"}'
    assert rule.action_parameters == '{"message": "hi"}'


def test_create_task_rule_without_parameters(automation_service, rule_data, test_user):
    rule = automation_service.create_rule(
        {**rule_data, "action_type": "CREATE_TASK", "action_parameters": None}, test_user.id
    )
    assert rule.action_parameters is None


def test_list_rules(automation_service, rule_data, test_user, other_user, test_project):
    automation_service.create_rule(rule_data, test_user.id)
    automation_service.create_rule({**rule_data, "project_id": test_project.id}, test_user.id)
    automation_service.create_rule(rule_data, other_user.id)

    assert len(automation_service.list_rules(test_user.id)) == 2
    assert len(automation_service.list_rules(test_user.id, test_project.id)) == 1
    assert len(automation_service.list_rules(other_user.id)) == 1


def test_get_rule_ownership(automation_service, test_rule, test_user, other_user):
    assert automation_service.get_rule(test_rule.id, test_user.id).id == test_rule.id

    with pytest.raises(AutomationPermissionError):
        automation_service.get_rule(test_rule.id, other_user.id)

    with pytest.raises(RuleNotFoundError):
        automation_service.get_rule(uuid4(), test_user.id)


def test_update_rule_partial(automation_service, test_rule, test_user):
    updated = automation_service.update_rule(test_rule.id, {"name": "Renamed"}, test_user.id)

    assert updated.name == "Renamed"
    assert updated.action_type == "SEND_NOTIFICATION"
    assert json.loads(updated.action_parameters) == {"message": "A task was moved"}


def test_update_rule_revalidates_parameters_on_action_change(
    automation_service, test_rule, test_user
):
    with pytest.raises(InvalidRuleDefinitionError):
        automation_service.update_rule(test_rule.id, {"action_type": "MOVE_TASK"}, test_user.id)

    updated = automation_service.update_rule(
        test_rule.id,
        {"action_type": "MOVE_TASK", "action_parameters": {"sectionId": "done"}},
        test_user.id,
    )
    assert updated.action_type == "MOVE_TASK"


@pytest.mark.parametrize("field", ["name", "trigger_type", "action_type", "is_active"])
def test_update_rule_rejects_null_required_field(
    automation_service, test_rule, test_user, db_session, field
):
    with pytest.raises(InvalidRuleDefinitionError) as exc_info:
        automation_service.update_rule(test_rule.id, {field: None}, test_user.id)

    assert exc_info.value.details == {"fields": [field]}
    db_session.refresh(test_rule)
    assert test_rule.name == "Notify on move"
    assert test_rule.trigger_type == "TASK_MOVED"
    assert test_rule.action_type == "SEND_NOTIFICATION"
    assert test_rule.is_active is True


def test_update_rule_allows_clearing_optional_fields(automation_service, test_rule, test_user):
    updated = automation_service.update_rule(
        test_rule.id, {"description": None, "trigger_conditions": None}, test_user.id
    )

    assert updated.description is None
    assert updated.trigger_conditions is None
    assert updated.name == "Notify on move"


def test_update_rule_by_other_user_forbidden(automation_service, test_rule, other_user):
    with pytest.raises(AutomationPermissionError):
        automation_service.update_rule(test_rule.id, {"name": "Mine now"}, other_user.id)


def test_toggle_active(automation_service, test_rule, test_user):
    assert automation_service.toggle_active(test_rule.id, test_user.id).is_active is False
    assert automation_service.toggle_active(test_rule.id, test_user.id).is_active is True


@pytest.mark.asyncio
async def test_remove_rule_deletes_logs(automation_service, test_rule, test_user, db_session):
    await create_automation_engine(db_session).execute_automations("TASK_MOVED", {"taskId": "t1"})
    assert db_session.query(AutomationLog).count() == 1

    automation_service.remove_rule(test_rule.id, test_user.id)

    assert db_session.query(AutomationLog).count() == 0
    with pytest.raises(RuleNotFoundError):
        automation_service.get_rule(test_rule.id, test_user.id)


def test_remove_rule_by_other_user_forbidden(automation_service, test_rule, other_user):
    with pytest.raises(AutomationPermissionError):
        automation_service.remove_rule(test_rule.id, other_user.id)


@pytest.mark.asyncio
async def test_get_execution_logs(automation_service, test_rule, test_user, other_user, db_session):
    engine = create_automation_engine(db_session)
    for task_id in ("t1", "t2", "t3"):
        await engine.execute_automations("TASK_MOVED", {"taskId": task_id})

    assert len(automation_service.get_execution_logs(test_rule.id, test_user.id)) == 3
    assert len(automation_service.get_execution_logs(test_rule.id, test_user.id, limit=2)) == 2

    with pytest.raises(AutomationPermissionError):
        automation_service.get_execution_logs(test_rule.id, other_user.id)
