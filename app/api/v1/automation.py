"""Automation router for rule management and manual triggers."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth.dependencies import get_current_user
from app.core.automation.engine import AutomationEngine, create_automation_engine
from app.core.automation.service import AutomationService
from app.core.db.deps import get_db
from app.models.user import User
from app.schemas.automation import (
    AutomationLogResponse,
    RuleCreate,
    RuleResponse,
    RuleUpdate,
    TriggerRequest,
)
from app.schemas.common import ListMeta, StandardListResponse, StandardResponse

router = APIRouter()


def get_automation_service(db: Annotated[Session, Depends(get_db)]) -> AutomationService:
    """Dependency to get AutomationService."""
    return AutomationService(db)


def get_automation_engine(db: Annotated[Session, Depends(get_db)]) -> AutomationEngine:
    """Dependency to get AutomationEngine."""
    return create_automation_engine(db)


@router.post(
    "/rules",
    response_model=StandardResponse[RuleResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create automation rule",
    description="Create a new automation rule owned by the current user.",
)
async def create_rule(
    rule_data: RuleCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AutomationService, Depends(get_automation_service)],
) -> StandardResponse[RuleResponse]:
    """Create a new automation rule."""
    rule = service.create_rule(rule_data.model_dump(), current_user.id)
    return StandardResponse(data=RuleResponse.model_validate(rule))


@router.get(
    "/rules",
    response_model=StandardListResponse[RuleResponse],
    status_code=status.HTTP_200_OK,
    summary="List automation rules",
    description="List the current user's rules, optionally for one project.",
)
async def list_rules(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AutomationService, Depends(get_automation_service)],
    project_id: UUID | None = Query(default=None, description="Filter by project"),
) -> StandardListResponse[RuleResponse]:
    """List automation rules."""
    rules = service.list_rules(current_user.id, project_id)
    return StandardListResponse(
        data=[RuleResponse.model_validate(rule) for rule in rules],
        meta=ListMeta(total=len(rules)),
    )


@router.get(
    "/rules/{rule_id}",
    response_model=StandardResponse[RuleResponse],
    status_code=status.HTTP_200_OK,
    summary="Get automation rule",
)
async def get_rule(
    rule_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AutomationService, Depends(get_automation_service)],
) -> StandardResponse[RuleResponse]:
    """Get a specific automation rule."""
    rule = service.get_rule(rule_id, current_user.id)
    return StandardResponse(data=RuleResponse.model_validate(rule))


@router.put(
    "/rules/{rule_id}",
    response_model=StandardResponse[RuleResponse],
    status_code=status.HTTP_200_OK,
    summary="Update automation rule",
)
async def update_rule(
    rule_id: UUID,
    rule_data: RuleUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AutomationService, Depends(get_automation_service)],
) -> StandardResponse[RuleResponse]:
    """Update an automation rule; omitted fields are left unchanged."""
    rule = service.update_rule(
        rule_id, rule_data.model_dump(exclude_unset=True), current_user.id
    )
    return StandardResponse(data=RuleResponse.model_validate(rule))


@router.delete(
    "/rules/{rule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete automation rule",
)
async def delete_rule(
    rule_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AutomationService, Depends(get_automation_service)],
) -> None:
    """Delete an automation rule and its execution logs."""
    service.remove_rule(rule_id, current_user.id)


@router.post(
    "/rules/{rule_id}/toggle",
    response_model=StandardResponse[RuleResponse],
    status_code=status.HTTP_200_OK,
    summary="Toggle automation rule",
)
async def toggle_rule(
    rule_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AutomationService, Depends(get_automation_service)],
) -> StandardResponse[RuleResponse]:
    """Activate or deactivate an automation rule."""
    rule = service.toggle_active(rule_id, current_user.id)
    return StandardResponse(data=RuleResponse.model_validate(rule))


@router.get(
    "/rules/{rule_id}/logs",
    response_model=StandardListResponse[AutomationLogResponse],
    status_code=status.HTTP_200_OK,
    summary="Get rule execution logs",
    description="Most recent execution logs of a rule, newest first.",
)
async def get_rule_logs(
    rule_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[AutomationService, Depends(get_automation_service)],
    limit: int | None = Query(default=None, ge=1, description="Maximum number of logs"),
) -> StandardListResponse[AutomationLogResponse]:
    """Get execution logs of a rule."""
    logs = service.get_execution_logs(rule_id, current_user.id, limit)
    return StandardListResponse(
        data=[AutomationLogResponse.model_validate(log) for log in logs],
        meta=ListMeta(total=len(logs)),
    )


@router.post(
    "/trigger",
    response_model=StandardResponse[dict],
    status_code=status.HTTP_202_ACCEPTED,
    summary="Fire a trigger",
    description="Run every active rule matching the trigger on behalf of the current user.",
)
async def fire_trigger(
    trigger: TriggerRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    engine: Annotated[AutomationEngine, Depends(get_automation_engine)],
) -> StandardResponse[dict]:
    """Fire a trigger manually."""
    await engine.execute_automations(
        trigger.trigger_type, trigger.trigger_data, current_user.id
    )
    return StandardResponse(data={"trigger_type": trigger.trigger_type.value, "accepted": True})
