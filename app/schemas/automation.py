"""Automation schemas for API requests and responses."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.automation import ActionType, AutomationExecutionStatus, TriggerType


class SendNotificationParameters(BaseModel):
    """Parameters for SEND_NOTIFICATION actions."""

    model_config = ConfigDict(extra="allow")

    message: str = Field(..., min_length=1, description="Notification text")


class AssignTaskParameters(BaseModel):
    """Parameters for ASSIGN_TASK actions."""

    model_config = ConfigDict(extra="allow")

    userId: str = Field(..., min_length=1, description="User to assign the task to")


class MoveTaskParameters(BaseModel):
    """Parameters for MOVE_TASK actions."""

    model_config = ConfigDict(extra="allow")

    sectionId: str = Field(..., min_length=1, description="Destination section")


class CreateTaskParameters(BaseModel):
    """Parameters for CREATE_TASK actions."""

    model_config = ConfigDict(extra="allow")

    title: str | None = Field(None, description="Title of the new task")
    sectionId: str | None = Field(None, description="Section of the new task")


class UpdateTaskPriorityParameters(BaseModel):
    """Parameters for UPDATE_TASK_PRIORITY actions."""

    model_config = ConfigDict(extra="allow")

    priority: str = Field(..., min_length=1, description="New priority")


class SendEmailParameters(BaseModel):
    """Parameters for SEND_EMAIL actions."""

    model_config = ConfigDict(extra="allow")

    to: str = Field(..., min_length=3, description="Recipient address")
    subject: str | None = Field(None, description="Email subject")
    body: str | None = Field(None, description="Email body")


ACTION_PARAMETER_SCHEMAS: dict[ActionType, type[BaseModel]] = {
    ActionType.SEND_NOTIFICATION: SendNotificationParameters,
    ActionType.ASSIGN_TASK: AssignTaskParameters,
    ActionType.MOVE_TASK: MoveTaskParameters,
    ActionType.CREATE_TASK: CreateTaskParameters,
    ActionType.UPDATE_TASK_PRIORITY: UpdateTaskPriorityParameters,
    ActionType.SEND_EMAIL: SendEmailParameters,
}


class RuleBase(BaseModel):
    """Base schema for automation rules."""

    name: str = Field(..., description="Rule name", min_length=1, max_length=255)
    description: str | None = Field(None, description="Rule description")
    trigger_type: TriggerType = Field(..., description="Trigger that activates the rule")
    trigger_conditions: dict[str, Any] | list[Any] | str | None = Field(
        default=None, description="Trigger conditions (JSON object/array or JSON text)"
    )
    action_type: ActionType = Field(..., description="Action performed by the rule")
    action_parameters: dict[str, Any] | str | None = Field(
        default=None, description="Action parameters (JSON object or JSON text)"
    )
    is_active: bool = Field(default=True, description="Whether rule is active")


class RuleCreate(RuleBase):
    """Schema for creating a rule."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Notify on move",
                "trigger_type": "TASK_MOVED",
                "action_type": "SEND_NOTIFICATION",
                "action_parameters": {"message": "A task was moved"},
                "project_id": None,
            }
        }
    )

    project_id: UUID | None = Field(None, description="Project scope (global if omitted)")


class RuleUpdate(BaseModel):
    """Schema for updating a rule."""

    name: str | None = Field(None, description="Rule name", min_length=1, max_length=255)
    description: str | None = Field(None, description="Rule description")
    trigger_type: TriggerType | None = Field(None, description="Trigger type")
    trigger_conditions: dict[str, Any] | list[Any] | str | None = Field(
        None, description="Trigger conditions"
    )
    action_type: ActionType | None = Field(None, description="Action type")
    action_parameters: dict[str, Any] | str | None = Field(
        None, description="Action parameters"
    )
    is_active: bool | None = Field(None, description="Whether rule is active")


class RuleResponse(BaseModel):
    """Schema for rule response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    trigger_type: TriggerType
    trigger_conditions: str | None
    action_type: ActionType
    action_parameters: str | None
    is_active: bool
    created_by_id: UUID
    project_id: UUID | None
    execution_count: int
    last_executed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class AutomationLogResponse(BaseModel):
    """Schema for automation execution log response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    automation_id: UUID
    status: AutomationExecutionStatus
    error_message: str | None
    trigger_data: str | None
    action_result: str | None
    related_task_id: str | None
    triggered_by_id: UUID | None
    executed_at: datetime
    execution_time_ms: int


class TriggerRequest(BaseModel):
    """Schema for manually firing a trigger."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "trigger_type": "TASK_MOVED",
                "trigger_data": {"taskId": "t1", "projectId": None},
            }
        }
    )

    trigger_type: TriggerType = Field(..., description="Trigger to fire")
    trigger_data: dict[str, Any] = Field(default_factory=dict, description="Event payload")
