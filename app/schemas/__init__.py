"""Pydantic schemas for API requests and responses."""

from app.schemas.automation import (
    ACTION_PARAMETER_SCHEMAS,
    AutomationLogResponse,
    RuleCreate,
    RuleResponse,
    RuleUpdate,
    TriggerRequest,
)
from app.schemas.comment import CommentCreate, CommentResponse
from app.schemas.common import (
    ErrorDetail,
    ErrorResponse,
    ListMeta,
    StandardListResponse,
    StandardResponse,
)
from app.schemas.notification import NotificationResponse

__all__ = [
    "ACTION_PARAMETER_SCHEMAS",
    "AutomationLogResponse",
    "CommentCreate",
    "CommentResponse",
    "ErrorDetail",
    "ErrorResponse",
    "ListMeta",
    "NotificationResponse",
    "RuleCreate",
    "RuleResponse",
    "RuleUpdate",
    "StandardListResponse",
    "StandardResponse",
    "TriggerRequest",
]
