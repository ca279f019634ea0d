"""Notification schemas for API responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from app.models.notification import NotificationType


class NotificationResponse(BaseModel):
    """Schema for notification response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    recipient_id: UUID
    type: NotificationType
    message: str
    context_id: str | None
    context_type: str | None
    is_read: bool
    created_at: datetime
