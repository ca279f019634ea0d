"""Comment schemas for API requests and responses."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    """Schema for creating a comment on a task."""

    content: str = Field(..., description="Comment text", min_length=1, max_length=10000)


class CommentResponse(BaseModel):
    """Schema for comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content: str
    task_id: UUID
    author_id: UUID
    created_at: datetime
