"""Comments router for task comments."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth.dependencies import get_current_user
from app.core.comments.service import CommentService
from app.core.db.deps import get_db
from app.models.user import User
from app.schemas.comment import CommentCreate, CommentResponse
from app.schemas.common import ListMeta, StandardListResponse, StandardResponse

router = APIRouter()


def get_comment_service(db: Annotated[Session, Depends(get_db)]) -> CommentService:
    """Dependency to get CommentService."""
    return CommentService(db)


@router.post(
    "/tasks/{task_id}/comments",
    response_model=StandardResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a task",
    description="Create a comment and notify the task assignee and project owner.",
)
async def create_comment(
    task_id: UUID,
    comment_data: CommentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> StandardResponse[CommentResponse]:
    """Create a comment on a task."""
    comment = await service.create_comment(task_id, comment_data.content, current_user)
    return StandardResponse(data=CommentResponse.model_validate(comment))


@router.get(
    "/tasks/{task_id}/comments",
    response_model=StandardListResponse[CommentResponse],
    status_code=status.HTTP_200_OK,
    summary="List task comments",
)
async def list_comments(
    task_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[CommentService, Depends(get_comment_service)],
) -> StandardListResponse[CommentResponse]:
    """List comments of a task, oldest first."""
    comments = service.get_comments(task_id)
    return StandardListResponse(
        data=[CommentResponse.model_validate(comment) for comment in comments],
        meta=ListMeta(total=len(comments)),
    )
