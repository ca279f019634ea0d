"""Notifications router for the current user's in-app notifications."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth.dependencies import get_current_user
from app.core.db.deps import get_db
from app.core.notifications.service import NotificationService
from app.models.user import User
from app.schemas.common import ListMeta, StandardListResponse
from app.schemas.notification import NotificationResponse

router = APIRouter()


def get_notification_service(db: Annotated[Session, Depends(get_db)]) -> NotificationService:
    """Dependency to get NotificationService."""
    return NotificationService(db)


@router.get(
    "",
    response_model=StandardListResponse[NotificationResponse],
    status_code=status.HTTP_200_OK,
    summary="List notifications",
)
async def list_notifications(
    current_user: Annotated[User, Depends(get_current_user)],
    service: Annotated[NotificationService, Depends(get_notification_service)],
    unread_only: bool = Query(default=False, description="Only return unread notifications"),
) -> StandardListResponse[NotificationResponse]:
    """List the current user's notifications, newest first."""
    notifications = service.get_notifications(current_user.id, unread_only)
    return StandardListResponse(
        data=[NotificationResponse.model_validate(n) for n in notifications],
        meta=ListMeta(total=len(notifications)),
    )
