"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1 import automation, comments, notifications

api_router = APIRouter()

api_router.include_router(automation.router, prefix="/automation", tags=["automation"])
api_router.include_router(comments.router, tags=["comments"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
