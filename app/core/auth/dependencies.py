"""FastAPI dependencies for authentication."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.auth.jwt import decode_token
from app.core.db.deps import get_db
from app.core.exceptions import raise_unauthorized
from app.models.user import User
from app.repositories.user_repository import UserRepository

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """
    Get the current authenticated user from a bearer token.

    Raises:
        APIException: 401 if the token is invalid or the user is unknown or inactive.
    """
    payload = decode_token(token)
    if payload is None or payload.get("type") != "access":
        raise_unauthorized("AUTH_INVALID_TOKEN", "Invalid or expired token")

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise_unauthorized("AUTH_INVALID_TOKEN", "Invalid user ID in token")

    user = UserRepository(db).get_by_id(user_id)
    if not user or not user.is_active:
        raise_unauthorized("AUTH_USER_NOT_FOUND", "User not found or inactive")

    return user
