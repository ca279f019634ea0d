"""Custom exceptions for API error handling."""

from typing import Any

from fastapi import HTTPException, status

from app.core.automation.exceptions import (
    AutomationError,
    AutomationPermissionError,
    InvalidRuleDefinitionError,
    NotFoundError,
)


class APIException(HTTPException):
    """Custom exception for API errors with standard format.

    Example:
        raise APIException(
            code="AUTOMATION_RULE_NOT_FOUND",
            message="Automation rule not found",
            status_code=status.HTTP_404_NOT_FOUND
        )
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            code: Error code (e.g., 'AUTH_INVALID_TOKEN', 'USER_NOT_FOUND').
            message: Human-readable error message.
            status_code: HTTP status code (default: 400).
            details: Optional additional error details.
        """
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.message = message
        self.details = details


def status_for_domain_error(exc: AutomationError) -> int:
    """HTTP status for a domain error raised by a service.

    Missing resources map to 404, ownership failures to 403 and rejected
    rule definitions to 400. Anything else is a server error.
    """
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, AutomationPermissionError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, InvalidRuleDefinitionError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def api_exception_from_domain(exc: AutomationError) -> APIException:
    """Wrap a domain error in an APIException carrying its code and details."""
    return APIException(
        code=exc.code,
        message=exc.message,
        status_code=status_for_domain_error(exc),
        details=exc.details,
    )


def raise_unauthorized(
    code: str = "AUTH_UNAUTHORIZED", message: str = "Unauthorized"
) -> None:
    """Raise 401 Unauthorized exception.

    Args:
        code: Error code (default: 'AUTH_UNAUTHORIZED').
        message: Error message (default: 'Unauthorized').

    Raises:
        APIException: 401 Unauthorized error.
    """
    raise APIException(
        code=code, message=message, status_code=status.HTTP_401_UNAUTHORIZED
    )
