"""Structured logging configuration for application and automation events."""

import logging
import sys
from typing import Any
from uuid import UUID

from app.core.config_file import get_settings

settings = get_settings()

# Create logger for automation audit events
automation_logger = logging.getLogger("app.automation")

# Create logger for application events
app_logger = logging.getLogger("app")
app_logger.setLevel(settings.LOG_LEVEL.upper())

# Create console handler with structured format
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(settings.LOG_LEVEL.upper())

# Create formatter
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
console_handler.setFormatter(formatter)

# Add handler once; "app.automation" propagates to it
if not app_logger.handlers:
    app_logger.addHandler(console_handler)


def mask_email(email: str | None) -> str:
    """
    Mask email address for logging (show only first 3 chars and domain).

    Args:
        email: Email address to mask.

    Returns:
        Masked email string (e.g., "tes***@example.com").
    """
    if not email or "@" not in email:
        return "***"

    local_part, domain = email.split("@", 1)

    if len(local_part) <= 3:
        masked_local = "*" * len(local_part)
    else:
        masked_local = local_part[:3] + "***"

    return f"{masked_local}@{domain}"


def log_automation_execution(
    rule_id: UUID,
    trigger_type: str,
    status: str,
    execution_time_ms: int,
    error_message: str | None = None,
    user_id: Any | None = None,
) -> None:
    """
    Log one automation execution attempt.

    Args:
        rule_id: Automation rule ID.
        trigger_type: Trigger that selected the rule.
        status: Outcome (SUCCESS, FAILED, SKIPPED).
        execution_time_ms: Duration of the attempt.
        error_message: Failure message (optional).
        user_id: User who caused the trigger (optional).
    """
    message = (
        f"Automation executed - rule_id={rule_id}, trigger={trigger_type}, "
        f"status={status}, time_ms={execution_time_ms}"
    )
    if user_id:
        message += f", user_id={user_id}"
    if error_message:
        message += f", error={error_message}"
        automation_logger.warning(message)
        return

    automation_logger.info(message)
