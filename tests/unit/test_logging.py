"""Unit tests for logging helpers."""

import logging
from uuid import uuid4

import pytest

from app.core.logging import log_automation_execution, mask_email


@pytest.mark.parametrize(
    "email,expected",
    [
        ("alice@example.com", "ali***@example.com"),
        ("bob@example.com", "***@example.com"),
        ("not-an-email", "***"),
        (None, "***"),
    ],
)
def test_mask_email(email, expected):
    assert mask_email(email) == expected


def test_successful_execution_logged_at_info(caplog):
    rule_id = uuid4()
    with caplog.at_level(logging.INFO, logger="app.automation"):
        log_automation_execution(rule_id, "TASK_MOVED", "SUCCESS", 3)

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert f"rule_id={rule_id}" in record.getMessage()


def test_failed_execution_logged_at_warning(caplog):
    with caplog.at_level(logging.INFO, logger="app.automation"):
        log_automation_execution(uuid4(), "TASK_MOVED", "FAILED", 3, error_message="boom")

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "error=boom" in record.getMessage()
