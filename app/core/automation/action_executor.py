"""Action executor for automation rules."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any
from uuid import uuid4

from app.core.automation.exceptions import ActionError
from app.core.automation.rule_parser import RuleParser
from app.core.logging import mask_email
from app.models.automation import ActionType

logger = logging.getLogger(__name__)

ActionHandler = Callable[[dict[str, Any], dict[str, Any]], Awaitable[dict[str, Any]]]

# Key parameter each action reads; enforced only when validation is enabled
REQUIRED_PARAMETERS: dict[ActionType, tuple[str, ...]] = {
    ActionType.SEND_NOTIFICATION: ("message",),
    ActionType.ASSIGN_TASK: ("userId",),
    ActionType.MOVE_TASK: ("sectionId",),
    ActionType.CREATE_TASK: (),
    ActionType.UPDATE_TASK_PRIORITY: ("priority",),
    ActionType.SEND_EMAIL: ("to",),
}


async def send_notification(
    parameters: dict[str, Any], trigger_data: dict[str, Any]
) -> dict[str, Any]:
    logger.info(
        f"Notification action: message={parameters.get('message')}, "
        f"task={trigger_data.get('taskId')}"
    )
    return {"sent": True, "message": parameters.get("message")}


async def assign_task(
    parameters: dict[str, Any], trigger_data: dict[str, Any]
) -> dict[str, Any]:
    logger.info(
        f"Assign task action: task={trigger_data.get('taskId')}, "
        f"user={parameters.get('userId')}"
    )
    return {"assigned": True, "userId": parameters.get("userId")}


async def move_task(
    parameters: dict[str, Any], trigger_data: dict[str, Any]
) -> dict[str, Any]:
    logger.info(
        f"Move task action: task={trigger_data.get('taskId')}, "
        f"section={parameters.get('sectionId')}"
    )
    return {"moved": True, "sectionId": parameters.get("sectionId")}


async def create_task(
    parameters: dict[str, Any], trigger_data: dict[str, Any]
) -> dict[str, Any]:
    task_id = str(uuid4())
    logger.info(f"Create task action: title={parameters.get('title')}, new_task={task_id}")
    return {"created": True, "taskId": task_id}


async def update_task_priority(
    parameters: dict[str, Any], trigger_data: dict[str, Any]
) -> dict[str, Any]:
    logger.info(
        f"Update priority action: task={trigger_data.get('taskId')}, "
        f"priority={parameters.get('priority')}"
    )
    return {"updated": True, "priority": parameters.get("priority")}


async def send_email(
    parameters: dict[str, Any], trigger_data: dict[str, Any]
) -> dict[str, Any]:
    logger.info(
        f"Email action: to={mask_email(parameters.get('to'))}, "
        f"subject={parameters.get('subject')}"
    )
    return {"sent": True, "to": parameters.get("to")}


DEFAULT_HANDLERS: dict[ActionType, ActionHandler] = {
    ActionType.SEND_NOTIFICATION: send_notification,
    ActionType.ASSIGN_TASK: assign_task,
    ActionType.MOVE_TASK: move_task,
    ActionType.CREATE_TASK: create_task,
    ActionType.UPDATE_TASK_PRIORITY: update_task_priority,
    ActionType.SEND_EMAIL: send_email,
}


class ActionExecutor:
    """Executor for rule actions.

    Dispatches through a registry mapping each action type to an async
    handler. Handlers receive the decoded parameters and the trigger payload
    and return a small acknowledgement dictionary.
    """

    def __init__(
        self,
        handlers: dict[ActionType, ActionHandler] | None = None,
        validate_parameters: bool = False,
    ):
        """Initialize action executor.

        Args:
            handlers: Handler registry (defaults to the built-in handlers)
            validate_parameters: Fail actions whose key parameter is missing
        """
        self.handlers: dict[ActionType, ActionHandler] = dict(
            DEFAULT_HANDLERS if handlers is None else handlers
        )
        self.validate_parameters = validate_parameters

    def register(self, action_type: ActionType, handler: ActionHandler) -> None:
        """Register or replace the handler for an action type."""
        self.handlers[ActionType(action_type)] = handler

    async def execute(
        self,
        action_type: ActionType | str,
        parameters: str | dict[str, Any] | None,
        trigger_data: dict[str, Any],
    ) -> dict[str, Any]:
        """Execute a single action.

        Args:
            action_type: Action to perform
            parameters: Raw parameter blob from the rule (JSON text or dict)
            trigger_data: Triggering event payload

        Returns:
            Acknowledgement returned by the handler

        Raises:
            ActionError: If the action type is not supported, the parameters
                are malformed, or a required parameter is missing
        """
        handler = self._resolve_handler(action_type)
        decoded = RuleParser.parse_parameters(parameters)

        if self.validate_parameters:
            missing = [
                key
                for key in REQUIRED_PARAMETERS.get(ActionType(action_type), ())
                if decoded.get(key) in (None, "")
            ]
            if missing:
                raise ActionError(
                    f"Missing required parameters for {ActionType(action_type).value}: "
                    f"{', '.join(missing)}",
                    {"missing": missing},
                )

        return await handler(decoded, trigger_data)

    def _resolve_handler(self, action_type: ActionType | str) -> ActionHandler:
        name = getattr(action_type, "value", action_type)
        try:
            handler = self.handlers.get(ActionType(action_type))
        except ValueError:
            handler = None
        if handler is None:
            raise ActionError(
                f"Unsupported action type: {name}", {"action_type": str(name)}
            )
        return handler
