"""Parser for the serialized condition and parameter blobs stored on rules."""

import json
import logging
from typing import Any

from app.core.automation.exceptions import (
    ActionError,
    ConditionDeserializationError,
    InvalidRuleDefinitionError,
)

logger = logging.getLogger(__name__)


class RuleParser:
    """Decode and encode the opaque JSON blobs of automation rules."""

    @staticmethod
    def _decode(blob: str | dict | list | None) -> Any:
        if blob is None:
            return None
        if isinstance(blob, (dict, list)):
            return blob
        if not isinstance(blob, str):
            raise TypeError(f"Expected JSON text, got {type(blob).__name__}")
        if not blob.strip():
            return None
        return json.loads(blob)

    @staticmethod
    def parse_conditions(blob: str | dict | list | None) -> Any:
        """Decode a rule's trigger conditions.

        Args:
            blob: JSON text as stored on the rule (or already decoded data)

        Returns:
            Decoded conditions, or None when the rule has none

        Raises:
            ConditionDeserializationError: If the blob is not valid JSON
        """
        try:
            return RuleParser._decode(blob)
        except (ValueError, TypeError) as e:
            raise ConditionDeserializationError(
                f"Malformed trigger conditions: {e}"
            ) from e

    @staticmethod
    def parse_parameters(blob: str | dict | None) -> dict[str, Any]:
        """Decode a rule's action parameters.

        Args:
            blob: JSON text as stored on the rule (or an already decoded dict)

        Returns:
            Parameter dictionary, empty when the rule has none

        Raises:
            ActionError: If the blob is not a JSON object
        """
        try:
            parameters = RuleParser._decode(blob)
        except (ValueError, TypeError) as e:
            raise ActionError(f"Malformed action parameters: {e}") from e

        if parameters is None:
            return {}
        if not isinstance(parameters, dict):
            raise ActionError("Action parameters must be a JSON object")
        return parameters

    @staticmethod
    def serialize(value: Any) -> str | None:
        """Encode conditions or parameters for storage.

        Strings are validated as JSON and stored unchanged.

        Raises:
            InvalidRuleDefinitionError: If a string value is not valid JSON
        """
        if value is None:
            return None
        if isinstance(value, str):
            try:
                json.loads(value)
            except ValueError as e:
                raise InvalidRuleDefinitionError(f"Invalid JSON: {e}") from e
            return value
        return json.dumps(value, default=str)

    @staticmethod
    def validate_conditions(blob: str | dict | list | None) -> bool:
        """Check whether stored conditions can be decoded.

        Returns:
            True if valid (or absent), False otherwise
        """
        try:
            RuleParser.parse_conditions(blob)
            return True
        except ConditionDeserializationError as e:
            logger.warning(f"Invalid rule conditions: {e}")
            return False
