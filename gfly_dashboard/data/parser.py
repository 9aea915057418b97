"""
Parser for the status document served by the GFly device.
"""

import json
import logging
from typing import Any, Union

from .models import TelemetrySnapshot

# Configure logger
logger = logging.getLogger("gfly_dashboard.parser")


class MalformedStatusError(ValueError):
    """Raised when a status body cannot be turned into a snapshot."""


class StatusParser:
    """
    Parses the JSON body of GET /status into a TelemetrySnapshot.

    Missing fields are fine (the snapshot is partial-tolerant); a body that
    is not a JSON object, or a field with the wrong JSON type, is not.
    """

    @staticmethod
    def parse_text(text: Union[str, bytes]) -> TelemetrySnapshot:
        """
        Decode a raw status body.

        Args:
            text: The response body

        Returns:
            TelemetrySnapshot: The parsed snapshot

        Raises:
            MalformedStatusError: If the body is not a valid status document
        """
        try:
            payload = json.loads(text)
        except (TypeError, ValueError) as e:
            raise MalformedStatusError(f"Status body is not valid JSON: {e}") from e
        return StatusParser.parse_payload(payload)

    @staticmethod
    def parse_payload(payload: Any) -> TelemetrySnapshot:
        """
        Build a snapshot from an already decoded status document.

        Args:
            payload: The decoded JSON value

        Returns:
            TelemetrySnapshot: The parsed snapshot

        Raises:
            MalformedStatusError: If the document is not an object or has mistyped fields
        """
        if not isinstance(payload, dict):
            raise MalformedStatusError(
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        try:
            snapshot = TelemetrySnapshot.from_dict(payload)
        except TypeError as e:
            raise MalformedStatusError(f"Invalid status field: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Parsed status: {snapshot}")
        return snapshot


# Create a singleton instance of the parser
parser = StatusParser()
