"""
Command executor: language-model parse first, deterministic rules second.
"""

import logging
import os
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .fallback import fallback_parse
from .handlers import register_all_handlers
from .models import CommandAction, ExecutionResult
from .parser import IntentParser
from .router import route
from .store import RecordStore

logger = logging.getLogger("travel-console.executor")

CONFIDENCE_THRESHOLD = 0.7


def _get_config() -> Dict[str, Any]:
    raw = os.getenv("TRAVEL_CONSOLE_CONFIDENCE_THRESHOLD", "")
    try:
        threshold = float(raw) if raw else CONFIDENCE_THRESHOLD
    except ValueError:
        logger.warning(f"Ignoring invalid TRAVEL_CONSOLE_CONFIDENCE_THRESHOLD={raw!r}")
        threshold = CONFIDENCE_THRESHOLD
    return {"threshold": threshold}


class CommandExecutor:
    """Turns a free-text command into exactly one ExecutionResult."""

    def __init__(
        self,
        parser: IntentParser,
        store: RecordStore,
        threshold: Optional[float] = None,
    ) -> None:
        self.parser = parser
        self.store = store
        self.threshold = _get_config()["threshold"] if threshold is None else threshold
        register_all_handlers()

    async def execute_and_respond(self, text: str, user_id: str) -> ExecutionResult:
        """
        Execute a command for `user_id`.

        An intent at or below the confidence threshold is discarded as a
        whole and the original text goes to the fallback rules. Storage
        errors propagate to the caller.
        """
        try:
            intent = await self.parser.parse_command(text)
        except Exception as e:
            logger.warning(f"Command parser failed, using fallback rules: {e}", exc_info=True)
            return await fallback_parse(text, user_id, self.store)

        if intent.confidence <= self.threshold or intent.action == CommandAction.UNKNOWN:
            logger.debug(
                f"Intent {intent.action.value} at {intent.confidence} not trusted, using fallback rules"
            )
            return await fallback_parse(text, user_id, self.store)

        try:
            payload = intent.payload()
        except (KeyError, ValidationError) as e:
            logger.debug(f"Payload for {intent.action.value} did not validate: {e}")
            return await fallback_parse(text, user_id, self.store)

        result = await route(intent.action, payload, user_id, self.store)
        if result is None:
            return await fallback_parse(text, user_id, self.store)
        return result
