"""
Language-model backed intent parser.

Turns a free-text command or query into a CommandIntent / QueryIntent.
Never raises: any failure of the model call or of the reply's shape
yields a zero-confidence intent so the caller can fall back.
"""

import logging
from typing import List, Optional

from .llm import LanguageClient
from .models import CommandIntent, QueryEntity, QueryIntent, QueryType, QUERYABLE_ENTITIES
from .prompts import COMMAND_PROMPT, query_prompt

logger = logging.getLogger("travel-console.parser")


class IntentParser:
    """Reads commands and queries through the language model."""

    def __init__(
        self,
        llm: Optional[LanguageClient] = None,
        command_prompt: str = COMMAND_PROMPT,
    ) -> None:
        self.llm = llm or LanguageClient()
        self.command_prompt = command_prompt

    async def parse_command(self, text: str) -> CommandIntent:
        try:
            result = await self.llm.complete_json(self.command_prompt, text)
            data = result.get("data") or {}
            if not isinstance(data, dict):
                raise ValueError(f"'data' must be an object, got {type(data).__name__}")
            intent = CommandIntent(
                action=result.get("action") or "unknown",
                entity=str(result.get("entity") or "unknown"),
                data=data,
                confidence=result.get("confidence"),
            )
        except Exception as e:
            logger.warning(f"Failed to parse command with language model: {e}", exc_info=True)
            return CommandIntent.unknown()

        logger.debug(f"Parsed command {text[:80]!r} -> {intent.action.value} ({intent.confidence})")
        return intent

    async def parse_query(self, text: str, available_entities: Optional[List[str]] = None) -> QueryIntent:
        entities = available_entities or QUERYABLE_ENTITIES
        try:
            result = await self.llm.complete_json(query_prompt(entities), text)
            filters = result.get("filters") or {}
            if not isinstance(filters, dict):
                raise ValueError(f"'filters' must be an object, got {type(filters).__name__}")
            intent = QueryIntent(
                type=result.get("type") or QueryType.SEARCH,
                entity=result.get("entity") or QueryEntity.UNKNOWN,
                filters=filters,
                query=str(result.get("query") or text),
                confidence=result.get("confidence"),
            )
        except Exception as e:
            logger.warning(f"Failed to parse query with language model: {e}", exc_info=True)
            return QueryIntent(
                type=QueryType.SEARCH,
                entity=QueryEntity.UNKNOWN,
                filters={},
                query=text,
                confidence=0.0,
            )

        logger.debug(f"Parsed query {text[:80]!r} -> {intent.entity.value} {intent.filters}")
        return intent
