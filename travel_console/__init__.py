"""
Travel Console: natural language commands and queries for a travel companion.

Turns sentences like "add person Rajesh, phone 9876543210, met in Delhi"
into stored records, and questions like "show me people in Pune" into a
filtered result set with a conversational answer.

Usage:
    from travel_console import TravelConsole

    console = TravelConsole()
    result = await console.process_command("expense 250 for food", user_id="u1")
    print(result.message)
"""

from typing import Optional

from .executor import CONFIDENCE_THRESHOLD, CommandExecutor
from .fallback import fallback_parse
from .llm import LanguageClient
from .models import (
    CommandAction,
    CommandIntent,
    ExecutionResult,
    QueryEntity,
    QueryIntent,
    QueryResult,
)
from .parser import IntentParser
from .query import QueryExecutor
from .store import HttpRecordStore, InMemoryRecordStore, RecordStore, StoreError, create_store
from .synthesizer import ResponseSynthesizer


class TravelConsole:
    """High-level interface wiring parser, store, executors and synthesizer."""

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        llm: Optional[LanguageClient] = None,
        threshold: Optional[float] = None,
    ) -> None:
        """Initialize the console; the command executor registers the handlers."""
        llm = llm or LanguageClient()
        self.store = store or create_store()
        self.parser = IntentParser(llm)
        self.commands = CommandExecutor(self.parser, self.store, threshold=threshold)
        self.queries = QueryExecutor(self.parser, self.store, ResponseSynthesizer(llm))

    async def process_command(self, text: str, user_id: str) -> ExecutionResult:
        """Execute a free-text command and return the result."""
        return await self.commands.execute_and_respond(text, user_id)

    async def process_query(self, text: str, user_id: str) -> QueryResult:
        """Answer a free-text query and return the result."""
        return await self.queries.execute_query(text, user_id)


__all__ = [
    "TravelConsole",
    "CommandAction",
    "CommandIntent",
    "CommandExecutor",
    "CONFIDENCE_THRESHOLD",
    "ExecutionResult",
    "HttpRecordStore",
    "InMemoryRecordStore",
    "IntentParser",
    "LanguageClient",
    "QueryEntity",
    "QueryExecutor",
    "QueryIntent",
    "QueryResult",
    "RecordStore",
    "ResponseSynthesizer",
    "StoreError",
    "create_store",
    "fallback_parse",
]
