"""
Query executor: parse, filter, narrate.
"""

import logging

from pydantic import ValidationError

from .filters import FILTERS
from .models import FILTER_MODELS, QUERYABLE_ENTITIES, QueryIntent, QueryResult, WireModel
from .parser import IntentParser
from .store import RecordStore
from .synthesizer import ResponseSynthesizer

logger = logging.getLogger("travel-console.query")

UNKNOWN_ENTITY_RESPONSE = (
    "I couldn't tell what to look up. Try: 'show me people in Pune', "
    "'list today's expenses' or 'journal entries about food'."
)


def _typed_filters(intent: QueryIntent) -> WireModel:
    """Validate filters, dropping any field whose value does not fit."""
    try:
        return intent.typed_filters()
    except ValidationError as e:
        bad = {err["loc"][0] for err in e.errors() if err.get("loc")}
        logger.debug(f"Dropping invalid filters {sorted(map(str, bad))} for {intent.entity.value}")
        cleaned = {k: v for k, v in intent.filters.items() if k not in bad}
        return FILTER_MODELS[intent.entity].model_validate(cleaned)


class QueryExecutor:
    """Answers a free-text question about the user's records."""

    def __init__(
        self,
        parser: IntentParser,
        store: RecordStore,
        synthesizer: ResponseSynthesizer,
    ) -> None:
        self.parser = parser
        self.store = store
        self.synthesizer = synthesizer

    async def execute_query(self, text: str, user_id: str) -> QueryResult:
        # Queries run whatever the confidence; only commands are gated.
        intent = await self.parser.parse_query(text, QUERYABLE_ENTITIES)

        filter_func = FILTERS.get(intent.entity)
        if filter_func is None:
            return QueryResult(success=False, response=UNKNOWN_ENTITY_RESPONSE, data=[], intent=intent)

        results = await filter_func(_typed_filters(intent), user_id, self.store)
        logger.debug(f"Query on {intent.entity.value} matched {len(results)} record(s)")

        response = await self.synthesizer.generate_response(intent.query or text, results)
        return QueryResult(success=True, response=response, data=results, intent=intent)
