"""
Tests for the language-model backed intent parser.

The language client is an AsyncMock; no network calls are made.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from travel_console.llm import LanguageModelError
from travel_console.models import CommandAction, QueryEntity, QueryType
from travel_console.parser import IntentParser
from travel_console.prompts import COMMAND_PROMPT


def _llm(reply=None, error=None):
    llm = MagicMock()
    if error is not None:
        llm.complete_json = AsyncMock(side_effect=error)
    else:
        llm.complete_json = AsyncMock(return_value=reply)
    return llm


class TestParseCommand:
    """Test command-mode parsing."""

    @pytest.mark.asyncio
    async def test_well_formed_reply(self):
        parser = IntentParser(_llm({
            "action": "add_person",
            "entity": "person",
            "data": {"name": "John", "phone": "1234567890", "whereMet": "Pune"},
            "confidence": 0.95,
        }))
        intent = await parser.parse_command("add contact John with phone 1234567890 met in Pune")
        assert intent.action == CommandAction.ADD_PERSON
        assert intent.entity == "person"
        assert intent.data["whereMet"] == "Pune"
        assert intent.confidence == 0.95

    @pytest.mark.asyncio
    async def test_sends_prompt_and_text(self):
        llm = _llm({"action": "add_water", "data": {"quantityMl": 300}, "confidence": 0.9})
        await IntentParser(llm).parse_command("water 300ml")
        system, user = llm.complete_json.call_args.args
        assert system == COMMAND_PROMPT
        assert user == "water 300ml"

    @pytest.mark.parametrize("raw,expected", [(1.5, 1.0), (-3, 0.0), (None, 0.0), ("0.8", 0.8), ("high", 0.0)])
    @pytest.mark.asyncio
    async def test_confidence_clamped(self, raw, expected):
        reply = {"action": "add_journal", "entity": "journal", "data": {}}
        if raw is not None:
            reply["confidence"] = raw
        intent = await IntentParser(_llm(reply)).parse_command("journal")
        assert intent.confidence == expected

    @pytest.mark.asyncio
    async def test_missing_keys_default(self):
        intent = await IntentParser(_llm({})).parse_command("anything")
        assert intent.action == CommandAction.UNKNOWN
        assert intent.entity == "unknown"
        assert intent.data == {}
        assert intent.confidence == 0.0

    @pytest.mark.asyncio
    async def test_unlisted_action_becomes_unknown(self):
        intent = await IntentParser(_llm({"action": "query", "confidence": 0.9})).parse_command("show people")
        assert intent.action == CommandAction.UNKNOWN

    @pytest.mark.parametrize(
        "error",
        [RuntimeError("connection reset"), LanguageModelError("bad json"), TimeoutError()],
    )
    @pytest.mark.asyncio
    async def test_failures_degrade_to_unknown(self, error):
        intent = await IntentParser(_llm(error=error)).parse_command("add person X, phone 1")
        assert intent.action == CommandAction.UNKNOWN
        assert intent.entity == "unknown"
        assert intent.data == {}
        assert intent.confidence == 0.0

    @pytest.mark.asyncio
    async def test_non_object_data_is_parse_failure(self):
        intent = await IntentParser(_llm({"action": "add_person", "data": ["John"], "confidence": 0.9})).parse_command("x")
        assert intent.action == CommandAction.UNKNOWN
        assert intent.confidence == 0.0


class TestParseQuery:
    """Test query-mode parsing."""

    @pytest.mark.asyncio
    async def test_well_formed_reply(self):
        parser = IntentParser(_llm({
            "type": "filter",
            "entity": "people",
            "filters": {"whereMet": "Pune"},
            "query": "show me people in Pune",
            "confidence": 0.95,
        }))
        intent = await parser.parse_query("show me people in Pune", ["people", "expenses"])
        assert intent.type == QueryType.FILTER
        assert intent.entity == QueryEntity.PEOPLE
        assert intent.filters == {"whereMet": "Pune"}
        assert intent.confidence == 0.95

    @pytest.mark.asyncio
    async def test_prompt_lists_available_entities(self):
        llm = _llm({"entity": "pins"})
        await IntentParser(llm).parse_query("visited places", ["people", "pins"])
        system, _ = llm.complete_json.call_args.args
        assert "Available data types: people, pins" in system

    @pytest.mark.asyncio
    async def test_query_defaults_to_input(self):
        intent = await IntentParser(_llm({"entity": "journal", "filters": {"keyword": "food"}})).parse_query(
            "journal entries about food"
        )
        assert intent.query == "journal entries about food"
        assert intent.type == QueryType.SEARCH
        assert intent.confidence == 0.0

    @pytest.mark.asyncio
    async def test_confidence_clamped(self):
        intent = await IntentParser(_llm({"entity": "pins", "confidence": 7})).parse_query("pins")
        assert intent.confidence == 1.0

    @pytest.mark.asyncio
    async def test_unlisted_entity_and_type(self):
        intent = await IntentParser(_llm({"type": "aggregate", "entity": "weather"})).parse_query("rain?")
        assert intent.type == QueryType.SEARCH
        assert intent.entity == QueryEntity.UNKNOWN

    @pytest.mark.asyncio
    async def test_failure_degrades(self):
        intent = await IntentParser(_llm(error=RuntimeError("503"))).parse_query("show me people in Pune")
        assert intent.entity == QueryEntity.UNKNOWN
        assert intent.filters == {}
        assert intent.query == "show me people in Pune"
        assert intent.confidence == 0.0
