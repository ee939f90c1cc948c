"""
Tests for the record store adapters.

The HTTP store is exercised against httpx.MockTransport; no network
calls are made.
"""

import json
from datetime import date, timedelta
from decimal import Decimal

import httpx
import pytest

from travel_console.models import NewExpense, NewMealLog, NewPerson, NewWaterLog
from travel_console.records import Expense, Person, RecordKind
from travel_console.store import (
    HttpRecordStore,
    InMemoryRecordStore,
    StoreError,
    create_store,
)


class TestInMemoryStore:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_user(self):
        store = InMemoryRecordStore()
        person = await store.create(RecordKind.PERSON, "u1", NewPerson(name="John"))
        assert isinstance(person, Person)
        assert person.id
        assert person.user_id == "u1"
        assert person.met_on == date.today()

    @pytest.mark.asyncio
    async def test_list_is_per_user_newest_first(self):
        store = InMemoryRecordStore()
        await store.create(RecordKind.PERSON, "u1", NewPerson(name="First"))
        await store.create(RecordKind.PERSON, "u1", NewPerson(name="Second"))
        await store.create(RecordKind.PERSON, "u2", NewPerson(name="Elsewhere"))
        assert [p.name for p in await store.list(RecordKind.PERSON, "u1")] == ["Second", "First"]

    @pytest.mark.asyncio
    async def test_list_on_date(self):
        store = InMemoryRecordStore()
        earlier = date.today() - timedelta(days=3)
        await store.create(RecordKind.EXPENSE, "u1", NewExpense(amount=Decimal("10"), spent_at=earlier))
        await store.create(RecordKind.EXPENSE, "u1", NewExpense(amount=Decimal("20")))
        today = await store.list(RecordKind.EXPENSE, "u1", on_date=date.today().isoformat())
        assert [e.amount for e in today] == [Decimal("20")]
        assert await store.list(RecordKind.EXPENSE, "u1", on_date="not-a-date") == []

    @pytest.mark.asyncio
    async def test_water_and_meal_by_date(self):
        store = InMemoryRecordStore()
        await store.create(RecordKind.WATER, "u1", NewWaterLog(quantity_ml=300))
        await store.create(RecordKind.MEAL, "u1", NewMealLog(meal="lunch"))
        iso = date.today().isoformat()
        assert len(await store.list(RecordKind.WATER, "u1", on_date=iso)) == 1
        assert len(await store.list(RecordKind.MEAL, "u1", on_date=iso)) == 1


def _store(handler):
    return HttpRecordStore("http://companion.test/", transport=httpx.MockTransport(handler))


class TestHttpStore:
    @pytest.mark.asyncio
    async def test_create_posts_wire_payload(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["user"] = request.headers.get("x-user-id")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "p1", "userId": "u1", **seen["body"]})

        person = await _store(handler).create(RecordKind.PERSON, "u1", NewPerson(name="John", where_met="Pune"))
        assert seen["method"] == "POST"
        assert seen["path"] == "/api/people"
        assert seen["user"] == "u1"
        assert seen["body"] == {"name": "John", "whereMet": "Pune"}
        assert person.id == "p1"
        assert person.where_met == "Pune"

    @pytest.mark.asyncio
    async def test_list_expenses_passes_date(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/expenses"
            assert request.url.params["date"] == "2025-01-05"
            return httpx.Response(200, json=[
                {"id": "e1", "amount": "12.50", "category": "food", "spentAt": "2025-01-05"},
            ])

        expenses = await _store(handler).list(RecordKind.EXPENSE, "u1", on_date="2025-01-05")
        assert len(expenses) == 1
        assert isinstance(expenses[0], Expense)
        assert expenses[0].amount == Decimal("12.50")
        assert expenses[0].user_id == "u1"

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        store = _store(lambda request: httpx.Response(400, json={"message": "Invalid person data"}))
        with pytest.raises(StoreError, match="HTTP 400"):
            await store.create(RecordKind.PERSON, "u1", NewPerson(name="John"))

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(StoreError, match="Cannot reach"):
            await _store(handler).list(RecordKind.PERSON, "u1")

    @pytest.mark.asyncio
    async def test_non_list_response(self):
        store = _store(lambda request: httpx.Response(200, json={"items": []}))
        with pytest.raises(StoreError):
            await store.list(RecordKind.PIN, "u1")

    @pytest.mark.asyncio
    async def test_non_object_create_response(self):
        store = _store(lambda request: httpx.Response(200, json=["p1"]))
        with pytest.raises(StoreError, match="Expected a person record"):
            await store.create(RecordKind.PERSON, "u1", NewPerson(name="John"))

    @pytest.mark.asyncio
    async def test_water_listing_unsupported(self):
        store = _store(lambda request: httpx.Response(200, json=[]))
        with pytest.raises(StoreError, match="not supported"):
            await store.list(RecordKind.WATER, "u1")


class TestCreateStore:
    def test_default_is_in_memory(self, monkeypatch):
        monkeypatch.delenv("TRAVEL_CONSOLE_STORE_URL", raising=False)
        assert isinstance(create_store(), InMemoryRecordStore)

    def test_url_selects_http(self, monkeypatch):
        monkeypatch.setenv("TRAVEL_CONSOLE_STORE_URL", "http://companion:5000")
        monkeypatch.setenv("TRAVEL_CONSOLE_STORE_TIMEOUT", "5")
        store = create_store()
        assert isinstance(store, HttpRecordStore)
        assert store.base_url == "http://companion:5000"
        assert store.timeout == 5.0
