"""
Entity-aware record filters for the query console.

Each filter lists the user's whole collection from the store and narrows
it in memory. All given filters must match (AND); substring matches are
case-insensitive.
"""

import logging
from datetime import date
from typing import Awaitable, Callable, Dict, List, Optional

from .models import (
    ExpenseFilters,
    JournalFilters,
    PeopleFilters,
    PinFilters,
    QueryEntity,
    WireModel,
)
from .records import RecordKind
from .store import RecordStore

logger = logging.getLogger("travel-console.filters")

FilterFunc = Callable[[WireModel, str, RecordStore], Awaitable[List[WireModel]]]


def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def _resolve_date(value: Optional[str]) -> Optional[str]:
    """Map the 'today' keyword to the current calendar date."""
    if not value:
        return None
    if value.strip().lower() == "today":
        return date.today().isoformat()
    return value.strip()


async def filter_people(filters: PeopleFilters, user_id: str, store: RecordStore) -> List[WireModel]:
    people = await store.list(RecordKind.PERSON, user_id)
    if filters.where_met:
        people = [p for p in people if _contains(p.where_met, filters.where_met)]
    if filters.name:
        people = [p for p in people if _contains(p.name, filters.name)]
    return people


async def filter_expenses(filters: ExpenseFilters, user_id: str, store: RecordStore) -> List[WireModel]:
    expenses = await store.list(RecordKind.EXPENSE, user_id, on_date=_resolve_date(filters.date))
    if filters.category:
        expenses = [e for e in expenses if e.category == filters.category]
    if filters.min_amount is not None:
        expenses = [e for e in expenses if e.amount >= filters.min_amount]
    return expenses


async def filter_journal(filters: JournalFilters, user_id: str, store: RecordStore) -> List[WireModel]:
    entries = await store.list(RecordKind.JOURNAL, user_id)
    if filters.keyword:
        entries = [
            e for e in entries
            if _contains(e.title, filters.keyword) or _contains(e.body, filters.keyword)
        ]
    return entries


async def filter_pins(filters: PinFilters, user_id: str, store: RecordStore) -> List[WireModel]:
    pins = await store.list(RecordKind.PIN, user_id)
    if filters.status:
        pins = [p for p in pins if p.status == filters.status]
    if filters.address:
        pins = [
            p for p in pins
            if _contains(p.address, filters.address) or _contains(p.title, filters.address)
        ]
    return pins


FILTERS: Dict[QueryEntity, FilterFunc] = {
    QueryEntity.PEOPLE: filter_people,
    QueryEntity.EXPENSES: filter_expenses,
    QueryEntity.JOURNAL: filter_journal,
    QueryEntity.PINS: filter_pins,
}
