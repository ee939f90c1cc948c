"""
Deterministic keyword/regex command parser.

No AI models used. Runs when the language model is unavailable or not
confident enough. Rules are tried in a fixed priority order and the
first one that matches performs exactly one create operation.

Triggers are tested against the lower-cased, trimmed command. Values
are extracted case-insensitively from the trimmed original so names and
places keep the user's casing.
"""

import logging
import re
from decimal import Decimal
from typing import Awaitable, Callable, List, Optional, Tuple

from .handlers.expenses import handle_add_expense
from .handlers.journal import handle_add_journal
from .handlers.people import handle_add_person
from .handlers.wellness import handle_add_meal, handle_add_water
from .models import (
    ExecutionResult,
    NewExpense,
    NewJournalEntry,
    NewMealLog,
    NewPerson,
    NewWaterLog,
)
from .store import RecordStore

logger = logging.getLogger("travel-console.fallback")

NOT_RECOGNIZED = (
    "Command not recognized. Try: 'add person [name], phone [number]' or 'expense 100 for food'"
)

QUICK_ENTRY_TITLE = "Quick Entry"
DEFAULT_WATER_ML = 250

_PERSON_NAME = re.compile(r"(?:add person|add contact)\s+(.+?)(?:,|\s+(?:phone|number|contact))", re.I)
_PERSON_PHONE = re.compile(r"(?:phone|number|contact)\s+([+\d\s-]+)", re.I)
_PERSON_PLACE = re.compile(r"\b(?:met at|at|in)\s+([^,]+)", re.I)

_EXPENSE_AMOUNT = re.compile(r"[₹$]?(\d+(?:\.\d{2})?)")
_EXPENSE_CATEGORY = re.compile(r"\b(?:for|on)\s+(food|transport|stay|gear|misc)\b", re.I)

_WATER_QUANTITY = re.compile(r"(\d+)\s*(?:ml|glass)")

_MEALS = ("breakfast", "lunch", "dinner")


def _extract_person(command: str) -> Optional[NewPerson]:
    """Extract a contact; None when no name can be found."""
    m = _PERSON_NAME.search(command)
    if not m or not m.group(1).strip():
        return None

    phone = None
    for m_phone in _PERSON_PHONE.finditer(command):
        if m_phone.group(1).strip():
            phone = m_phone.group(1).strip()
            break

    place = None
    m_place = _PERSON_PLACE.search(command)
    if m_place:
        place = m_place.group(1).strip() or None

    return NewPerson(name=m.group(1).strip(), phone=phone, where_met=place)


def _extract_expense(command: str, original: str) -> Optional[NewExpense]:
    """Extract an expense; None without an amount."""
    m = _EXPENSE_AMOUNT.search(command)
    if not m:
        return None
    m_cat = _EXPENSE_CATEGORY.search(command)
    category = m_cat.group(1).lower() if m_cat else "misc"
    return NewExpense(amount=Decimal(m.group(1)), category=category, note=original)


def _extract_water(cmd: str) -> NewWaterLog:
    m = _WATER_QUANTITY.search(cmd)
    quantity = int(m.group(1)) if m else DEFAULT_WATER_ML
    return NewWaterLog(quantity_ml=quantity)


def _meal_kind(cmd: str) -> str:
    for meal in _MEALS:
        if meal in cmd:
            return meal
    return "snack"


# Rule = (name, trigger(cmd), action(cmd, command, original, user_id, store))
RuleAction = Callable[[str, str, str, str, RecordStore], Awaitable[Optional[ExecutionResult]]]


async def _person_rule(cmd, command, original, user_id, store):
    payload = _extract_person(command)
    if payload is None:
        return None
    return await handle_add_person(payload, user_id, store)


async def _expense_rule(cmd, command, original, user_id, store):
    payload = _extract_expense(command, original)
    if payload is None:
        return None
    return await handle_add_expense(payload, user_id, store)


async def _water_rule(cmd, command, original, user_id, store):
    return await handle_add_water(_extract_water(cmd), user_id, store)


async def _meal_rule(cmd, command, original, user_id, store):
    return await handle_add_meal(NewMealLog(meal=_meal_kind(cmd), note=original), user_id, store)


async def _journal_rule(cmd, command, original, user_id, store):
    entry = NewJournalEntry(title=QUICK_ENTRY_TITLE, body=original)
    return await handle_add_journal(entry, user_id, store)


_RULES: List[Tuple[str, Callable[[str], bool], RuleAction]] = [
    ("person", lambda c: "add person" in c or "add contact" in c, _person_rule),
    ("expense", lambda c: "expense" in c or "spent" in c or "cost" in c, _expense_rule),
    ("water", lambda c: "water" in c and ("ml" in c or "glass" in c), _water_rule),
    ("meal", lambda c: any(m in c for m in ("breakfast", "lunch", "dinner", "snack")), _meal_rule),
    ("journal", lambda c: "journal" in c or "note" in c or "today" in c, _journal_rule),
]


async def fallback_parse(text: str, user_id: str, store: RecordStore) -> ExecutionResult:
    """
    Parse and execute a command with the deterministic rules.

    A rule whose trigger fires but whose extraction fails falls through
    to the next rule.
    """
    original = text or ""
    command = original.strip()
    cmd = command.lower()

    for name, trigger, action in _RULES:
        if not trigger(cmd):
            continue
        result = await action(cmd, command, original, user_id, store)
        if result is not None:
            logger.debug(f"Fallback rule '{name}' handled {command[:80]!r}")
            return result
        logger.debug(f"Fallback rule '{name}' triggered but extracted nothing")

    return ExecutionResult(success=False, message=NOT_RECOGNIZED)
