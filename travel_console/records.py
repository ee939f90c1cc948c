"""
Stored record types.

Each record extends the payload it was created from with the identifiers
and timestamps the store assigns.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .models import (
    NewExpense,
    NewJournalEntry,
    NewMealLog,
    NewPerson,
    NewPin,
    NewWaterLog,
)


class RecordKind(str, Enum):
    PERSON = "person"
    EXPENSE = "expense"
    JOURNAL = "journal"
    WATER = "water"
    MEAL = "meal"
    PIN = "pin"


def _new_id() -> str:
    return str(uuid.uuid4())


class Person(NewPerson):
    id: str = Field(default_factory=_new_id)
    user_id: str = Field(alias="userId")
    met_on: date = Field(default_factory=date.today, alias="metOn")


class Expense(NewExpense):
    id: str = Field(default_factory=_new_id)
    user_id: str = Field(alias="userId")
    spent_at: date = Field(default_factory=date.today, alias="spentAt")
    created_at: Optional[datetime] = Field(default_factory=datetime.now, alias="createdAt")


class JournalEntry(NewJournalEntry):
    id: str = Field(default_factory=_new_id)
    user_id: str = Field(alias="userId")
    tagged_at: datetime = Field(default_factory=datetime.now, alias="taggedAt")


class WaterLog(NewWaterLog):
    id: str = Field(default_factory=_new_id)
    user_id: str = Field(alias="userId")
    logged_at: datetime = Field(default_factory=datetime.now, alias="loggedAt")


class MealLog(NewMealLog):
    id: str = Field(default_factory=_new_id)
    user_id: str = Field(alias="userId")
    eaten_at: date = Field(default_factory=date.today, alias="eatenAt")


class Pin(NewPin):
    id: str = Field(default_factory=_new_id)
    user_id: str = Field(alias="userId")
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")


RECORD_MODELS = {
    RecordKind.PERSON: Person,
    RecordKind.EXPENSE: Expense,
    RecordKind.JOURNAL: JournalEntry,
    RecordKind.WATER: WaterLog,
    RecordKind.MEAL: MealLog,
    RecordKind.PIN: Pin,
}
