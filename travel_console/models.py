"""
Pydantic models for the Travel Console.

Defines command actions, query entities, the intents produced by the
parser, per-action payload variants, and the result types returned to
callers.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommandAction(str, Enum):
    """Create operations the command console can perform."""

    ADD_PERSON = "add_person"
    ADD_EXPENSE = "add_expense"
    ADD_JOURNAL = "add_journal"
    ADD_WATER = "add_water"
    ADD_MEAL = "add_meal"
    ADD_PIN = "add_pin"
    UNKNOWN = "unknown"


class QueryType(str, Enum):
    SEARCH = "search"
    FILTER = "filter"
    LIST = "list"


class QueryEntity(str, Enum):
    """Record collections a query can target."""

    PEOPLE = "people"
    EXPENSES = "expenses"
    JOURNAL = "journal"
    PINS = "pins"
    UNKNOWN = "unknown"


QUERYABLE_ENTITIES = [e.value for e in QueryEntity if e != QueryEntity.UNKNOWN]

_ACTION_VALUES = frozenset(a.value for a in CommandAction)
_TYPE_VALUES = frozenset(t.value for t in QueryType)
_ENTITY_VALUES = frozenset(e.value for e in QueryEntity)

ExpenseCategory = Literal["food", "transport", "stay", "gear", "misc"]
MealKind = Literal["breakfast", "lunch", "dinner", "snack"]
PinStatus = Literal["planned", "visited"]


def _clamp_confidence(value: Any) -> float:
    """Clamp an upstream confidence into [0, 1]; missing or garbage is 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if number != number:  # NaN
        return 0.0
    return max(0.0, min(1.0, number))


class WireModel(BaseModel):
    """Base for models exchanged with the store and the web client (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Command payload variants, one per action
# ---------------------------------------------------------------------------

class NewPerson(WireModel):
    name: str
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    email: Optional[str] = None
    where_met: Optional[str] = Field(default=None, alias="whereMet")
    notes: Optional[str] = None


class NewExpense(WireModel):
    amount: Decimal
    category: ExpenseCategory = "misc"
    note: Optional[str] = None
    currency: str = "INR"
    spent_at: Optional[date] = Field(default=None, alias="spentAt")


class NewJournalEntry(WireModel):
    title: Optional[str] = None
    body: Optional[str] = None


class NewWaterLog(WireModel):
    quantity_ml: int = Field(default=250, alias="quantityMl")


class NewMealLog(WireModel):
    meal: MealKind
    note: Optional[str] = None


class NewPin(WireModel):
    title: str
    address: Optional[str] = None
    notes: Optional[str] = None
    status: PinStatus = "planned"


PAYLOAD_MODELS: Dict[CommandAction, type] = {
    CommandAction.ADD_PERSON: NewPerson,
    CommandAction.ADD_EXPENSE: NewExpense,
    CommandAction.ADD_JOURNAL: NewJournalEntry,
    CommandAction.ADD_WATER: NewWaterLog,
    CommandAction.ADD_MEAL: NewMealLog,
    CommandAction.ADD_PIN: NewPin,
}


# ---------------------------------------------------------------------------
# Query filter variants, one per entity
# ---------------------------------------------------------------------------

class PeopleFilters(WireModel):
    where_met: Optional[str] = Field(default=None, alias="whereMet")
    name: Optional[str] = None


class ExpenseFilters(WireModel):
    date: Optional[str] = None
    category: Optional[str] = None
    min_amount: Optional[Decimal] = Field(default=None, alias="minAmount")


class JournalFilters(WireModel):
    keyword: Optional[str] = None


class PinFilters(WireModel):
    status: Optional[str] = None
    address: Optional[str] = None


FILTER_MODELS: Dict[QueryEntity, type] = {
    QueryEntity.PEOPLE: PeopleFilters,
    QueryEntity.EXPENSES: ExpenseFilters,
    QueryEntity.JOURNAL: JournalFilters,
    QueryEntity.PINS: PinFilters,
}


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------

class CommandIntent(BaseModel):
    """Structured reading of a free-text command."""

    action: CommandAction = CommandAction.UNKNOWN
    entity: str = "unknown"
    data: Dict[str, Any] = Field(default_factory=dict)
    confidence: float = 0.0

    @field_validator("action", mode="before")
    @classmethod
    def _known_action(cls, value: Any) -> Any:
        if isinstance(value, str) and value in _ACTION_VALUES:
            return value
        return CommandAction.UNKNOWN

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return _clamp_confidence(value)

    def payload(self) -> WireModel:
        """Validate `data` into the payload model for this action.

        Raises KeyError for the unknown action and pydantic.ValidationError
        when the fields do not fit the action's record.
        """
        return PAYLOAD_MODELS[self.action].model_validate(self.data)

    @classmethod
    def unknown(cls) -> "CommandIntent":
        return cls(action=CommandAction.UNKNOWN, entity="unknown", data={}, confidence=0.0)


class QueryIntent(BaseModel):
    """Structured reading of a free-text question about stored records."""

    type: QueryType = QueryType.SEARCH
    entity: QueryEntity = QueryEntity.UNKNOWN
    filters: Dict[str, Any] = Field(default_factory=dict)
    query: str = ""
    confidence: float = 0.0

    @field_validator("type", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> Any:
        if isinstance(value, str) and value in _TYPE_VALUES:
            return value
        return QueryType.SEARCH

    @field_validator("entity", mode="before")
    @classmethod
    def _known_entity(cls, value: Any) -> Any:
        if isinstance(value, str) and value in _ENTITY_VALUES:
            return value
        return QueryEntity.UNKNOWN

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return _clamp_confidence(value)

    def typed_filters(self) -> WireModel:
        """Validate `filters` into the filter model for this entity."""
        return FILTER_MODELS[self.entity].model_validate(self.filters)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class ExecutionResult(BaseModel):
    """Outcome of one command."""

    success: bool
    message: str = Field(min_length=1)
    data: Optional[Any] = None

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            out["data"] = _wire(self.data)
        return out


class QueryResult(BaseModel):
    """Outcome of one query: a narrated answer plus the raw matches."""

    success: bool
    response: str
    data: List[Any] = Field(default_factory=list)
    intent: QueryIntent

    def to_wire(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "response": self.response,
            "data": [_wire(r) for r in self.data],
            "intent": self.intent.model_dump(mode="json"),
        }


def _wire(value: Any) -> Any:
    if isinstance(value, WireModel):
        return value.to_wire()
    if isinstance(value, list):
        return [_wire(v) for v in value]
    return value
