"""
Daily routine handlers: water intake and meals.
"""

import logging

from ..models import CommandAction, ExecutionResult, NewMealLog, NewWaterLog
from ..records import RecordKind
from ..store import RecordStore

logger = logging.getLogger("travel-console.handlers.wellness")


async def handle_add_water(payload: NewWaterLog, user_id: str, store: RecordStore) -> ExecutionResult:
    log = await store.create(RecordKind.WATER, user_id, payload)
    return ExecutionResult(success=True, message=f"Logged {log.quantity_ml}ml water intake", data=log)


async def handle_add_meal(payload: NewMealLog, user_id: str, store: RecordStore) -> ExecutionResult:
    log = await store.create(RecordKind.MEAL, user_id, payload)
    return ExecutionResult(success=True, message=f"Logged {log.meal}", data=log)


HANDLERS = {
    CommandAction.ADD_WATER: handle_add_water,
    CommandAction.ADD_MEAL: handle_add_meal,
}
