"""
Destination pin handlers.
"""

import logging

from ..models import CommandAction, ExecutionResult, NewPin
from ..records import RecordKind
from ..store import RecordStore

logger = logging.getLogger("travel-console.handlers.pins")


async def handle_add_pin(payload: NewPin, user_id: str, store: RecordStore) -> ExecutionResult:
    pin = await store.create(RecordKind.PIN, user_id, payload)
    logger.info(f"Pinned {pin.title} as {pin.status}")
    return ExecutionResult(success=True, message=f"Added {pin.title} to {pin.status} places", data=pin)


HANDLERS = {CommandAction.ADD_PIN: handle_add_pin}
