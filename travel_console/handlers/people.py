"""
Contact handlers.
"""

import logging

from ..models import CommandAction, ExecutionResult, NewPerson
from ..records import RecordKind
from ..store import RecordStore

logger = logging.getLogger("travel-console.handlers.people")


async def handle_add_person(payload: NewPerson, user_id: str, store: RecordStore) -> ExecutionResult:
    person = await store.create(RecordKind.PERSON, user_id, payload)
    logger.info(f"Added contact {person.id}")
    return ExecutionResult(success=True, message=f"Added {person.name} to contacts", data=person)


HANDLERS = {CommandAction.ADD_PERSON: handle_add_person}
