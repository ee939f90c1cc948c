"""
Journal handlers.
"""

import logging

from ..models import CommandAction, ExecutionResult, NewJournalEntry
from ..records import RecordKind
from ..store import RecordStore

logger = logging.getLogger("travel-console.handlers.journal")


async def handle_add_journal(payload: NewJournalEntry, user_id: str, store: RecordStore) -> ExecutionResult:
    entry = await store.create(RecordKind.JOURNAL, user_id, payload)
    logger.info(f"Added journal entry {entry.id}")
    return ExecutionResult(success=True, message="Added journal entry", data=entry)


HANDLERS = {CommandAction.ADD_JOURNAL: handle_add_journal}
