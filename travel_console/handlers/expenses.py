"""
Expense handlers.
"""

import logging

from ..models import CommandAction, ExecutionResult, NewExpense
from ..records import RecordKind
from ..store import RecordStore

logger = logging.getLogger("travel-console.handlers.expenses")


async def handle_add_expense(payload: NewExpense, user_id: str, store: RecordStore) -> ExecutionResult:
    expense = await store.create(RecordKind.EXPENSE, user_id, payload)
    logger.info(f"Logged expense {expense.id} ({expense.category})")
    return ExecutionResult(success=True, message=f"Logged ₹{expense.amount} expense", data=expense)


HANDLERS = {CommandAction.ADD_EXPENSE: handle_add_expense}
