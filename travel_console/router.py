"""
Command router that maps CommandAction to handler functions and dispatches.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from .models import CommandAction, ExecutionResult, WireModel
from .store import RecordStore

logger = logging.getLogger("travel-console.router")

# Type for handler functions: (payload, user_id, store) -> result
HandlerFunc = Callable[[WireModel, str, RecordStore], Awaitable[ExecutionResult]]

# Registry of action -> handler
_handlers: Dict[CommandAction, HandlerFunc] = {}


def register(action: CommandAction, handler: HandlerFunc) -> None:
    """Register a handler function for a command action."""
    _handlers[action] = handler
    logger.debug(f"Registered handler for {action.value}")


def get_handler(action: CommandAction) -> Optional[HandlerFunc]:
    """Get the registered handler for an action."""
    return _handlers.get(action)


async def route(
    action: CommandAction, payload: WireModel, user_id: str, store: RecordStore
) -> Optional[ExecutionResult]:
    """
    Run the handler registered for `action`.

    Returns None when nothing is registered so the caller can fall back.
    Storage errors raised by the handler propagate.
    """
    handler = get_handler(action)
    if handler is None:
        logger.debug(f"No handler registered for {action.value}")
        return None
    return await handler(payload, user_id, store)
