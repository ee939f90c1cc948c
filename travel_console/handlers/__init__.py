"""
Command handler registration.

Each handler module exposes a HANDLERS mapping of action to handler.
Registration is repeatable, so a cleared registry can be refilled.
"""

import logging

from ..router import register

logger = logging.getLogger("travel-console.handlers")


def register_all_handlers() -> None:
    """Register every handler module's HANDLERS with the router."""
    from . import people, expenses, journal, wellness, pins

    for module in (people, expenses, journal, wellness, pins):
        for action, handler in module.HANDLERS.items():
            register(action, handler)

    logger.debug("All command handlers registered")
