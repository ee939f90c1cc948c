"""
Narrates query results back to the user through the language model.
"""

import json
import logging
from typing import Any, List, Optional

from .llm import LanguageClient
from .models import WireModel
from .prompts import SYNTHESIS_PROMPT, synthesis_message

logger = logging.getLogger("travel-console.synthesizer")

APOLOGY = "I encountered an error while processing your request."
EMPTY_REPLY = "I couldn't process your request."


def _serialize(results: List[Any]) -> str:
    rows = [r.to_wire() if isinstance(r, WireModel) else r for r in results]
    return json.dumps(rows, ensure_ascii=False, default=str)


class ResponseSynthesizer:
    def __init__(self, llm: Optional[LanguageClient] = None, prompt: str = SYNTHESIS_PROMPT) -> None:
        self.llm = llm or LanguageClient()
        self.prompt = prompt

    async def generate_response(self, query: str, results: List[Any]) -> str:
        """Short conversational summary of `results`; the fixed apology on any failure."""
        try:
            reply = await self.llm.complete_text(self.prompt, synthesis_message(query, _serialize(results)))
        except Exception as e:
            logger.warning(f"Failed to generate response with language model: {e}", exc_info=True)
            return APOLOGY
        return reply.strip() if reply and reply.strip() else EMPTY_REPLY
