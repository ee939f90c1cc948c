"""
Thin async wrapper around the OpenAI chat completions API.

The client is created lazily so a missing API key only surfaces when a
completion is requested, where the parser and synthesizer already
degrade gracefully.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

logger = logging.getLogger("travel-console.llm")


class LanguageModelError(Exception):
    """Raised when a completion is missing or not in the requested shape."""


def _get_config() -> Dict[str, Any]:
    return {
        "model": os.getenv("TRAVEL_CONSOLE_MODEL", "gpt-5"),
        "timeout": float(os.getenv("TRAVEL_CONSOLE_LLM_TIMEOUT", "30")),
    }


class LanguageClient:
    """Sends a system prompt plus one user message and returns the reply."""

    def __init__(
        self,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        cfg = _get_config()
        self.model = model or cfg["model"]
        self.timeout = timeout if timeout is not None else cfg["timeout"]
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(timeout=self.timeout)
        return self._client

    async def _complete(self, system: str, user: str, json_mode: bool) -> str:
        kwargs: Dict[str, Any] = dict(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        )
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        resp = await self.client.chat.completions.create(**kwargs)
        return resp.choices[0].message.content or ""

    async def complete_json(self, system: str, user: str) -> Dict[str, Any]:
        """Request a JSON object reply. Raises LanguageModelError on any other shape."""
        raw = await self._complete(system, user, json_mode=True)
        try:
            data = json.loads(raw or "{}")
        except json.JSONDecodeError as exc:
            raise LanguageModelError(f"Model returned invalid JSON: {raw[:120]!r}") from exc
        if not isinstance(data, dict):
            raise LanguageModelError(f"Model returned {type(data).__name__}, expected an object")
        logger.debug(f"JSON completion: {data}")
        return data

    async def complete_text(self, system: str, user: str) -> str:
        return await self._complete(system, user, json_mode=False)
