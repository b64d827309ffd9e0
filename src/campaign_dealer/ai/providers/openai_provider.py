"""OpenAI Chat Completions backend using native JSON mode."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI

from campaign_dealer.ai.base import AICompletionResult, AIPrompt, AIProvider
from campaign_dealer.config import AISettings

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
MAX_TOKENS = 4096
TEMPERATURE = 1.5


class OpenAIProvider(AIProvider):
    """``AIProvider`` backed by ``openai.AsyncOpenAI``.

    JSON mode (``response_format={"type": "json_object"}``) is used for every
    request; the prompt's schema is described in the system prompt rather
    than enforced by the API.

    Args:
        settings: AI settings; ``api_key`` is required, ``model`` optional.
        client:   Pre-built client, used by tests.
    """

    def __init__(self, settings: AISettings, client: AsyncOpenAI | None = None) -> None:
        self.model = settings.model or DEFAULT_MODEL
        self._client = client if client is not None else AsyncOpenAI(api_key=settings.api_key)

    def _request(self, prompt: AIPrompt) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
        }

    async def complete(self, prompt: AIPrompt) -> AICompletionResult:
        response = await self._client.chat.completions.create(**self._request(prompt))
        if not response.choices:
            return AICompletionResult(text="")
        return AICompletionResult(text=response.choices[0].message.content or "")

    async def stream(self, prompt: AIPrompt) -> AsyncIterator[str]:
        chunks = await self._client.chat.completions.create(**self._request(prompt), stream=True)
        async for chunk in chunks:
            if not chunk.choices:
                continue
            content = chunk.choices[0].delta.content
            if content:
                yield content
