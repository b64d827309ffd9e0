"""Anthropic Messages API backend.

Two output modes
----------------
Schema-constrained
    When the prompt carries a JSON schema, the request declares a single
    ``generate_json`` tool whose ``input_schema`` is that schema and pins
    ``tool_choice`` to it.  Claude must answer with a ``tool_use`` block, and
    the block's ``input`` (already a parsed object) is serialized back to
    JSON text.  This keeps the creative temperature while guaranteeing the
    shape.  A response without a ``tool_use`` block is a provider failure
    (``MissingStructuredOutputError``), not a parsing failure.

Prefill
    Without a schema, the conversation ends with an assistant turn of
    ``"{"`` so the model continues a JSON object; the prefill is prepended
    to the returned text.

Streaming mirrors both modes: ``input_json_delta`` fragments in schema
mode, or ``"{"`` followed by ``text_delta`` fragments in prefill mode.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

from anthropic import AsyncAnthropic

from campaign_dealer.ai.base import AICompletionResult, AIPrompt, AIProvider
from campaign_dealer.config import AISettings
from campaign_dealer.errors import MissingStructuredOutputError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
MAX_TOKENS = 4096
TEMPERATURE = 1.0
TOOL_NAME = "generate_json"
TOOL_DESCRIPTION = "Generate structured JSON output"
PREFILL = "{"


class AnthropicProvider(AIProvider):
    """``AIProvider`` backed by ``anthropic.AsyncAnthropic``.

    Args:
        settings: AI settings; ``api_key`` is required, ``model`` optional.
        client:   Pre-built client, used by tests.
    """

    def __init__(self, settings: AISettings, client: AsyncAnthropic | None = None) -> None:
        self.model = settings.model or DEFAULT_MODEL
        self._client = client if client is not None else AsyncAnthropic(api_key=settings.api_key)

    # ── Request framing ──────────────────────────────────────────────────────

    def _tool_request(self, prompt: AIPrompt, json_schema: dict[str, Any]) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "system": prompt.system,
            "messages": [{"role": "user", "content": prompt.user}],
            "tools": [
                {
                    "name": TOOL_NAME,
                    "description": TOOL_DESCRIPTION,
                    "input_schema": json_schema,
                }
            ],
            "tool_choice": {"type": "tool", "name": TOOL_NAME},
        }

    def _prefill_request(self, prompt: AIPrompt) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
            "system": prompt.system,
            "messages": [
                {"role": "user", "content": prompt.user},
                {"role": "assistant", "content": PREFILL},
            ],
        }

    # ── Complete ─────────────────────────────────────────────────────────────

    async def complete(self, prompt: AIPrompt) -> AICompletionResult:
        if prompt.json_schema is not None:
            return await self._complete_with_tool_use(prompt, prompt.json_schema)
        return await self._complete_with_prefill(prompt)

    async def _complete_with_tool_use(
        self, prompt: AIPrompt, json_schema: dict[str, Any]
    ) -> AICompletionResult:
        response = await self._client.messages.create(**self._tool_request(prompt, json_schema))

        tool_block = next((block for block in response.content if block.type == "tool_use"), None)
        if tool_block is None:
            logger.warning(
                "Anthropic response had no tool_use block (stop_reason=%s)",
                getattr(response, "stop_reason", None),
            )
            raise MissingStructuredOutputError("Expected tool_use block in AI response")

        return AICompletionResult(text=json.dumps(tool_block.input))

    async def _complete_with_prefill(self, prompt: AIPrompt) -> AICompletionResult:
        response = await self._client.messages.create(**self._prefill_request(prompt))
        text = "".join(block.text for block in response.content if block.type == "text")
        return AICompletionResult(text=PREFILL + text)

    # ── Stream ───────────────────────────────────────────────────────────────

    async def stream(self, prompt: AIPrompt) -> AsyncIterator[str]:
        if prompt.json_schema is not None:
            request = self._tool_request(prompt, prompt.json_schema)
            delta_type = "input_json_delta"
        else:
            yield PREFILL
            request = self._prefill_request(prompt)
            delta_type = "text_delta"

        async with self._client.messages.stream(**request) as events:
            async for event in events:
                if event.type != "content_block_delta" or event.delta.type != delta_type:
                    continue
                if delta_type == "input_json_delta":
                    yield event.delta.partial_json
                else:
                    yield event.delta.text
