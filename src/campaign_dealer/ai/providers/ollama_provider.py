"""Ollama backend over the ``/api/chat`` HTTP endpoint.

``OllamaProvider`` talks to a local (or self-hosted) Ollama server with
``httpx.AsyncClient``.  Ollama's native JSON mode is always on: the prompt's
JSON schema is forwarded as ``format`` when present, otherwise ``"json"``.

``complete`` sends ``stream: false`` and reads ``message.content`` from the
single response object.  ``stream`` sends ``stream: true`` and reads the
newline-delimited JSON chunks until one reports ``done``.

No client-side timeout is imposed: local models can take minutes on modest
hardware, and an HTTP error or a dropped connection still propagates as the
``httpx`` exception it is.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from campaign_dealer.ai.base import AICompletionResult, AIPrompt, AIProvider
from campaign_dealer.config import AISettings

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.1"
TEMPERATURE = 1.5


class OllamaProvider(AIProvider):
    """``AIProvider`` for an Ollama server.

    Attributes:
        model:     Ollama model tag (``llama3.1`` unless overridden).
        endpoint:  Full ``/api/chat`` URL derived from ``ollama_host``.

    Args:
        settings: AI settings; ``ollama_host`` is required, ``model`` optional.
        client:   Shared ``httpx.AsyncClient``.  When omitted, a client is
                  opened and closed around each request.
    """

    def __init__(self, settings: AISettings, client: httpx.AsyncClient | None = None) -> None:
        self.model = settings.model or DEFAULT_MODEL
        self.endpoint = f"{settings.ollama_host.rstrip('/')}/api/chat"
        self._client = client

    # ── Internal helpers ──────────────────────────────────────────────────────

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=None) as client:
            yield client

    def _build_payload(self, prompt: AIPrompt, *, stream: bool) -> dict[str, Any]:
        """Construct the ``/api/chat`` request body."""
        return {
            "model": self.model,
            "stream": stream,
            "format": prompt.json_schema if prompt.json_schema is not None else "json",
            "options": {"temperature": TEMPERATURE},
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
        }

    # ── AIProvider ────────────────────────────────────────────────────────────

    async def complete(self, prompt: AIPrompt) -> AICompletionResult:
        payload = self._build_payload(prompt, stream=False)
        async with self._http() as client:
            response = await client.post(self.endpoint, json=payload)
            response.raise_for_status()
            data = response.json()

        message = data.get("message") or {}
        return AICompletionResult(text=message.get("content") or "")

    async def stream(self, prompt: AIPrompt) -> AsyncIterator[str]:
        payload = self._build_payload(prompt, stream=True)
        async with self._http() as client:
            async with client.stream("POST", self.endpoint, json=payload) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    chunk = json.loads(line)
                    content = (chunk.get("message") or {}).get("content")
                    if content:
                        yield content
                    if chunk.get("done"):
                        break
