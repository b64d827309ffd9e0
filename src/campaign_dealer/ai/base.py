"""Provider-agnostic contract for text-generation backends.

Every backend (Anthropic, OpenAI, Ollama) implements ``AIProvider``:

- ``complete(prompt)`` sends one stateless request and returns the full
  response text.
- ``stream(prompt)`` sends the same request and yields text fragments as
  they arrive.  It is an async generator: lazy, finite and single-consumer.
  A consumer that stops iterating stops pulling fragments; the in-flight
  backend request is released on a best-effort basis only.

Prompt builders produce ``AIPrompt`` values; nothing in a prompt is
provider-specific.  When ``json_schema`` is present, backends that support
schema-constrained output use it; the rest fall back to their JSON mode.

``call_provider`` is the one place backend failures are turned into
``AIProviderError``.  The campaign service never calls ``complete`` directly.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any

from campaign_dealer.errors import AIProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AIPrompt:
    """A single system + user exchange.

    Attributes:
        system:      System prompt (persona, schema, output contract).
        user:        User turn with the request-specific details.
        json_schema: Optional JSON schema the output must satisfy.
    """

    system: str
    user: str
    json_schema: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class AICompletionResult:
    """The full text returned by a one-shot completion."""

    text: str


class AIProvider(ABC):
    """Contract every text-generation backend implements.

    Adding a backend means writing a subclass and registering a factory for
    it in ``campaign_dealer.ai.registry``; no other code changes.
    """

    #: Model tag used for requests (provider default or configured override).
    model: str

    @abstractmethod
    async def complete(self, prompt: AIPrompt) -> AICompletionResult:
        """Send ``prompt`` and return the whole response.

        Backend errors (network, auth, rate limit, timeouts raised by the
        client library) propagate unchanged.
        """

    @abstractmethod
    def stream(self, prompt: AIPrompt) -> AsyncIterator[str]:
        """Send ``prompt`` and yield text fragments as they arrive.

        Implementations are ``async def`` generators.  The fragments
        concatenate to the same text ``complete`` would have returned.
        """


async def call_provider(provider: AIProvider, prompt: AIPrompt) -> AICompletionResult:
    """Run ``provider.complete`` and categorize any failure as a provider error.

    ``AIProviderError`` subclasses raised by the provider itself (for example
    a missing structured payload) pass through unchanged.  Anything else is
    wrapped in a generic ``AIProviderError`` with the original exception as
    ``__cause__``.  No retries are attempted.

    Args:
        provider: The resolved backend.
        prompt:   Prompt to send.

    Returns:
        The completion result.

    Raises:
        AIProviderError: If the backend call failed.
    """
    logger.debug("Calling %s (model=%s)", type(provider).__name__, provider.model)
    try:
        return await provider.complete(prompt)
    except AIProviderError:
        raise
    except Exception as exc:
        logger.warning("AI provider call failed: %s: %s", type(exc).__name__, exc)
        raise AIProviderError("AI service error") from exc
