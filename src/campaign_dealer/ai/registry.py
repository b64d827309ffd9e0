"""
Provider registry and configuration validation.

The registry is an explicit object mapping a ``ProviderName`` to a factory
``(AISettings) -> AIProvider``.  It is built and populated once at startup
(``build_default_registry`` from ``create_app``) and only read afterwards,
so request handlers never race on it and tests can build isolated
registries with fake factories.

Resolution happens in two steps with distinct failure modes:

1. ``validate_ai_settings`` checks the configuration itself and raises
   ``ProviderConfigurationError`` (no provider, unknown provider, missing
   API key, missing Ollama host).
2. ``ProviderRegistry.create`` looks up the factory and raises
   ``ProviderNotRegisteredError`` if a valid name has none, which is a
   wiring bug rather than bad configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from campaign_dealer import config as config_module
from campaign_dealer.ai.base import AIProvider
from campaign_dealer.config import AISettings
from campaign_dealer.errors import ProviderConfigurationError, ProviderNotRegisteredError

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[AISettings], AIProvider]


class ProviderName(str, Enum):
    """Names accepted in the ``[ai] provider`` setting."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    OLLAMA = "ollama"


# Providers that run locally and authenticate by host rather than API key.
LOCAL_PROVIDERS = frozenset({ProviderName.OLLAMA})


def validate_ai_settings(settings: AISettings) -> ProviderName:
    """
    Check that ``settings`` describe a usable provider.

    Args:
        settings: AI section of the server configuration.

    Returns:
        The validated provider name.

    Raises:
        ProviderConfigurationError: If the provider is missing or unknown,
            or its credentials (API key or host) are missing.
    """
    if not settings.provider:
        raise ProviderConfigurationError(
            "AI provider is not configured. "
            "Set [ai] provider in config/server.ini or CAMPAIGN_AI_PROVIDER."
        )

    try:
        name = ProviderName(settings.provider)
    except ValueError:
        valid = ", ".join(p.value for p in ProviderName)
        raise ProviderConfigurationError(
            f'Invalid AI provider "{settings.provider}". Valid options are: {valid}. '
            "Set [ai] provider in config/server.ini or CAMPAIGN_AI_PROVIDER."
        ) from None

    if name in LOCAL_PROVIDERS:
        if not settings.ollama_host:
            raise ProviderConfigurationError(
                f'AI provider "{name.value}" is configured but no host was provided. '
                "Set [ai] ollama_host or CAMPAIGN_AI_OLLAMA_HOST."
            )
    elif not settings.api_key:
        raise ProviderConfigurationError(
            f'AI provider "{name.value}" is configured but no API key was provided. '
            "Set [ai] api_key or CAMPAIGN_AI_API_KEY."
        )

    return name


class ProviderRegistry:
    """Maps provider names to factories.

    Example:
        registry = ProviderRegistry()
        registry.register(ProviderName.OLLAMA, OllamaProvider)
        provider = registry.create(settings)
    """

    def __init__(self) -> None:
        self._factories: dict[ProviderName, ProviderFactory] = {}

    def register(self, name: ProviderName, factory: ProviderFactory) -> None:
        """Register ``factory`` for ``name``, replacing any previous one."""
        self._factories[ProviderName(name)] = factory
        logger.debug("Registered AI provider factory: %s", ProviderName(name).value)

    def get(self, name: ProviderName) -> ProviderFactory | None:
        return self._factories.get(name)

    def names(self) -> list[str]:
        """Registered provider names, in registration order."""
        return [name.value for name in self._factories]

    def create(self, settings: AISettings) -> AIProvider:
        """
        Validate ``settings`` and instantiate the matching provider.

        Raises:
            ProviderConfigurationError: If the settings are invalid.
            ProviderNotRegisteredError: If no factory exists for the provider.
        """
        name = validate_ai_settings(settings)
        factory = self.get(name)
        if factory is None:
            available = ", ".join(self.names()) or "(none)"
            raise ProviderNotRegisteredError(
                f'AI provider "{name.value}" is not registered. '
                f"Available providers: {available}. "
                "Ensure the provider is registered at startup."
            )
        return factory(settings)


def get_ai_provider(registry: ProviderRegistry, settings: AISettings | None = None) -> AIProvider:
    """
    Return the configured provider instance.

    Args:
        registry: Registry to resolve the factory from.
        settings: AI settings; the process configuration is read when omitted.
    """
    if settings is None:
        settings = config_module.config.ai
    return registry.create(settings)


def build_default_registry() -> ProviderRegistry:
    """Build a registry with every built-in provider registered."""
    from campaign_dealer.ai.providers.anthropic_provider import AnthropicProvider
    from campaign_dealer.ai.providers.ollama_provider import OllamaProvider
    from campaign_dealer.ai.providers.openai_provider import OpenAIProvider

    registry = ProviderRegistry()
    registry.register(ProviderName.ANTHROPIC, AnthropicProvider)
    registry.register(ProviderName.OPENAI, OpenAIProvider)
    registry.register(ProviderName.OLLAMA, OllamaProvider)
    return registry
