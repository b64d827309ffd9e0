"""Tests for provider registration and configuration validation."""

import pytest

from campaign_dealer.ai.providers.anthropic_provider import AnthropicProvider
from campaign_dealer.ai.providers.ollama_provider import OllamaProvider
from campaign_dealer.ai.providers.openai_provider import OpenAIProvider
from campaign_dealer.ai.registry import (
    ProviderName,
    ProviderRegistry,
    build_default_registry,
    get_ai_provider,
    validate_ai_settings,
)
from campaign_dealer.config import AISettings, use_ai_settings
from campaign_dealer.errors import (
    AIProviderError,
    ProviderConfigurationError,
    ProviderNotRegisteredError,
)
from tests.fakes import FakeProvider, registry_for

# ============================================================================
# VALIDATION
# ============================================================================


@pytest.mark.unit
class TestValidateAISettings:
    def test_missing_provider(self):
        with pytest.raises(ProviderConfigurationError) as exc_info:
            validate_ai_settings(AISettings())

        assert "AI provider is not configured" in exc_info.value.message
        assert exc_info.value.status_code == 502

    def test_invalid_provider_lists_valid_options(self):
        with pytest.raises(ProviderConfigurationError) as exc_info:
            validate_ai_settings(AISettings(provider="gemini", api_key="k"))

        message = exc_info.value.message
        assert 'Invalid AI provider "gemini"' in message
        assert "anthropic, openai, ollama" in message

    @pytest.mark.parametrize("provider", ["anthropic", "openai"])
    def test_hosted_provider_requires_api_key(self, provider):
        with pytest.raises(ProviderConfigurationError) as exc_info:
            validate_ai_settings(AISettings(provider=provider))

        assert f'AI provider "{provider}" is configured but no API key' in exc_info.value.message

    def test_api_key_never_appears_in_messages(self):
        with pytest.raises(ProviderConfigurationError) as exc_info:
            validate_ai_settings(AISettings(provider="gemini", api_key="sk-super-secret"))

        assert "sk-super-secret" not in exc_info.value.message

    def test_ollama_requires_host_not_key(self):
        with pytest.raises(ProviderConfigurationError) as exc_info:
            validate_ai_settings(AISettings(provider="ollama", api_key="ignored"))

        assert "no host was provided" in exc_info.value.message

    def test_ollama_with_host_is_valid(self, ai_settings):
        assert validate_ai_settings(ai_settings) is ProviderName.OLLAMA

    def test_hosted_provider_with_key_is_valid(self):
        settings = AISettings(provider="anthropic", api_key="sk-test")

        assert validate_ai_settings(settings) is ProviderName.ANTHROPIC


# ============================================================================
# REGISTRY
# ============================================================================


@pytest.mark.unit
class TestProviderRegistry:
    def test_create_uses_registered_factory(self, ai_settings):
        provider = FakeProvider()
        registry = registry_for(provider)

        assert registry.create(ai_settings) is provider

    def test_factory_receives_settings(self, ai_settings):
        received = []
        registry = ProviderRegistry()
        registry.register(ProviderName.OLLAMA, lambda s: received.append(s) or FakeProvider())

        registry.create(ai_settings)

        assert received == [ai_settings]

    def test_unregistered_provider_is_distinct_error(self, ai_settings):
        registry = ProviderRegistry()
        registry.register(ProviderName.OPENAI, lambda s: FakeProvider())

        with pytest.raises(ProviderNotRegisteredError) as exc_info:
            registry.create(ai_settings)

        assert isinstance(exc_info.value, AIProviderError)
        assert not isinstance(exc_info.value, ProviderConfigurationError)
        assert 'AI provider "ollama" is not registered' in exc_info.value.message
        assert "Available providers: openai" in exc_info.value.message

    def test_empty_registry_message(self, ai_settings):
        with pytest.raises(ProviderNotRegisteredError) as exc_info:
            ProviderRegistry().create(ai_settings)

        assert "Available providers: (none)" in exc_info.value.message

    def test_register_replaces_previous_factory(self, ai_settings):
        first, second = FakeProvider(), FakeProvider()
        registry = registry_for(first)
        registry.register(ProviderName.OLLAMA, lambda s: second)

        assert registry.create(ai_settings) is second
        assert registry.names() == ["ollama"]

    def test_register_accepts_plain_string(self):
        registry = ProviderRegistry()
        registry.register("openai", lambda s: FakeProvider())

        assert registry.get(ProviderName.OPENAI) is not None

    def test_configuration_checked_before_lookup(self):
        with pytest.raises(ProviderConfigurationError):
            ProviderRegistry().create(AISettings())


# ============================================================================
# DEFAULT REGISTRY
# ============================================================================


@pytest.mark.unit
class TestDefaultRegistry:
    def test_registers_all_builtin_providers(self):
        assert build_default_registry().names() == ["anthropic", "openai", "ollama"]

    @pytest.mark.parametrize(
        ("settings", "expected"),
        [
            (AISettings(provider="anthropic", api_key="sk-ant"), AnthropicProvider),
            (AISettings(provider="openai", api_key="sk-oai"), OpenAIProvider),
            (AISettings(provider="ollama", ollama_host="http://localhost:11434"), OllamaProvider),
        ],
    )
    def test_creates_provider_per_name(self, settings, expected):
        assert isinstance(build_default_registry().create(settings), expected)

    def test_model_override_is_applied(self):
        settings = AISettings(provider="ollama", ollama_host="http://h:1", model="mistral")

        assert build_default_registry().create(settings).model == "mistral"


@pytest.mark.unit
def test_get_ai_provider_reads_process_config_when_settings_omitted(ai_settings):
    provider = FakeProvider()

    with use_ai_settings(ai_settings):
        assert get_ai_provider(registry_for(provider)) is provider


@pytest.mark.unit
def test_get_ai_provider_prefers_explicit_settings():
    provider = FakeProvider()
    registry = registry_for(provider, ProviderName.OPENAI)

    assert get_ai_provider(registry, AISettings(provider="openai", api_key="k")) is provider
