"""Tests for the provider contract and call_provider error categorization."""

import httpx
import pytest

from campaign_dealer.ai.base import AICompletionResult, AIPrompt, AIProvider, call_provider
from campaign_dealer.errors import AIProviderError, MissingStructuredOutputError
from tests.fakes import FakeProvider

PROMPT = AIPrompt(system="system", user="user")


@pytest.mark.unit
def test_provider_contract_is_abstract():
    with pytest.raises(TypeError):
        AIProvider()


@pytest.mark.unit
def test_prompt_is_immutable():
    with pytest.raises(AttributeError):
        PROMPT.user = "changed"


@pytest.mark.unit
class TestCallProvider:
    @pytest.mark.asyncio
    async def test_returns_completion(self):
        provider = FakeProvider(text='{"name": "Vex"}')

        result = await call_provider(provider, PROMPT)

        assert result == AICompletionResult(text='{"name": "Vex"}')
        assert provider.prompts == [PROMPT]

    @pytest.mark.asyncio
    async def test_wraps_network_errors(self):
        cause = httpx.ConnectError("connection refused")
        provider = FakeProvider(error=cause)

        with pytest.raises(AIProviderError) as exc_info:
            await call_provider(provider, PROMPT)

        assert exc_info.value.message == "AI service error"
        assert exc_info.value.__cause__ is cause

    @pytest.mark.asyncio
    async def test_wrapped_message_hides_backend_detail(self):
        provider = FakeProvider(error=RuntimeError("401 invalid x-api-key sk-123"))

        with pytest.raises(AIProviderError) as exc_info:
            await call_provider(provider, PROMPT)

        assert "sk-123" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_provider_errors_pass_through_unchanged(self):
        error = MissingStructuredOutputError("Expected tool_use block in AI response")
        provider = FakeProvider(error=error)

        with pytest.raises(MissingStructuredOutputError) as exc_info:
            await call_provider(provider, PROMPT)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_no_retry(self):
        provider = FakeProvider(error=RuntimeError("boom"))

        with pytest.raises(AIProviderError):
            await call_provider(provider, PROMPT)

        assert provider.calls == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_stream_fragments_concatenate_to_completion():
    provider = FakeProvider(text='{"name": "Vex"}')

    fragments = [fragment async for fragment in provider.stream(PROMPT)]

    assert len(fragments) == 2
    assert "".join(fragments) == (await provider.complete(PROMPT)).text
