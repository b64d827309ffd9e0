"""Tests for the Anthropic backend against a mocked SDK client."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from campaign_dealer.ai.base import AIPrompt
from campaign_dealer.ai.providers.anthropic_provider import (
    DEFAULT_MODEL,
    MAX_TOKENS,
    TOOL_NAME,
    AnthropicProvider,
)
from campaign_dealer.ai.schemas import CHARACTER_IDENTITY_JSON_SCHEMA
from campaign_dealer.config import AISettings
from campaign_dealer.errors import MissingStructuredOutputError

SETTINGS = AISettings(provider="anthropic", api_key="sk-ant-test")
SCHEMA_PROMPT = AIPrompt(system="sys", user="usr", json_schema=CHARACTER_IDENTITY_JSON_SCHEMA)
PLAIN_PROMPT = AIPrompt(system="sys", user="usr")


def _text_block(text):
    return SimpleNamespace(type="text", text=text)


def _tool_block(payload):
    return SimpleNamespace(type="tool_use", name=TOOL_NAME, input=payload)


def _delta(kind, **fields):
    return SimpleNamespace(type="content_block_delta", delta=SimpleNamespace(type=kind, **fields))


class FakeMessageStream:
    """Async context manager yielding scripted stream events."""

    def __init__(self, events):
        self.events = events

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for event in self.events:
            yield event


def _client(content=None, events=None):
    client = MagicMock()
    client.messages.create = AsyncMock(
        return_value=SimpleNamespace(content=content or [], stop_reason="end_turn")
    )
    client.messages.stream = MagicMock(return_value=FakeMessageStream(events or []))
    return client


@pytest.mark.unit
def test_model_defaults_and_override():
    assert AnthropicProvider(SETTINGS, client=_client()).model == DEFAULT_MODEL

    settings = AISettings(provider="anthropic", api_key="k", model="claude-3-5-haiku-latest")
    assert AnthropicProvider(settings, client=_client()).model == "claude-3-5-haiku-latest"


# ============================================================================
# COMPLETE
# ============================================================================


@pytest.mark.unit
class TestAnthropicComplete:
    @pytest.mark.asyncio
    async def test_tool_use_mode_serializes_tool_input(self, identity_payload):
        client = _client(content=[_tool_block(identity_payload)])
        provider = AnthropicProvider(SETTINGS, client=client)

        result = await provider.complete(SCHEMA_PROMPT)

        assert json.loads(result.text) == identity_payload

    @pytest.mark.asyncio
    async def test_tool_use_request_pins_the_tool(self):
        client = _client(content=[_tool_block({"name": "Vex"})])
        provider = AnthropicProvider(SETTINGS, client=client)

        await provider.complete(SCHEMA_PROMPT)

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == DEFAULT_MODEL
        assert kwargs["max_tokens"] == MAX_TOKENS
        assert kwargs["system"] == "sys"
        assert kwargs["messages"] == [{"role": "user", "content": "usr"}]
        assert kwargs["tools"][0]["name"] == TOOL_NAME
        assert kwargs["tools"][0]["input_schema"] is CHARACTER_IDENTITY_JSON_SCHEMA
        assert kwargs["tool_choice"] == {"type": "tool", "name": TOOL_NAME}

    @pytest.mark.asyncio
    async def test_tool_use_block_found_among_text_blocks(self):
        content = [_text_block("Sure, here it is."), _tool_block({"name": "Vex"})]
        provider = AnthropicProvider(SETTINGS, client=_client(content=content))

        result = await provider.complete(SCHEMA_PROMPT)

        assert json.loads(result.text) == {"name": "Vex"}

    @pytest.mark.asyncio
    async def test_missing_tool_use_block_is_provider_failure(self):
        provider = AnthropicProvider(SETTINGS, client=_client(content=[_text_block("{}")]))

        with pytest.raises(MissingStructuredOutputError) as exc_info:
            await provider.complete(SCHEMA_PROMPT)

        assert exc_info.value.message == "Expected tool_use block in AI response"
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_prefill_mode_prepends_brace(self):
        client = _client(content=[_text_block('"name": "Vex"}')])
        provider = AnthropicProvider(SETTINGS, client=client)

        result = await provider.complete(PLAIN_PROMPT)

        assert result.text == '{"name": "Vex"}'
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["messages"][-1] == {"role": "assistant", "content": "{"}
        assert "tools" not in kwargs

    @pytest.mark.asyncio
    async def test_sdk_errors_propagate(self):
        client = _client()
        client.messages.create.side_effect = RuntimeError("overloaded")
        provider = AnthropicProvider(SETTINGS, client=client)

        with pytest.raises(RuntimeError, match="overloaded"):
            await provider.complete(SCHEMA_PROMPT)


# ============================================================================
# STREAM
# ============================================================================


@pytest.mark.unit
class TestAnthropicStream:
    @pytest.mark.asyncio
    async def test_schema_mode_yields_partial_json(self):
        events = [
            SimpleNamespace(type="message_start"),
            _delta("input_json_delta", partial_json='{"name": '),
            _delta("input_json_delta", partial_json='"Vex"}'),
            SimpleNamespace(type="message_stop"),
        ]
        provider = AnthropicProvider(SETTINGS, client=_client(events=events))

        fragments = [fragment async for fragment in provider.stream(SCHEMA_PROMPT)]

        assert "".join(fragments) == '{"name": "Vex"}'

    @pytest.mark.asyncio
    async def test_prefill_mode_yields_brace_first(self):
        events = [
            _delta("text_delta", text='"name": '),
            _delta("input_json_delta", partial_json="ignored"),
            _delta("text_delta", text='"Vex"}'),
        ]
        client = _client(events=events)
        provider = AnthropicProvider(SETTINGS, client=client)

        fragments = [fragment async for fragment in provider.stream(PLAIN_PROMPT)]

        assert fragments == ["{", '"name": ', '"Vex"}']
        assert client.messages.stream.call_args.kwargs["messages"][-1]["role"] == "assistant"
