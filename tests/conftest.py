"""
Shared pytest fixtures for the Campaign Dealer test suite.

This module provides fixtures that are automatically available to all test files:
- AI settings that pass validation without any real credentials
- FastAPI TestClient instances wired to a fake provider
- Canonical AI payloads (identity, script)
- Dealt templates and complete sheets from a seeded random source

No fixture here touches the network; provider modules are tested against
mocked SDK clients or ``respx`` routes in their own test files.  Test
doubles live in ``tests/fakes.py``.
"""

import json
import random
from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from campaign_dealer.ai.base import AIProvider
from campaign_dealer.api.server import create_app
from campaign_dealer.config import AISettings
from campaign_dealer.game.models import CharacterIdentity, CharacterSheet, CharacterTemplate
from campaign_dealer.game.randomizer import generate_random_distinct_characters
from tests.fakes import IDENTITY_PAYLOAD, make_script_payload, registry_for

# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture
def ai_settings() -> AISettings:
    """AI settings that pass validation for the Ollama provider name."""
    return AISettings(provider="ollama", ollama_host="http://ollama.test:11434")


# ============================================================================
# PAYLOADS
# ============================================================================


@pytest.fixture
def identity_payload() -> dict[str, Any]:
    return json.loads(json.dumps(IDENTITY_PAYLOAD))


@pytest.fixture
def identity_json() -> str:
    return json.dumps(IDENTITY_PAYLOAD)


@pytest.fixture
def script_payload() -> dict[str, Any]:
    return make_script_payload()


# ============================================================================
# GAME DATA
# ============================================================================


@pytest.fixture
def templates() -> list[CharacterTemplate]:
    """Three distinct templates dealt from a seeded random source."""
    return generate_random_distinct_characters(3, random.Random(1234))


@pytest.fixture
def sheets(templates: list[CharacterTemplate]) -> list[CharacterSheet]:
    """Three complete sheets built from ``templates``."""
    return [
        template.to_sheet(CharacterIdentity(name=f"Player {index}", concept="Has a grudge."))
        for index, template in enumerate(templates, start=1)
    ]


# ============================================================================
# API CLIENT
# ============================================================================


@pytest.fixture
def make_client(ai_settings: AISettings) -> Callable[[AIProvider], TestClient]:
    """
    Factory fixture building a TestClient around a given provider.

    Server-side exceptions are turned into responses rather than re-raised,
    so 500 handling can be asserted.
    """

    def _make(provider: AIProvider) -> TestClient:
        app = create_app(registry=registry_for(provider), settings=ai_settings)
        return TestClient(app, raise_server_exceptions=False)

    return _make
