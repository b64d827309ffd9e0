"""
Campaign generation service.

Sequences the pipeline for the two campaign operations:

    generate_characters:  randomizer -> one identity prompt per template
                          (issued concurrently) -> parse + validate -> merge
    generate_script:      party sheets -> script prompt -> parse + validate

The service owns no network code of its own; it resolves the configured
provider from the registry once per request and reports every failure as an
``AppError`` subclass:

    ValidationError   randomizer precondition (raised before any AI call)
    AIProviderError   provider missing, misconfigured or failing
    AIResponseError   provider answered with unusable text
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Sequence

from campaign_dealer.ai.base import AIProvider, call_provider
from campaign_dealer.ai.parsing import parse_and_validate_ai_response
from campaign_dealer.ai.prompts import build_character_prompt, build_script_prompt
from campaign_dealer.ai.registry import ProviderRegistry, get_ai_provider
from campaign_dealer.config import AISettings
from campaign_dealer.game.models import (
    CharacterIdentity,
    CharacterSheet,
    CharacterTemplate,
    GameMasterScript,
    Genre,
    Locale,
)
from campaign_dealer.game.randomizer import generate_random_distinct_characters

logger = logging.getLogger(__name__)

CHARACTERS_LABEL = "characters"
SCRIPT_LABEL = "script"


class CampaignService:
    """
    Generates character sheets and game-master scripts.

    Args:
        registry: Provider registry used to resolve the backend per request.
        settings: AI settings override; the process configuration is read on
                  each request when omitted.
    """

    def __init__(self, registry: ProviderRegistry, settings: AISettings | None = None) -> None:
        self.registry = registry
        self.settings = settings

    def _provider(self) -> AIProvider:
        return get_ai_provider(self.registry, self.settings)

    # ── Characters ───────────────────────────────────────────────────────────

    async def _identity_for(
        self,
        provider: AIProvider,
        template: CharacterTemplate,
        setting: Sequence[Genre],
        language: Locale,
    ) -> CharacterSheet:
        prompt = build_character_prompt(template=template, setting=setting, language=language)
        result = await call_provider(provider, prompt)
        identity = parse_and_validate_ai_response(result.text, CharacterIdentity, CHARACTERS_LABEL)
        return template.to_sheet(identity)

    async def generate_characters(
        self,
        *,
        player_count: int,
        setting: Sequence[Genre],
        language: Locale,
        rng: random.Random | None = None,
    ) -> list[CharacterSheet]:
        """
        Deal ``player_count`` distinct characters and give each an AI identity.

        Identity calls run concurrently; sheets come back in template order.
        If any call fails, the others are cancelled and the error propagates:
        a partial party is never returned.

        Raises:
            ValidationError: ``player_count`` exceeds the distinct pairs.
            AIProviderError: The provider is unavailable or a call failed.
            AIResponseError: A provider answer was unusable.
        """
        templates = generate_random_distinct_characters(player_count, rng)
        provider = self._provider()
        logger.info(
            "Generating %d character identities (setting=%s, language=%s)",
            len(templates),
            ",".join(Genre(tag).value for tag in setting),
            Locale(language).value,
        )

        tasks = [
            asyncio.create_task(self._identity_for(provider, template, setting, language))
            for template in templates
        ]
        try:
            sheets = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return list(sheets)

    # ── Script ───────────────────────────────────────────────────────────────

    async def generate_script(
        self,
        *,
        characters: Sequence[CharacterSheet],
        setting: Sequence[Genre],
        language: Locale,
    ) -> GameMasterScript:
        """
        Generate the game-master script for ``characters``.

        Raises:
            AIProviderError: The provider is unavailable or the call failed.
            AIResponseError: The provider answer was unusable.
        """
        provider = self._provider()
        logger.info("Generating game-master script for a party of %d", len(characters))

        prompt = build_script_prompt(characters=characters, setting=setting, language=language)
        result = await call_provider(provider, prompt)
        return parse_and_validate_ai_response(result.text, GameMasterScript, SCRIPT_LABEL)
