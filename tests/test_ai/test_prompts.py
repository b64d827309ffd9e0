"""Tests for the character and script prompt builders."""

import pytest

from campaign_dealer.ai.prompts import build_character_prompt, build_script_prompt
from campaign_dealer.ai.prompts.script import MISSING_FIELD
from campaign_dealer.ai.schemas import (
    CHARACTER_IDENTITY_JSON_SCHEMA,
    GAME_MASTER_SCRIPT_JSON_SCHEMA,
)
from campaign_dealer.game.models import CharacterIdentity, Genre, Locale

# ============================================================================
# CHARACTER PROMPT
# ============================================================================


@pytest.mark.unit
class TestCharacterPrompt:
    def test_user_prompt_quotes_template(self, templates):
        template = templates[0]

        prompt = build_character_prompt(
            template=template, setting=[Genre.CYBERPUNK], language=Locale.EN
        )

        assert f"Archetype: {template.archetype.value}\n{template.archetype_characterization}" in (
            prompt.user
        )
        assert f"Suit: {template.suit.value}\n{template.suit_characterization}" in prompt.user
        assert "Campaign setting: cyberpunk" in prompt.user

    def test_language_is_stated_twice(self, templates):
        prompt = build_character_prompt(
            template=templates[0], setting=[Genre.WUXIA], language=Locale.IT
        )

        assert "Language: Italian" in prompt.user
        assert "All generated text must be written in Italian." in prompt.user

    def test_multiple_setting_tags_are_joined(self, templates):
        prompt = build_character_prompt(
            template=templates[0],
            setting=[Genre.STEAMPUNK, Genre.GOTHIC_HORROR],
            language=Locale.EN,
        )

        assert "Campaign setting: steampunk, gothicHorror" in prompt.user

    def test_empty_setting_is_tolerated(self, templates):
        prompt = build_character_prompt(template=templates[0], setting=[], language=Locale.EN)

        assert "Campaign setting: \n" in prompt.user

    def test_accepts_raw_string_values(self, templates):
        prompt = build_character_prompt(
            template=templates[0], setting=["darkFantasy"], language="en"
        )

        assert "Campaign setting: darkFantasy" in prompt.user
        assert "Language: English" in prompt.user

    def test_system_prompt_is_constant(self, templates):
        first = build_character_prompt(template=templates[0], setting=[], language=Locale.EN)
        second = build_character_prompt(
            template=templates[1], setting=[Genre.ISEKAI], language=Locale.IT
        )

        assert first.system == second.system
        assert "CharacterIdentity" in first.system
        assert "concealed" in first.system

    def test_attaches_identity_schema(self, templates):
        prompt = build_character_prompt(template=templates[0], setting=[], language=Locale.EN)

        assert prompt.json_schema is CHARACTER_IDENTITY_JSON_SCHEMA
        assert CHARACTER_IDENTITY_JSON_SCHEMA["required"] == ["name"]

    def test_never_mentions_undefined(self, templates):
        prompt = build_character_prompt(template=templates[0], setting=[], language=Locale.EN)

        assert "undefined" not in prompt.system
        assert "undefined" not in prompt.user


# ============================================================================
# SCRIPT PROMPT
# ============================================================================


@pytest.mark.unit
class TestScriptPrompt:
    def test_lists_every_character_in_order(self, sheets):
        prompt = build_script_prompt(characters=sheets, setting=[Genre.CYBERPUNK], language=Locale.EN)

        positions = [prompt.user.index(f"Name: Player {index}") for index in (1, 2, 3)]
        assert positions == sorted(positions)
        for index, sheet in enumerate(sheets, start=1):
            assert f"Character {index}:" in prompt.user
            assert f"Archetype: {sheet.archetype.value}" in prompt.user
            assert f"Suit: {sheet.suit.value}" in prompt.user
        assert prompt.user.count("Concept: Has a grudge.") == 3

    def test_missing_concept_uses_placeholder(self, templates):
        sheet = templates[0].to_sheet(CharacterIdentity(name="Nameless"))

        prompt = build_script_prompt(characters=[sheet], setting=[], language=Locale.EN)

        assert f"Concept: {MISSING_FIELD}" in prompt.user
        assert "undefined" not in prompt.user
        assert "None" not in prompt.user

    def test_language_and_names_clause(self, sheets):
        prompt = build_script_prompt(characters=sheets, setting=[], language=Locale.IT)

        assert "Language: Italian" in prompt.user
        assert "except for the names" in prompt.user

    def test_system_prompt_describes_campaign_structure(self, sheets):
        prompt = build_script_prompt(characters=sheets, setting=[], language=Locale.EN)

        assert "three-session" in prompt.system
        assert "NOT a power hierarchy" in prompt.system
        assert "exactly 10" in prompt.system
        for mode in ("capture", "convert", "eliminate"):
            assert mode in prompt.system

    def test_attaches_script_schema(self, sheets):
        prompt = build_script_prompt(characters=sheets, setting=[], language=Locale.EN)

        assert prompt.json_schema is GAME_MASTER_SCRIPT_JSON_SCHEMA
        weak_points = GAME_MASTER_SCRIPT_JSON_SCHEMA["properties"]["weakPoints"]
        assert weak_points["minItems"] == weak_points["maxItems"] == 10
