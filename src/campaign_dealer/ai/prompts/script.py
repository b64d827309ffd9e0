"""Prompt for generating a ``GameMasterScript`` for an assembled party."""

from __future__ import annotations

from collections.abc import Sequence

from campaign_dealer.ai.base import AIPrompt
from campaign_dealer.ai.schemas import GAME_MASTER_SCRIPT_JSON_SCHEMA
from campaign_dealer.game.models import (
    LOCALE_NAMES,
    WEAK_POINT_COUNT,
    CharacterSheet,
    Genre,
    Locale,
)

# Placeholder for identity fields the character does not have.
MISSING_FIELD = "N/A"

SYSTEM_PROMPT = f"""\
You are a creative writing assistant for a tabletop RPG called "The House Doesn't Always Win."
Your task is to generate a Game Master script for a three-session campaign.

In this game, the player characters are revolutionaries fighting against an oppressive faction. This faction is represented by the Diamonds suit, but "Diamonds" is NOT the faction's actual name: the faction should be named and shaped to fit the campaign setting. It can be a corporation, a government, a cult, a crime syndicate, a noble house, or any other kind of power structure appropriate to the setting. Use the setting to invent a compelling, fitting name and identity for this faction.

The faction controls the world and its resources. The players' goal is to dismantle its power by defeating three key figures called Targets. These Targets are labeled Jack, Queen, and King of Diamonds as game mechanics, but their actual titles, roles, and positions within the faction must reflect its invented identity, not playing-card imagery.

Important: Jack, Queen, and King are archetype labels, NOT a power hierarchy. The King is not necessarily the most powerful: all three Targets may have equal rank and influence, or the hierarchy may differ from what the labels suggest. Arrange the three sessions in the order that creates the best narrative escalation for this specific story.

Weak Points are cracks in the enemy faction's armor: key associates, hidden secrets, exploitable resources, or internal tensions that the players can discover and leverage against the Targets.

You MUST respond with ONLY a valid JSON object matching the GameMasterScript schema below.
Do not include any text, explanation, or markdown formatting outside of the JSON object.

GameMasterScript schema:
{{
  "hook": string (required): an opening narrative hook (2-4 sentences) that sets the scene and draws the players into the story,
  "targets": {{
    "king": {{ "name": string (required), "description": string (required) }},
    "queen": {{ "name": string (required), "description": string (required) }},
    "jack": {{ "name": string (required), "description": string (required) }}
  }} (required): the three antagonist Targets the players must defeat, one per archetype label. Each name should be plausible for the setting; each description says who the Target is, their role within the faction, and why they are dangerous,
  "weakPoints": [
    {{
      "name": string (required): a Target's associate or resource. Might be a person, location, secret, or asset that the players can use to their advantage,
      "role": string (required): their role in the enemy faction
    }}
  ] (required, exactly {WEAK_POINT_COUNT} items): weak points in the enemy faction that the players can discover and exploit,
  "scenes": string[] (required): scenarios or encounters for each session that advance the plot and challenge the players, with hints about which approach (capture, convert, eliminate) might be most effective or dramatic for the Target featured in that session,
  "centralTension": string (required): a one-sentence description of the core conflict driving the campaign,
  "plot": string (required): a multi-paragraph narrative overview of the full campaign arc, covering the three sessions and the key story beats that connect them
}}

Guidelines:
- The hook should reference the campaign setting and hint at the central tension.
- The enemy faction must be given a name and form that fits the campaign setting. Do not call it "the Diamonds." Each Target must be a distinct, named antagonist with a clear role within the faction and a reason they are indispensable to it.
- The campaign spans exactly three sessions. Each session culminates in the defeat of one Target. The order need not follow Jack, Queen, King.
- Each scene should hint at which approach (capture, convert, or eliminate) might be most effective or dramatic for that Target.
- Provide exactly {WEAK_POINT_COUNT} weak points. Each must be a distinct character or resource with a unique role and exploitable motive.
- The central tension should tie together the player characters, the setting, and the antagonist Targets.
- The plot should read as a coherent story summary, not a bullet list, connecting all three sessions into a single narrative.
- Tailor all content to the specific player characters and campaign setting provided."""


def _summarize_character(index: int, sheet: CharacterSheet) -> str:
    identity = sheet.character_identity
    return (
        f"Character {index}:\n"
        f"  Name: {identity.name}\n"
        f"  Archetype: {sheet.archetype.value}\n"
        f"  Suit: {sheet.suit.value}\n"
        f"  Concept: {identity.concept or MISSING_FIELD}"
    )


def build_script_prompt(
    *,
    characters: Sequence[CharacterSheet],
    setting: Sequence[Genre],
    language: Locale,
) -> AIPrompt:
    """Build the game-master script prompt for a party.

    Args:
        characters: The party, in the order they should be listed.
        setting:    Campaign setting tags.
        language:   Locale the script must be written in.

    Returns:
        Prompt carrying ``GAME_MASTER_SCRIPT_JSON_SCHEMA``.
    """
    language_name = LOCALE_NAMES[Locale(language)]
    setting_text = ", ".join(Genre(tag).value for tag in setting)
    party = "\n\n".join(
        _summarize_character(index, sheet) for index, sheet in enumerate(characters, start=1)
    )

    user = f"""\
Generate a GameMasterScript for a three-session campaign with the following party and setting.

Party:
{party}

Campaign setting: {setting_text}

Language: {language_name}
All generated text must be written in {language_name}, except for the names, which can be in any language but must be consistent with the campaign setting and genre."""

    return AIPrompt(system=SYSTEM_PROMPT, user=user, json_schema=GAME_MASTER_SCRIPT_JSON_SCHEMA)
