"""Prompt for generating a ``CharacterIdentity`` from a dealt template."""

from __future__ import annotations

from collections.abc import Sequence

from campaign_dealer.ai.base import AIPrompt
from campaign_dealer.ai.schemas import CHARACTER_IDENTITY_JSON_SCHEMA
from campaign_dealer.game.models import LOCALE_NAMES, CharacterTemplate, Genre, Locale

SYSTEM_PROMPT = """\
You are a creative writing assistant for a tabletop RPG called "The House Doesn't Always Win."
Your task is to generate a character identity for a player character.

In this game, player characters are revolutionaries fighting against an oppressive faction that controls the world and its resources. The faction takes its name and form from the campaign setting: a corporation, a government, a cult, a crime syndicate, a noble house, or whatever power structure fits. Each character has joined the cause for a personal reason: they have nothing left to lose and everything to fight for.

You MUST respond with ONLY a valid JSON object matching the CharacterIdentity schema below.
Do not include any text, explanation, or markdown formatting outside of the JSON object.

CharacterIdentity schema:
{
  "name": string (required): the character's full name or alias, fitting the campaign setting. It doesn't have to match the character's archetype or suit,
  "pronouns": string (optional): the character's pronouns (e.g. "he/him", "she/her", "they/them"). It doesn't have to match the character's archetype or suit,
  "concept": string (required): a brief, evocative description of who this character is and why they fight against the faction. Be incisive: imagine describing them to a friend in one sentence,
  "weapon": { "name": string, "concealed": boolean } (optional): the character's signature weapon. If the item is not self-explanatory, describe its function,
  "instrument": { "name": string, "concealed": boolean } (optional): the character's signature instrument or tool. If the item is not self-explanatory, describe its function
}

Guidelines:
- The name, weapon, and instrument must be thematically appropriate for the campaign setting.
- The concept should reflect the character's archetype and suit personality, as well as their motivation to rebel against the faction.
- Weapon and instrument must be realistically available to underdogs and revolutionaries, not elite military hardware or rare artifacts unless the setting justifies it. Consider what someone in their position could actually obtain.
- The "concealed" field indicates whether the item is small or subtle enough to be hidden on the character's person. A knife or lockpick can be concealed; a rifle or a ladder cannot.
- If a weapon or instrument is not appropriate for the character, omit the field."""


def build_character_prompt(
    *,
    template: CharacterTemplate,
    setting: Sequence[Genre],
    language: Locale,
) -> AIPrompt:
    """Build the identity prompt for one dealt template.

    Args:
        template: Character skeleton; its archetype and suit prose are quoted.
        setting:  Campaign setting tags.  An empty list is tolerated.
        language: Locale the identity must be written in.

    Returns:
        Prompt carrying ``CHARACTER_IDENTITY_JSON_SCHEMA``.
    """
    language_name = LOCALE_NAMES[Locale(language)]
    setting_text = ", ".join(Genre(tag).value for tag in setting)

    user = f"""\
Generate a CharacterIdentity for this character:

Archetype: {template.archetype.value}
{template.archetype_characterization}

Suit: {template.suit.value}
{template.suit_characterization}

Campaign setting: {setting_text}

Language: {language_name}
All generated text must be written in {language_name}."""

    return AIPrompt(system=SYSTEM_PROMPT, user=user, json_schema=CHARACTER_IDENTITY_JSON_SCHEMA)
