"""
Character randomizer.

Deals mechanically complete, narratively empty ``CharacterTemplate`` values:
a random suit and archetype, the matching suit skill, one archetype skill,
and the suit modifiers that follow from the malus cycle.

Every function takes an optional ``random.Random`` so callers (and tests) can
seed the draw; the module-level ``random`` functions are used otherwise.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from campaign_dealer.errors import ValidationError
from campaign_dealer.game.models import (
    MAX_PLAYERS,
    CharacterArchetype,
    CharacterSuit,
    CharacterTemplate,
    SuitDamage,
    SuitModifiers,
)
from campaign_dealer.game.tables import (
    ARCHETYPE_CHARACTERIZATIONS,
    ARCHETYPE_SKILLS,
    MALUS_SUIT,
    SUIT_CHARACTERIZATIONS,
    SUIT_SKILLS,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_DISTINCT_CHARACTERS = MAX_PLAYERS


def _choice(rng: random.Random | None, options: Sequence[T]) -> T:
    if rng is None:
        return random.choice(options)
    return rng.choice(options)


def get_suit_modifiers(suit: CharacterSuit) -> SuitModifiers:
    """
    Return the starting modifiers for ``suit``.

    Lower is better: the character's own suit gets -1 (a bonus), the suit
    that follows it in the malus cycle gets +1, and the remaining suit 0.
    """
    values = {s.value: 0 for s in CharacterSuit}
    values[suit.value] = -1
    values[MALUS_SUIT[suit].value] = 1
    return SuitModifiers(**values)


def generate_character(rng: random.Random | None = None) -> CharacterTemplate:
    """
    Deal one random character template.

    Suit, archetype and archetype skill are drawn in that order, each
    uniformly.  Damage flags all start cleared.

    Args:
        rng: Optional random source.

    Returns:
        A new ``CharacterTemplate`` with exactly one archetype skill.
    """
    suit = _choice(rng, list(CharacterSuit))
    archetype = _choice(rng, list(CharacterArchetype))
    archetype_skill = _choice(rng, ARCHETYPE_SKILLS[archetype])

    return CharacterTemplate(
        archetype=archetype,
        suit=suit,
        damage=SuitDamage(),
        modifiers=get_suit_modifiers(suit),
        suit_skill=SUIT_SKILLS[archetype][suit],
        archetype_skills=[archetype_skill],
        suit_characterization=SUIT_CHARACTERIZATIONS[suit],
        archetype_characterization=ARCHETYPE_CHARACTERIZATIONS[archetype],
    )


def generate_random_distinct_characters(
    count: int, rng: random.Random | None = None
) -> list[CharacterTemplate]:
    """
    Deal ``count`` templates with pairwise-distinct (archetype, suit) pairs.

    Duplicates are discarded and redrawn; the loop always terminates because
    the count is checked against the nine available pairs first.

    Args:
        count: Number of templates wanted.  Non-positive values yield ``[]``.
        rng: Optional random source.

    Returns:
        Templates in the order their pairs were first drawn.

    Raises:
        ValidationError: If ``count`` exceeds the number of distinct pairs.
    """
    if count > MAX_DISTINCT_CHARACTERS:
        raise ValidationError(
            f"Cannot generate {count} distinct characters: only "
            f"{MAX_DISTINCT_CHARACTERS} unique archetype-suit combinations exist."
        )

    dealt: dict[tuple[CharacterArchetype, CharacterSuit], CharacterTemplate] = {}
    draws = 0
    while len(dealt) < count:
        template = generate_character(rng)
        draws += 1
        dealt.setdefault(template.key, template)

    logger.debug("Dealt %d distinct characters in %d draws", len(dealt), draws)
    return list(dealt.values())
