"""
Static game content for "The House Doesn't Always Win".

Skill entries are i18n key pairs resolved by the client; characterization
prose is English source material embedded in prompts and never shown to
players directly.

Lookups:
    SUIT_SKILLS[archetype][suit]          -> CharacterSkill
    ARCHETYPE_SKILLS[archetype]           -> tuple[CharacterSkill, ...]
    ARCHETYPE_CHARACTERIZATIONS[archetype] -> str
    SUIT_CHARACTERIZATIONS[suit]          -> str
    MALUS_SUIT[suit]                      -> CharacterSuit
"""

from __future__ import annotations

from campaign_dealer.game.models import (
    CharacterArchetype,
    CharacterSkill,
    CharacterSuit,
    SkillUses,
)


def i18n_skill(key_prefix: str, uses: int | None = None) -> CharacterSkill:
    """
    Build a skill from a dot-separated i18n key prefix.

    Example:
        i18n_skill("skills.jack.suit.hearts")
        # name="skills.jack.suit.hearts.name",
        # description="skills.jack.suit.hearts.description"

    Args:
        key_prefix: Prefix shared by the name and description keys.
        uses: When given, the skill starts with ``uses`` of ``uses`` charges.
    """
    return CharacterSkill(
        name=f"{key_prefix}.name",
        description=f"{key_prefix}.description",
        uses=SkillUses(uses_left=uses, max_uses=uses) if uses is not None else None,
    )


def _paragraph(text: str) -> str:
    """Collapse a wrapped triple-quoted paragraph into a single line."""
    return " ".join(text.split())


# ============================================================================
# JACK
# ============================================================================

JACK_SUIT_SKILLS = {
    CharacterSuit.HEARTS: i18n_skill("skills.jack.suit.hearts"),
    CharacterSuit.CLUBS: i18n_skill("skills.jack.suit.clubs", uses=1),
    CharacterSuit.SPADES: i18n_skill("skills.jack.suit.spades"),
}

JACK_ARCHETYPE_SKILLS = (
    i18n_skill("skills.jack.archetype.skill1"),
    i18n_skill("skills.jack.archetype.skill2", uses=1),
    i18n_skill("skills.jack.archetype.skill3", uses=1),
    i18n_skill("skills.jack.archetype.skill4", uses=3),
    i18n_skill("skills.jack.archetype.skill5"),
    i18n_skill("skills.jack.archetype.skill6", uses=1),
    i18n_skill("skills.jack.archetype.skill7"),
)

JACK_CHARACTERIZATION = _paragraph(
    """
    The Jack is more at ease on the front line than in the rear guard. He excels
    when he throws himself headlong into situations and is skilled at improvising.
    If you like a Character who always gets a second chance and has a special
    talent for getting out of tight spots, then the Jack is the Archetype for you.
    """
)

# ============================================================================
# QUEEN
# ============================================================================

QUEEN_SUIT_SKILLS = {
    CharacterSuit.HEARTS: i18n_skill("skills.queen.suit.hearts", uses=2),
    CharacterSuit.CLUBS: i18n_skill("skills.queen.suit.clubs"),
    CharacterSuit.SPADES: i18n_skill("skills.queen.suit.spades"),
}

QUEEN_ARCHETYPE_SKILLS = (
    i18n_skill("skills.queen.archetype.skill1"),
    i18n_skill("skills.queen.archetype.skill2"),
    i18n_skill("skills.queen.archetype.skill3", uses=3),
    i18n_skill("skills.queen.archetype.skill4", uses=1),
    i18n_skill("skills.queen.archetype.skill5", uses=3),
    i18n_skill("skills.queen.archetype.skill6", uses=3),
    i18n_skill("skills.queen.archetype.skill7", uses=3),
)

QUEEN_CHARACTERIZATION = _paragraph(
    """
    The Queen knows that every move toward success must be fueled not only by
    ideas, but also by flesh and blood. She manages people the way a soldier
    manages ammunition: never wasting them, but willing to sacrifice them.
    If you like a Character who leads from the rear and juggles the lives of
    others, then the Queen is the Archetype for you.
    """
)

# ============================================================================
# KING
# ============================================================================

KING_SUIT_SKILLS = {
    CharacterSuit.HEARTS: i18n_skill("skills.king.suit.hearts"),
    CharacterSuit.CLUBS: i18n_skill("skills.king.suit.clubs"),
    CharacterSuit.SPADES: i18n_skill("skills.king.suit.spades"),
}

KING_ARCHETYPE_SKILLS = tuple(
    i18n_skill(f"skills.king.archetype.skill{index}") for index in range(1, 8)
)

KING_CHARACTERIZATION = _paragraph(
    """
    The King has a plan for every contingency, an escape route for every
    unexpected turn, and the ability to bend the rules to his advantage. He knows
    that timing is everything. If you like a Character who always has an ace up
    his sleeve and as many allies as enemies, then the King is the Archetype for you.
    """
)

# ============================================================================
# SUITS
# ============================================================================

CLUBS_CHARACTERIZATION = _paragraph(
    """
    Clubs characters lead with their body and their will. They break down
    doors rather than pick locks, endure punishment rather than avoid it, and
    command rooms with their sheer, unshakeable presence. If you like a Character
    who charges headlong into the thick of it and never stops pushing forward,
    then Clubs is your suit.
    """
)

HEARTS_CHARACTERIZATION = _paragraph(
    """
    Hearts characters know that the right word, spoken at the right moment,
    is worth more than any weapon. They read people like cards, weave charm and
    cunning into something sharper than steel, and always seem to know exactly
    what someone needs to hear. If you like a Character who wins before the fight
    even starts (through persuasion, wit, and an eye for what others miss)
    then Hearts is your suit.
    """
)

SPADES_CHARACTERIZATION = _paragraph(
    """
    Spades characters move through the world like smoke: precise, silent,
    and gone before anyone realizes they were there. They prefer a steady hand
    over a heavy fist, finesse over force, and always know three ways out of any
    room. If you like a Character who slips through the cracks and pulls off the
    impossible with a light touch and a quiet step, then Spades is your suit.
    """
)

# Own suit gets -1, the malus suit +1.  A fixed 3-cycle.
MALUS_SUIT = {
    CharacterSuit.HEARTS: CharacterSuit.CLUBS,
    CharacterSuit.CLUBS: CharacterSuit.SPADES,
    CharacterSuit.SPADES: CharacterSuit.HEARTS,
}

# ============================================================================
# LOOKUP MAPS
# ============================================================================

SUIT_SKILLS: dict[CharacterArchetype, dict[CharacterSuit, CharacterSkill]] = {
    CharacterArchetype.JACK: JACK_SUIT_SKILLS,
    CharacterArchetype.QUEEN: QUEEN_SUIT_SKILLS,
    CharacterArchetype.KING: KING_SUIT_SKILLS,
}

ARCHETYPE_SKILLS: dict[CharacterArchetype, tuple[CharacterSkill, ...]] = {
    CharacterArchetype.JACK: JACK_ARCHETYPE_SKILLS,
    CharacterArchetype.QUEEN: QUEEN_ARCHETYPE_SKILLS,
    CharacterArchetype.KING: KING_ARCHETYPE_SKILLS,
}

ARCHETYPE_CHARACTERIZATIONS: dict[CharacterArchetype, str] = {
    CharacterArchetype.JACK: JACK_CHARACTERIZATION,
    CharacterArchetype.QUEEN: QUEEN_CHARACTERIZATION,
    CharacterArchetype.KING: KING_CHARACTERIZATION,
}

SUIT_CHARACTERIZATIONS: dict[CharacterSuit, str] = {
    CharacterSuit.CLUBS: CLUBS_CHARACTERIZATION,
    CharacterSuit.HEARTS: HEARTS_CHARACTERIZATION,
    CharacterSuit.SPADES: SPADES_CHARACTERIZATION,
}
