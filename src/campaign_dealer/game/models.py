"""
Domain models for characters, campaigns and request vocabulary.

These pydantic models are the single definition of every shape that crosses
a boundary in the generation pipeline:

- Mechanical skeletons dealt by the randomizer (``CharacterTemplate``).
- The AI-generated narrative layer (``CharacterIdentity``) and the merged,
  playable ``CharacterSheet``.
- The AI-generated ``GameMasterScript``.
- The closed vocabularies accepted from clients (``Genre``, ``Locale``).

Python attributes are snake_case; the JSON wire format is camelCase
(``suitSkill``, ``characterIdentity``, ``weakPoints``...).  Every model
accepts either spelling on input and serializes by alias.

Models that represent generated artefacts are frozen: a sheet or a script
is created once and never mutated by this service.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ============================================================================
# VOCABULARIES
# ============================================================================


class CharacterArchetype(str, Enum):
    """Character role labels.  Not a power ranking."""

    KING = "king"
    QUEEN = "queen"
    JACK = "jack"


class CharacterSuit(str, Enum):
    """Suits a player character can belong to.

    Diamonds are deliberately absent: in "The House Doesn't Always Win" the
    diamonds are the antagonist faction and never a player suit.
    """

    HEARTS = "hearts"
    CLUBS = "clubs"
    SPADES = "spades"


class Locale(str, Enum):
    """Locales the generator can write in."""

    EN = "en"
    IT = "it"


# Human-readable language names embedded in prompts.
LOCALE_NAMES: dict[Locale, str] = {
    Locale.EN: "English",
    Locale.IT: "Italian",
}


class Genre(str, Enum):
    """Campaign setting tags."""

    # fantasy
    HIGH_FANTASY = "highFantasy"
    DARK_FANTASY = "darkFantasy"
    SWORD_AND_SORCERY = "swordAndSorcery"
    MYTHIC_FANTASY = "mythicFantasy"
    # scifi
    SCIENCE_FANTASY = "scienceFantasy"
    CYBERPUNK = "cyberpunk"
    SPACE_OPERA = "spaceOpera"
    POST_APOCALYPTIC = "postApocalyptic"
    # horror
    GOTHIC_HORROR = "gothicHorror"
    COSMIC_HORROR = "cosmicHorror"
    SURVIVAL_HORROR = "survivalHorror"
    # modern
    URBAN_FANTASY = "urbanFantasy"
    SUPERHERO = "superhero"
    ALTERNATE_HISTORY = "alternateHistory"
    CONSPIRACY_THRILLER = "conspiracyThriller"
    # cultural
    WUXIA = "wuxia"
    ISEKAI = "isekai"
    WEIRD_WEST = "weirdWest"
    # aesthetic
    STEAMPUNK = "steampunk"
    DIESELPUNK = "dieselpunk"
    BIOPUNK = "biopunk"
    CLOCKPUNK = "clockpunk"


GENRE_GROUPS: dict[str, tuple[Genre, ...]] = {
    "fantasy": (
        Genre.HIGH_FANTASY,
        Genre.DARK_FANTASY,
        Genre.SWORD_AND_SORCERY,
        Genre.MYTHIC_FANTASY,
    ),
    "scifi": (
        Genre.SCIENCE_FANTASY,
        Genre.CYBERPUNK,
        Genre.SPACE_OPERA,
        Genre.POST_APOCALYPTIC,
    ),
    "horror": (Genre.GOTHIC_HORROR, Genre.COSMIC_HORROR, Genre.SURVIVAL_HORROR),
    "modern": (
        Genre.URBAN_FANTASY,
        Genre.SUPERHERO,
        Genre.ALTERNATE_HISTORY,
        Genre.CONSPIRACY_THRILLER,
    ),
    "cultural": (Genre.WUXIA, Genre.ISEKAI, Genre.WEIRD_WEST),
    "aesthetic": (Genre.STEAMPUNK, Genre.DIESELPUNK, Genre.BIOPUNK, Genre.CLOCKPUNK),
}

# Lower is better: -1 is a bonus, +1 a malus.
StatModifier = Literal[-2, -1, 0, 1, 2]

# Exactly ten weak points per script.
WEAK_POINT_COUNT = 10

# One distinct (archetype, suit) pair per player.
MAX_PLAYERS = len(CharacterArchetype) * len(CharacterSuit)


# ============================================================================
# BASE MODEL
# ============================================================================


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase JSON, immutable instances."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================================================
# CHARACTER MODELS
# ============================================================================


class SkillUses(CamelModel):
    """Limited-use counter attached to some skills."""

    uses_left: int
    max_uses: int


class CharacterSkill(CamelModel):
    """
    A skill reference.

    ``name`` and ``description`` are i18n keys resolved by the client, not
    prose.
    """

    name: str
    description: str
    uses: SkillUses | None = None


class SuitDamage(CamelModel):
    """Per-suit damage track.  Every flag starts ``False``."""

    hearts: bool = False
    clubs: bool = False
    spades: bool = False


class SuitModifiers(CamelModel):
    """Per-suit stat modifiers."""

    hearts: StatModifier = 0
    clubs: StatModifier = 0
    spades: StatModifier = 0

    def for_suit(self, suit: CharacterSuit) -> int:
        """Return the modifier for ``suit``."""
        return getattr(self, suit.value)


class CharacterItem(CamelModel):
    """A signature weapon or instrument."""

    name: str
    concealed: bool


class CharacterIdentity(CamelModel):
    """
    The AI-generated narrative layer of a character.

    Only ``name`` is required.  ``null`` for any optional field is accepted
    and treated as absent.
    """

    name: str = Field(min_length=1)
    pronouns: str | None = None
    concept: str | None = None
    weapon: CharacterItem | None = None
    instrument: CharacterItem | None = None


class CharacterSheet(CamelModel):
    """A complete player character: mechanical fields plus identity."""

    archetype: CharacterArchetype
    suit: CharacterSuit
    damage: SuitDamage
    modifiers: SuitModifiers
    suit_skill: CharacterSkill
    archetype_skills: list[CharacterSkill]
    character_identity: CharacterIdentity


class CharacterTemplate(CamelModel):
    """
    A mechanically complete, narratively empty character skeleton.

    The two characterization strings are prompt material only; they are
    dropped when the template is merged into a ``CharacterSheet``.
    """

    archetype: CharacterArchetype
    suit: CharacterSuit
    damage: SuitDamage
    modifiers: SuitModifiers
    suit_skill: CharacterSkill
    archetype_skills: list[CharacterSkill]
    suit_characterization: str
    archetype_characterization: str

    @property
    def key(self) -> tuple[CharacterArchetype, CharacterSuit]:
        """The (archetype, suit) pair that must be unique within a party."""
        return (self.archetype, self.suit)

    def to_sheet(self, identity: CharacterIdentity) -> CharacterSheet:
        """Merge this template with ``identity``; mechanical fields are copied verbatim."""
        return CharacterSheet(
            archetype=self.archetype,
            suit=self.suit,
            damage=self.damage,
            modifiers=self.modifiers,
            suit_skill=self.suit_skill,
            archetype_skills=list(self.archetype_skills),
            character_identity=identity,
        )


# ============================================================================
# CAMPAIGN MODELS
# ============================================================================


class Target(CamelModel):
    """An antagonist figure the party must neutralize."""

    name: str
    description: str


class Targets(CamelModel):
    """One target per archetype label."""

    king: Target
    queen: Target
    jack: Target


class WeakPoint(CamelModel):
    """An exploitable crack in the antagonist faction."""

    name: str
    role: str


class GameMasterScript(CamelModel):
    """The AI-generated game-master script for a three-session campaign."""

    hook: str
    targets: Targets
    weak_points: list[WeakPoint] = Field(
        min_length=WEAK_POINT_COUNT, max_length=WEAK_POINT_COUNT
    )
    scenes: list[str]
    central_tension: str
    plot: str
