"""
Pydantic models for API requests and responses.

Request bodies use the same camelCase wire format as the domain models
(``playerCount``, ``characterIdentity``...).  Response bodies are the domain
models themselves (``CharacterSheet``, ``GameMasterScript``) serialized by
alias, so no separate response classes exist for them.

Models are organized into two categories:
1. Request models: Data sent FROM the client TO the server
2. Response models: Data sent FROM the server TO the client
"""

from __future__ import annotations

from pydantic import Field

from campaign_dealer.game.models import (
    MAX_PLAYERS,
    CamelModel,
    CharacterSheet,
    Genre,
    Locale,
)

# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class CharactersRequest(CamelModel):
    """
    Request to deal and name a party of characters.

    Attributes:
        player_count: Number of characters (1-9, one per player).
        setting: Campaign setting tags (at least one).
        language: Locale for all generated text.
    """

    player_count: int = Field(ge=1, le=MAX_PLAYERS)
    setting: list[Genre] = Field(min_length=1)
    language: Locale


class ScriptRequest(CamelModel):
    """
    Request for a game-master script for an existing party.

    Attributes:
        characters: Complete character sheets (at least one).
        setting: Campaign setting tags (at least one).
        language: Locale for all generated text.
    """

    characters: list[CharacterSheet] = Field(min_length=1)
    setting: list[Genre] = Field(min_length=1)
    language: Locale


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class ValidationIssue(CamelModel):
    """One field-level problem in a rejected request."""

    loc: list[str | int]
    msg: str
    type: str


class ErrorResponse(CamelModel):
    """
    Body of every error response.

    Attributes:
        message: Stable, client-safe message.
        issues: Field-level problems, present for validation errors only.
    """

    message: str
    issues: list[ValidationIssue] | None = None
