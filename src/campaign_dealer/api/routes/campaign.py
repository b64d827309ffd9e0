"""Campaign generation endpoints (characters, script)."""

from fastapi import APIRouter

from campaign_dealer.api.models import CharactersRequest, ErrorResponse, ScriptRequest
from campaign_dealer.game.models import CharacterSheet, GameMasterScript
from campaign_dealer.services.campaign import CampaignService

ERROR_RESPONSES = {
    422: {"model": ErrorResponse, "description": "Invalid request"},
    502: {"model": ErrorResponse, "description": "AI provider or AI response failure"},
}


def router(service: CampaignService) -> APIRouter:
    """Build the campaign router around a campaign service."""
    api = APIRouter(prefix="/api/campaign", tags=["campaign"])

    @api.post(
        "/characters",
        response_model=list[CharacterSheet],
        response_model_by_alias=True,
        response_model_exclude_none=True,
        responses=ERROR_RESPONSES,
    )
    async def generate_characters(request: CharactersRequest):
        """
        Deal a party of distinct characters and give each an AI identity.

        Returns one sheet per player, in the order the characters were dealt.
        """
        return await service.generate_characters(
            player_count=request.player_count,
            setting=request.setting,
            language=request.language,
        )

    @api.post(
        "/script",
        response_model=GameMasterScript,
        response_model_by_alias=True,
        response_model_exclude_none=True,
        responses=ERROR_RESPONSES,
    )
    async def generate_script(request: ScriptRequest):
        """Generate a three-session game-master script for the given party."""
        return await service.generate_script(
            characters=request.characters,
            setting=request.setting,
            language=request.language,
        )

    return api
