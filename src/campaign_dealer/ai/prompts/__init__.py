"""Prompt builders: typed domain input in, provider-agnostic ``AIPrompt`` out."""

from campaign_dealer.ai.prompts.character import build_character_prompt
from campaign_dealer.ai.prompts.script import build_script_prompt

__all__ = ["build_character_prompt", "build_script_prompt"]
