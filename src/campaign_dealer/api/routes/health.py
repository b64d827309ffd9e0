"""Health and root endpoints.

Provides the root ``/`` endpoint (API identity and version) and the
``/health`` endpoint (liveness check plus the configured AI provider).

The version string is read from ``campaign_dealer.__version__`` which is
resolved at import time via ``importlib.metadata``.
"""

from fastapi import APIRouter

from campaign_dealer import __version__
from campaign_dealer import config as config_module

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint showing API identity and current version."""
    return {"message": "Campaign Dealer API", "version": __version__}


@router.get("/health")
async def health_check():
    """Health check endpoint.

    Reports which AI provider is configured without validating it; a
    misconfigured provider surfaces on the first generation request.
    """
    return {"status": "ok", "ai_provider": config_module.config.ai.provider or None}
