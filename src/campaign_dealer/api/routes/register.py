"""
Route registration entry point for the FastAPI application.

Keeps the public ``register_routes(app, service)`` API stable while the
implementation lives in focused router modules.
"""

from fastapi import FastAPI

from campaign_dealer.api.routes import campaign, health
from campaign_dealer.services.campaign import CampaignService


def register_routes(app: FastAPI, service: CampaignService) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router)
    app.include_router(campaign.router(service))
