"""API routers, one module per endpoint group."""

from campaign_dealer.api.routes.register import register_routes

__all__ = ["register_routes"]
