"""
FastAPI backend server for Campaign Dealer.

This module builds and configures the FastAPI application. It sets up:
- Logging from the ``[logging]`` configuration section
- CORS middleware for the browser client
- The provider registry and the campaign service every route shares
- Exception handlers that map errors to a stable JSON body
- All API route endpoints

Error responses always have the shape ``{"message": str}``; request
validation failures add ``"issues"``.  Stack traces, raw model text and
configuration details are logged, never returned.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from campaign_dealer import __version__
from campaign_dealer import config as config_module
from campaign_dealer.ai.registry import ProviderRegistry, build_default_registry
from campaign_dealer.api.routes import register_routes
from campaign_dealer.config import AISettings
from campaign_dealer.errors import AppError, ValidationError, error_payload
from campaign_dealer.services.campaign import CampaignService

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request"
INTERNAL_ERROR_MESSAGE = "Internal server error"

_LOG_FORMATS = {
    "simple": "%(levelname)s %(message)s",
    "detailed": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
}

# ============================================================================
# LOGGING
# ============================================================================


def configure_logging() -> None:
    """Configure the ``campaign_dealer`` logger hierarchy from settings.

    Safe to call more than once; the stream handler is installed only once.
    Records still propagate to the root logger.
    """
    settings = config_module.config.logging
    package_logger = logging.getLogger("campaign_dealer")
    package_logger.setLevel(settings.level)

    if not package_logger.handlers:
        package_logger.addHandler(logging.StreamHandler())
    for handler in package_logger.handlers:
        handler.setFormatter(logging.Formatter(_LOG_FORMATS[settings.format]))


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


def validation_issues(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Reduce pydantic error dicts to their client-safe ``loc``/``msg``/``type``."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in errors
    ]


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map a domain error to its HTTP status and payload."""
    log = logger.warning if exc.status_code < 500 else logger.error
    cause = exc.__cause__
    log(
        "%s %s failed: %s: %s%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        exc.message,
        f" (caused by {type(cause).__name__}: {cause})" if cause is not None else "",
    )
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map FastAPI request validation failures to a 422 ``ValidationError`` payload."""
    error = ValidationError(INVALID_REQUEST_MESSAGE, data=validation_issues(exc.errors()))
    logger.info("%s %s rejected: %s", request.method, request.url.path, error.data)
    return JSONResponse(status_code=error.status_code, content=error_payload(error))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Keep framework HTTP errors (404, 405...) in the same ``{"message"}`` shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report a programming defect as a generic 500 and log the traceback."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


# ============================================================================
# APPLICATION FACTORY
# ============================================================================


def create_app(
    registry: ProviderRegistry | None = None,
    settings: AISettings | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        registry: Provider registry; the built-in providers are registered
                  when omitted.
        settings: AI settings override, used by tests.  The process
                  configuration is read per request when omitted.

    Returns:
        The configured application.
    """
    configure_logging()
    cfg = config_module.config

    app = FastAPI(
        title="Campaign Dealer",
        version=__version__,
        docs_url="/docs" if cfg.docs_should_be_enabled else None,
        redoc_url="/redoc" if cfg.docs_should_be_enabled else None,
        openapi_url="/openapi.json" if cfg.docs_should_be_enabled else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.security.cors_origins,
        allow_credentials=cfg.security.cors_allow_credentials,
        allow_methods=cfg.security.cors_allow_methods,
        allow_headers=cfg.security.cors_allow_headers,
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    if registry is None:
        registry = build_default_registry()
    service = CampaignService(registry, settings)
    app.state.campaign_service = service

    register_routes(app, service)
    logger.debug("Application created (providers: %s)", ", ".join(registry.names()))
    return app


# ============================================================================
# SERVER STARTUP
# ============================================================================


def start_server(host: str | None = None, port: int | None = None) -> None:
    """
    Run the application under uvicorn.

    Args:
        host: Interface to bind; ``[server] host`` when omitted.
        port: Port to bind; ``[server] port`` when omitted.
    """
    import uvicorn

    cfg = config_module.config
    uvicorn.run(
        create_app(),
        host=host or cfg.server.host,
        port=port or cfg.server.port,
        log_level=cfg.logging.level.lower(),
    )


if __name__ == "__main__":
    start_server()
