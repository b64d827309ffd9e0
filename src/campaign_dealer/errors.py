"""Typed application exceptions and their HTTP mapping.

This module defines the small, closed exception hierarchy used across the
generation pipeline.  Every domain failure is raised as one of these
classes; the API layer maps them to deterministic HTTP responses in one
place (``error_payload`` and the exception handlers in ``api/server.py``).

Taxonomy
--------
``ValidationError`` (422)
    The caller's request is wrong: schema rejection, or a randomizer
    precondition such as asking for more distinct characters than exist.
``AIProviderError`` (502)
    The configured backend is missing or misconfigured, or the backend call
    itself failed (network, auth, rate limit, missing structured payload).
``AIResponseError`` (502)
    The backend answered, but its text could not be turned into a
    schema-valid domain object.

Anything that is not an ``AppError`` is a programming defect and is left to
propagate as a generic 500.  Client-facing payloads carry only the stable
message and, for validation errors, the structured issue list.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors that map to an HTTP status.

    Args:
        message:     Stable, client-safe message.
        status_code: HTTP status the transport layer responds with.
        data:        Optional client-safe structured detail (issue lists).
    """

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.data = data


class ValidationError(AppError):
    """Caller-supplied input is invalid (HTTP 422)."""

    status_code = 422


class AIProviderError(AppError):
    """The text-generation backend is unavailable or misconfigured (HTTP 502)."""

    status_code = 502


class ProviderConfigurationError(AIProviderError):
    """The AI settings are missing or inconsistent (no provider, no key, no host)."""


class ProviderNotRegisteredError(AIProviderError):
    """A valid provider name has no factory in the registry.

    This signals a wiring problem at startup rather than bad user input.
    """


class MissingStructuredOutputError(AIProviderError):
    """A schema-constrained call returned no structured payload."""


class AIResponseError(AppError):
    """The backend answered but the answer is unusable (HTTP 502)."""

    status_code = 502


def error_payload(error: AppError) -> dict[str, Any]:
    """Build the client-facing JSON body for ``error``.

    Only the message and (when present) the structured ``data`` are exposed;
    causes, raw model text and configuration details stay server-side.
    """
    payload: dict[str, Any] = {"message": error.message}
    if error.data is not None:
        payload["issues"] = error.data
    return payload

