"""
LLM output normalization.

Models are asked for a bare JSON object, but what comes back is free text:
sometimes wrapped in a markdown fence, sometimes with a JavaScript-style
``undefined`` where JSON needs ``null``, sometimes with a missing comma, single
quotes or a truncated tail.  ``parse_ai_json`` recovers the object, handing
anything a strict parse rejects to ``json_repair``; anything it still cannot
recover is reported as ``AIJsonParseError`` carrying the raw text.

``parse_and_validate_ai_response`` is the single entry point the campaign
service uses: parse, validate against a pydantic model, and convert every
failure into an ``AIResponseError`` after logging the raw text server-side.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from json_repair import repair_json
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from campaign_dealer.errors import AIResponseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n([\s\S]*?)```")
# String literals are matched first so an ``undefined`` inside one is skipped.
_BARE_UNDEFINED = re.compile(r'"(?:\\.|[^"\\])*"|(:\s*)undefined\b')

UNPARSEABLE_MESSAGE = "AI returned an unparseable response"
INVALID_MESSAGE = "AI returned an invalid response"


class AIJsonParseError(ValueError):
    """Model text could not be turned into a JSON object.

    Attributes:
        raw_text: The original, unmodified model output.
    """

    def __init__(self, message: str, raw_text: str):
        super().__init__(message)
        self.raw_text = raw_text


# ============================================================================
# PARSING
# ============================================================================


def _undefined_to_null(match: re.Match[str]) -> str:
    if match.group(1) is None:
        return match.group(0)
    return match.group(1) + "null"


def parse_ai_json(raw: str) -> dict[str, Any]:
    """
    Recover a JSON object from raw model text.

    Steps, in order:
        1. If the text contains a fenced code block (optionally tagged
           ``json``), keep only the first block's interior.
        2. Replace a bare ``undefined`` following a colon with ``null``;
           occurrences inside string literals are left alone.
        3. Strip surrounding whitespace.
        4. Parse strictly; on failure, let ``json_repair`` fix missing or
           trailing commas, quoting and unbalanced brackets.

    Args:
        raw: Text returned by the provider.

    Returns:
        The parsed JSON object.

    Raises:
        AIJsonParseError: If no JSON object can be recovered.
    """
    text = raw
    fenced = _FENCED_BLOCK.search(text)
    if fenced:
        text = fenced.group(1)

    text = _BARE_UNDEFINED.sub(_undefined_to_null, text)
    text = text.strip()

    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        # Unrecoverable text comes back as "" rather than raising.
        value = repair_json(text, return_objects=True)

    if not isinstance(value, dict):
        raise AIJsonParseError("Failed to parse AI JSON response", raw)
    return value


def parse_and_validate_ai_response(raw: str, model: type[ModelT], label: str) -> ModelT:
    """
    Parse ``raw`` and validate it against ``model``.

    The raw text and the validation issues are logged server-side under
    ``label``; the raised error carries only a generic message.

    Args:
        raw: Text returned by the provider.
        model: Pydantic model the parsed object must satisfy.
        label: Short tag identifying the call site in log lines.

    Returns:
        A validated ``model`` instance.

    Raises:
        AIResponseError: If the text is unparseable or fails validation.
    """
    try:
        parsed = parse_ai_json(raw)
    except AIJsonParseError as exc:
        logger.error("[%s] Failed to parse AI JSON. Raw text: %s", label, exc.raw_text)
        raise AIResponseError(UNPARSEABLE_MESSAGE) from exc

    try:
        return model.model_validate(parsed)
    except PydanticValidationError as exc:
        logger.error(
            "[%s] AI output failed schema validation: %s. Raw text: %s",
            label,
            exc.errors(include_url=False),
            raw,
        )
        raise AIResponseError(INVALID_MESSAGE) from exc
