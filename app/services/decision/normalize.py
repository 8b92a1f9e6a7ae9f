"""
Completion Normalization
Turns the raw completion text into a validated decision object.

Models sometimes wrap JSON in markdown fences even when told not to; the
fences are stripped before parsing. Anything still unparsable is a
CompletionFormatError, never a crash.
"""
import json
import logging
import re
from typing import Any, Dict

from pydantic import ValidationError

from app.core.errors import CompletionFormatError, CompletionStructureError
from app.models.schemas.decision import Decision
from app.services.decision.validation import reject_constant

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\n?")
_BARE_FENCE = re.compile(r"```\n?")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers and surrounding whitespace."""
    cleaned = _JSON_FENCE.sub("", text)
    cleaned = _BARE_FENCE.sub("", cleaned)
    return cleaned.strip()


def parse_completion(text: str) -> Any:
    """Parse fenced or bare completion text as JSON."""
    try:
        return json.loads(strip_code_fences(text), parse_constant=reject_constant)
    except ValueError:
        logger.error(f"Failed to parse AI response: {text}")
        raise CompletionFormatError()


def validate_decision(payload: Any) -> Dict[str, Any]:
    """
    Check the structure of a parsed decision.

    Returns the payload unchanged (extra keys included) when it is a valid
    decision object.
    """
    if not isinstance(payload, dict):
        logger.error(f"AI response is not an object: {type(payload).__name__}")
        raise CompletionStructureError()

    try:
        Decision.model_validate(payload)
    except ValidationError as e:
        logger.error(f"AI response failed structure validation: {e.errors()}")
        raise CompletionStructureError()

    return payload


def normalize_completion(text: str) -> Dict[str, Any]:
    """Strip, parse and validate raw completion text."""
    return validate_decision(parse_completion(text))
