"""
Payload Validation
Parses the request body and checks the required decision fields.

Fails fast: the first missing field is reported, violations are not
aggregated.
"""
import json
import logging
import math
from typing import Any

from pydantic import ValidationError

from app.core.errors import InvalidBodyError, InvalidFieldError, MissingFieldError
from app.models.schemas.decision import DecisionRequest

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("item", "price", "currency", "snapshot")


def is_blank(value: Any) -> bool:
    """
    True for values treated as missing: None, False, 0, NaN and ''.

    Containers are never blank, so an empty snapshot object still counts as
    present.
    """
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def reject_constant(token: str) -> Any:
    """parse_constant hook: NaN, Infinity and -Infinity are not JSON."""
    raise ValueError(f"Invalid JSON constant: {token}")


def parse_body(raw_body: bytes) -> Any:
    """Decode the raw request body as strict JSON."""
    try:
        return json.loads(raw_body, parse_constant=reject_constant)
    except ValueError as e:
        logger.debug(f"Rejected malformed body: {e}")
        raise InvalidBodyError()


def check_required_fields(payload: Any) -> None:
    """Raise MissingFieldError for the first absent or blank required field."""
    fields = payload if isinstance(payload, dict) else {}
    for field in REQUIRED_FIELDS:
        if is_blank(fields.get(field)):
            raise MissingFieldError(field)


def parse_decision_request(raw_body: bytes) -> DecisionRequest:
    """
    Turn a raw request body into a DecisionRequest.

    Args:
        raw_body: Request body bytes

    Returns:
        Validated DecisionRequest

    Raises:
        InvalidBodyError: Body is not JSON
        MissingFieldError: A required field is absent or blank
        InvalidFieldError: A field has the wrong type
    """
    payload = parse_body(raw_body)
    check_required_fields(payload)

    try:
        return DecisionRequest.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise InvalidFieldError(message=f"{location}: {first['msg']}")
