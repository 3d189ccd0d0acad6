"""Validation of incoming print requests."""

import logging
from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from print2pdf.api.models import PrintRequest
from print2pdf.core.errors import PrintValidationError

logger = logging.getLogger(__name__)

# Value errors are reported in this order when several fields are invalid.
FIELD_PRECEDENCE = (
    "url",
    "file_name",
    "media",
    "format",
    "layout",
    "background",
    "margin",
    "scale",
)


def validate_print_request(body: Any) -> PrintRequest:
    """
    Validate a decoded JSON body against the print request contract.

    Only the first violated constraint is reported. Missing required fields
    come first, then invalid values in ``FIELD_PRECEDENCE`` order, then
    unrecognised fields.

    Args:
        body: Decoded JSON request body

    Returns:
        Validated PrintRequest

    Raises:
        PrintValidationError: If the body violates the contract
    """
    if not isinstance(body, dict):
        raise PrintValidationError("Request body must be a JSON object")

    try:
        return PrintRequest.model_validate(body)
    except ValidationError as e:
        error = min(e.errors(), key=_precedence)
        field = ".".join(str(part) for part in error["loc"])
        message = _describe(error, field)
        logger.info(f"Rejected print request: {message}")
        raise PrintValidationError(message, field=field) from e


def _precedence(error: ErrorDetails) -> tuple[int, int, int]:
    loc = error["loc"]
    top = str(loc[0]) if loc else ""
    rank = (
        FIELD_PRECEDENCE.index(top) if top in FIELD_PRECEDENCE else len(FIELD_PRECEDENCE)
    )

    if error["type"] == "missing" and len(loc) == 1:
        return (0, rank, 0)
    if error["type"] == "extra_forbidden" and len(loc) == 1:
        return (2, rank, 0)
    return (1, rank, len(loc))


def _describe(error: ErrorDetails, field: str) -> str:
    if error["type"] == "missing":
        return f"Missing required field '{field}'"
    if error["type"] == "extra_forbidden":
        return f"Unrecognized field '{field}'"
    if field == "file_name" and error["type"] == "string_pattern_mismatch":
        return (
            "Invalid value for 'file_name': must end in .pdf and contain only "
            "printable characters"
        )
    return f"Invalid value for '{field}': {error['msg']}"
