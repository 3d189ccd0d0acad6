"""Mapping of pipeline outcomes onto the HTTP wire contract."""

import asyncio
import logging

from fastapi.responses import JSONResponse

from print2pdf.api.config import RENDER_FAILED_MESSAGE
from print2pdf.api.models import ErrorResponse, PrintResponse
from print2pdf.core.errors import PrintValidationError
from print2pdf.core.storage import StorageLocation

logger = logging.getLogger(__name__)


def build_print_response(location: StorageLocation) -> JSONResponse:
    """Build the 200 response for a published PDF."""
    payload = PrintResponse(url=location.url)
    return JSONResponse(status_code=200, content=payload.model_dump())


def build_error_response(exc: BaseException) -> JSONResponse:
    """
    Build the error response for any pipeline failure.

    Validation messages are echoed to the caller. Everything else gets a
    generic message; the detail only goes to the log.
    """
    if isinstance(exc, PrintValidationError):
        return _error(400, exc.message)

    if isinstance(exc, asyncio.TimeoutError):
        return _error(504, RENDER_FAILED_MESSAGE)

    return _error(500, RENDER_FAILED_MESSAGE)


def _error(status_code: int, message: str) -> JSONResponse:
    payload = ErrorResponse(message=message)
    return JSONResponse(status_code=status_code, content=payload.model_dump())
