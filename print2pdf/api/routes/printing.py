"""Print and status API endpoints."""

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from print2pdf.api.config import settings
from print2pdf.api.models import StatusResponse
from print2pdf.api.responses import build_error_response, build_print_response
from print2pdf.core.browser import BrowserSession
from print2pdf.core.errors import PrintError, PrintValidationError
from print2pdf.core.pipeline import PrintPipeline
from print2pdf.core.renderer import PageRenderer
from print2pdf.core.storage import ArtifactPublisher

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

router = APIRouter()

# One browser per process, reused across warm invocations
browser_session = BrowserSession(
    launch_timeout_seconds=settings.browser_launch_timeout_seconds,
    headless=settings.browser_headless,
)


def get_browser_session() -> BrowserSession:
    """Get the process-wide browser session."""
    return browser_session


def get_page_renderer() -> PageRenderer:
    """Get page renderer instance."""
    return PageRenderer(navigation_timeout_seconds=settings.navigation_timeout_seconds)


def get_artifact_publisher() -> ArtifactPublisher:
    """Get artifact publisher instance."""
    return ArtifactPublisher(
        bucket=settings.bucket,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        aws_region=settings.aws_region,
        timeout_seconds=settings.s3_timeout_seconds,
        endpoint_url=settings.s3_endpoint_url,
        public_base_url=settings.public_base_url,
        key_prefix=settings.key_prefix,
    )


def get_print_pipeline(
    session: BrowserSession = Depends(get_browser_session),
    renderer: PageRenderer = Depends(get_page_renderer),
    publisher: ArtifactPublisher = Depends(get_artifact_publisher),
) -> PrintPipeline:
    """Get print pipeline wired to the shared browser session."""
    return PrintPipeline(session=session, renderer=renderer, publisher=publisher)


@router.post("/print")
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
@limiter.limit(f"{settings.rate_limit_per_hour}/hour")
async def print_page(
    request: Request,
    pipeline: PrintPipeline = Depends(get_print_pipeline),
) -> JSONResponse:
    """
    Render a web page as a PDF and return its public URL.

    Returns 400 for invalid requests and a generic 5xx when rendering or
    publishing fails.
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return build_error_response(
            PrintValidationError("Request body must be valid JSON")
        )

    try:
        location = await asyncio.wait_for(
            pipeline.run(body),
            timeout=settings.request_timeout_seconds,
        )
        return build_print_response(location)

    except asyncio.TimeoutError as e:
        logger.error(f"Request timeout after {settings.request_timeout_seconds}s")
        return build_error_response(e)

    except PrintValidationError as e:
        return build_error_response(e)

    except PrintError as e:
        logger.error(f"Print failed ({type(e).__name__}): {e}")
        return build_error_response(e)

    except Exception as e:
        logger.error(f"Unexpected error printing page: {e}", exc_info=True)
        return build_error_response(e)


@router.get("/status", response_model=StatusResponse)
async def status() -> StatusResponse:
    """Liveness probe."""
    return StatusResponse(status=True)
