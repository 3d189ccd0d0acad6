"""
Page Renderer.

Navigates an acquired page to the target URL, waits for the network to go
idle and captures the page as a PDF.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

from print2pdf.api.config import MAX_PDF_SCALE, MIN_PDF_SCALE, PDF_CONTENT_TYPE
from print2pdf.core.errors import NavigationError, NavigationTimeoutError, PdfCaptureError
from print2pdf.core.options import RenderOptions
from print2pdf.utils.metrics import elapsed_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PdfArtifact:
    """Rendered PDF bytes, produced once per request."""

    data: bytes
    content_type: str = PDF_CONTENT_TYPE

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class PageRenderer:
    """Render web pages to PDF with Playwright."""

    def __init__(self, navigation_timeout_seconds: float = 10.0):
        self.navigation_timeout_seconds = navigation_timeout_seconds

    async def render(self, page: Page, url: str, options: RenderOptions) -> PdfArtifact:
        """
        Render ``url`` on ``page`` as a PDF.

        Args:
            page: Page acquired from the browser session
            url: Absolute URL of the page to render
            options: Resolved rendering options

        Returns:
            PdfArtifact with the PDF bytes

        Raises:
            NavigationTimeoutError: If the page does not settle in time
            NavigationError: If the page cannot be loaded or returns status >= 400
            PdfCaptureError: If PDF capture fails
        """
        start_time = time.time()

        await self._navigate(page, url, options)
        data = await self._capture(page, url, options)

        logger.info(
            f"Rendered {url} in {elapsed_ms(start_time)}ms: "
            f"{len(data)} bytes, format={options.format}, layout={options.layout}"
        )
        return PdfArtifact(data=data)

    async def _navigate(self, page: Page, url: str, options: RenderOptions) -> None:
        timeout_ms = self.navigation_timeout_seconds * 1000
        logger.info(f"Navigating to {url} (media={options.media})")

        try:
            await page.emulate_media(media=options.media)
            response = await page.goto(url, timeout=timeout_ms, wait_until="networkidle")
        except PlaywrightTimeout as e:
            raise NavigationTimeoutError(
                f"Page load timeout after {self.navigation_timeout_seconds}s: {url}"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e}") from e

        if response is None:
            raise NavigationError(f"No response received from {url}")

        # Error pages are not rendered
        if response.status >= 400:
            raise NavigationError(f"HTTP {response.status} for {url}")

    async def _capture(self, page: Page, url: str, options: RenderOptions) -> bytes:
        try:
            data: bytes = await page.pdf(**self.pdf_arguments(options))
        except PlaywrightError as e:
            raise PdfCaptureError(f"PDF capture failed for {url}: {e}") from e

        if not data:
            raise PdfCaptureError(f"PDF capture produced no data for {url}")

        return data

    @staticmethod
    def pdf_arguments(options: RenderOptions) -> dict[str, Any]:
        """Map resolved options onto ``page.pdf()`` keyword arguments."""
        scale = min(max(options.scale, MIN_PDF_SCALE), MAX_PDF_SCALE)
        if scale != options.scale:
            logger.warning(
                f"Scale {options.scale} outside supported range, using {scale}"
            )

        arguments: dict[str, Any] = {
            "format": options.format,
            "landscape": options.landscape,
            "print_background": options.background,
            "scale": scale,
        }
        if options.margin is not None:
            arguments["margin"] = options.margin.as_dict()

        return arguments
