"""Print request pipeline."""

import logging
import time
from typing import Any

from print2pdf.core.browser import BrowserSession
from print2pdf.core.options import resolve_options
from print2pdf.core.renderer import PageRenderer
from print2pdf.core.storage import ArtifactPublisher, StorageLocation
from print2pdf.core.validation import validate_print_request
from print2pdf.utils.metrics import elapsed_ms

logger = logging.getLogger(__name__)


class PrintPipeline:
    """Validate, render and publish a single print request."""

    def __init__(
        self,
        session: BrowserSession,
        renderer: PageRenderer,
        publisher: ArtifactPublisher,
    ):
        self.session = session
        self.renderer = renderer
        self.publisher = publisher

    async def run(self, body: Any) -> StorageLocation:
        """
        Run the whole pipeline for a decoded JSON body.

        Validation happens before any browser resource is acquired. Every
        stage fails fast with a PrintError subclass.
        """
        start_time = time.time()

        request = validate_print_request(body)
        options = resolve_options(request)
        url = str(request.url)

        async with self.session.acquire_page() as page:
            artifact = await self.renderer.render(page, url, options)

        location = await self.publisher.publish(artifact, request.file_name)

        logger.info(f"Printed {url} to {location.key} in {elapsed_ms(start_time)}ms")
        return location
