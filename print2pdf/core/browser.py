"""
Browser Session Manager.

Keeps one headless Chromium process alive across invocations on the same
process. The browser is launched lazily on first use and reused on warm
invocations; every acquisition gets its own browser context and page.
"""

import asyncio
import enum
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from print2pdf.core.errors import BrowserUnavailableError
from print2pdf.utils.metrics import elapsed_ms

logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-setuid-sandbox",
    "--no-sandbox",
]


class SessionState(str, enum.Enum):
    """Lifecycle states of a browser session."""

    UNINITIALIZED = "uninitialized"
    LAUNCHING = "launching"
    READY = "ready"
    FAILED = "failed"


class BrowserSession:
    """
    Process-wide headless browser with lazy launch and self-healing.

    State machine::

        UNINITIALIZED -> LAUNCHING -> READY
        LAUNCHING -> FAILED -> LAUNCHING (on next acquisition)

    A READY session whose browser has disconnected is relaunched on the next
    acquisition.
    """

    def __init__(
        self,
        launch_timeout_seconds: float = 10.0,
        headless: bool = True,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        self.launch_timeout_seconds = launch_timeout_seconds
        self.headless = headless
        self._playwright_factory = playwright_factory
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._state = SessionState.UNINITIALIZED
        self._lock = asyncio.Lock()
        self._open_pages = 0
        self._launches = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def open_pages(self) -> int:
        """Number of pages currently held by callers."""
        return self._open_pages

    @property
    def launches(self) -> int:
        """Number of launch attempts since the session was created."""
        return self._launches

    async def ensure_browser(self) -> Browser:
        """
        Return a connected browser, launching one if necessary.

        Raises:
            BrowserUnavailableError: If the browser cannot be launched within
                the startup timeout
        """
        if self._is_ready():
            assert self._browser is not None
            return self._browser

        async with self._lock:
            if self._is_ready():
                assert self._browser is not None
                return self._browser

            if self._state == SessionState.READY:
                logger.warning("Browser disconnected, relaunching")
                await self._teardown()

            self._state = SessionState.LAUNCHING
            self._launches += 1
            start_time = time.time()
            logger.info(f"Launching browser (headless={self.headless})")

            try:
                await asyncio.wait_for(
                    self._launch(), timeout=self.launch_timeout_seconds
                )
            except asyncio.CancelledError:
                self._state = SessionState.FAILED
                raise
            except asyncio.TimeoutError as e:
                self._state = SessionState.FAILED
                logger.error(
                    f"Browser launch timed out after {self.launch_timeout_seconds}s"
                )
                raise BrowserUnavailableError(
                    f"Browser launch timed out after {self.launch_timeout_seconds}s"
                ) from e
            except Exception as e:
                self._state = SessionState.FAILED
                logger.error(f"Browser launch failed: {e}")
                raise BrowserUnavailableError(f"Browser launch failed: {e}") from e

            self._state = SessionState.READY
            logger.info(f"Browser ready in {elapsed_ms(start_time)}ms")
            assert self._browser is not None
            return self._browser

    @asynccontextmanager
    async def acquire_page(self) -> AsyncIterator[Page]:
        """
        Yield a fresh page in its own browser context.

        The context is closed on exit, including when the caller is
        cancelled, so no page outlives its invocation.
        """
        browser = await self.ensure_browser()
        context: Optional[BrowserContext] = None
        self._open_pages += 1
        try:
            context_task = asyncio.ensure_future(browser.new_context())
            try:
                context = await asyncio.shield(context_task)
            except asyncio.CancelledError:
                # The context may still be created after we stop waiting.
                context_task.add_done_callback(self._discard_context)
                raise
            except PlaywrightError as e:
                logger.error(f"Failed to open browser context: {e}")
                raise BrowserUnavailableError(
                    f"Failed to open browser context: {e}"
                ) from e
            page = await context.new_page()
            yield page
        finally:
            self._open_pages -= 1
            if context is not None:
                await self._close_context(context)

    async def close(self) -> None:
        """Shut down the browser and the Playwright driver."""
        async with self._lock:
            if self._state == SessionState.UNINITIALIZED:
                return
            logger.info("Shutting down browser session")
            await self._teardown()
            self._state = SessionState.UNINITIALIZED

    def _is_ready(self) -> bool:
        return (
            self._state == SessionState.READY
            and self._browser is not None
            and self._browser.is_connected()
        )

    async def _launch(self) -> None:
        playwright = await self._playwright_factory().start()
        try:
            browser = await playwright.chromium.launch(
                headless=self.headless, args=CHROMIUM_ARGS
            )
        except (Exception, asyncio.CancelledError):
            await playwright.stop()
            raise
        self._playwright = playwright
        self._browser = browser

    async def _teardown(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping Playwright: {e}")
            self._playwright = None

    def _discard_context(self, task: "asyncio.Future[BrowserContext]") -> None:
        if task.cancelled() or task.exception() is not None:
            return
        asyncio.ensure_future(self._close_context(task.result()))

    async def _close_context(self, context: BrowserContext) -> None:
        try:
            await context.close()
        except Exception as e:
            logger.warning(f"Error closing browser context: {e}")
