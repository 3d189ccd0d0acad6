"""Pytest configuration and fixtures."""

import asyncio
from typing import Any, Callable, Optional

import pytest

from print2pdf.core.browser import BrowserSession
from print2pdf.core.options import RenderOptions
from print2pdf.core.renderer import PageRenderer

SAMPLE_PDF = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF"


class FakeResponse:
    """Stand-in for a Playwright navigation response."""

    def __init__(self, status: int = 200):
        self.status = status


class FakePage:
    """Stand-in for a Playwright page."""

    def __init__(self) -> None:
        self.response: Optional[FakeResponse] = FakeResponse(200)
        self.goto_error: Optional[BaseException] = None
        self.goto_delay: float = 0.0
        self.pdf_error: Optional[BaseException] = None
        self.pdf_data: bytes = SAMPLE_PDF
        self.media: Optional[str] = None
        self.goto_calls: list[tuple[str, dict[str, Any]]] = []
        self.pdf_calls: list[dict[str, Any]] = []

    async def emulate_media(self, media: Optional[str] = None) -> None:
        self.media = media

    async def goto(self, url: str, **kwargs: Any) -> Optional[FakeResponse]:
        self.goto_calls.append((url, kwargs))
        if self.goto_delay:
            await asyncio.sleep(self.goto_delay)
        if self.goto_error is not None:
            raise self.goto_error
        return self.response

    async def pdf(self, **kwargs: Any) -> bytes:
        self.pdf_calls.append(kwargs)
        if self.pdf_error is not None:
            raise self.pdf_error
        return self.pdf_data


class FakeContext:
    """Stand-in for a Playwright browser context."""

    def __init__(self, page_factory: Any) -> None:
        self._page_factory = page_factory
        self.closed = False
        self.pages: list[FakePage] = []

    async def new_page(self) -> FakePage:
        page = self._page_factory()
        self.pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    """Stand-in for a Playwright browser."""

    def __init__(self, page_factory: Any) -> None:
        self._page_factory = page_factory
        self.connected = True
        self.closed = False
        self.contexts: list[FakeContext] = []
        self.context_delay: float = 0.0
        self.context_error: Optional[BaseException] = None

    def is_connected(self) -> bool:
        return self.connected

    async def new_context(self, **kwargs: Any) -> FakeContext:
        if self.context_error is not None:
            raise self.context_error
        context = FakeContext(self._page_factory)
        self.contexts.append(context)
        if self.context_delay:
            await asyncio.sleep(self.context_delay)
        return context

    async def close(self) -> None:
        self.closed = True
        self.connected = False


class FakeChromium:
    """Stand-in for ``playwright.chromium``."""

    def __init__(self, driver: "FakePlaywright") -> None:
        self._driver = driver

    async def launch(self, **kwargs: Any) -> FakeBrowser:
        driver = self._driver
        driver.launch_calls.append(kwargs)
        if driver.launch_delay:
            await asyncio.sleep(driver.launch_delay)
        if driver.launch_errors:
            raise driver.launch_errors.pop(0)
        browser = FakeBrowser(driver.page_factory)
        driver.browsers.append(browser)
        return browser


class FakePlaywright:
    """Stand-in for the Playwright driver and its ``async_playwright()`` factory."""

    def __init__(self) -> None:
        self.page_factory: Any = FakePage
        self.launch_errors: list[BaseException] = []
        self.launch_delay: float = 0.0
        self.launch_calls: list[dict[str, Any]] = []
        self.browsers: list[FakeBrowser] = []
        self.starts = 0
        self.stops = 0
        self.chromium = FakeChromium(self)

    def __call__(self) -> "FakePlaywright":
        return self

    async def start(self) -> "FakePlaywright":
        self.starts += 1
        return self

    async def stop(self) -> None:
        self.stops += 1


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    """Create a fake Playwright driver."""
    return FakePlaywright()


@pytest.fixture
def browser_session(fake_playwright: FakePlaywright) -> BrowserSession:
    """Create a browser session backed by the fake driver."""
    return BrowserSession(launch_timeout_seconds=1.0, playwright_factory=fake_playwright)


@pytest.fixture
def page() -> FakePage:
    """Create a fake page."""
    return FakePage()


@pytest.fixture
def page_renderer() -> PageRenderer:
    """Create page renderer instance."""
    return PageRenderer(navigation_timeout_seconds=5.0)


@pytest.fixture
def render_options() -> RenderOptions:
    """Create default render options."""
    return RenderOptions()


@pytest.fixture
def sample_pdf() -> bytes:
    """Bytes every fake page returns from ``page.pdf()``."""
    return SAMPLE_PDF


@pytest.fixture
def make_page() -> Callable[..., FakePage]:
    """Factory for fake pages with preset attributes."""

    def factory(**attrs: Any) -> FakePage:
        fake_page = FakePage()
        for name, value in attrs.items():
            setattr(fake_page, name, value)
        return fake_page

    return factory


@pytest.fixture
def make_response() -> Callable[[int], FakeResponse]:
    """Factory for fake navigation responses."""
    return FakeResponse
