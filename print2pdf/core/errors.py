"""Errors raised by the print pipeline stages."""


class PrintError(Exception):
    """Base class for print pipeline failures."""

    pass


class PrintValidationError(PrintError):
    """Raised when a print request violates the request contract."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class BrowserUnavailableError(PrintError):
    """Raised when a browser session cannot be established."""

    pass


class NavigationError(PrintError):
    """Raised when the target page cannot be loaded."""

    pass


class NavigationTimeoutError(NavigationError):
    """Raised when the target page does not settle in time."""

    pass


class PdfCaptureError(PrintError):
    """Raised when PDF capture fails after a successful navigation."""

    pass


class StorageWriteError(PrintError):
    """Raised when the rendered PDF cannot be written to storage."""

    pass
