"""Resolution of print request options into a rendering configuration."""

from dataclasses import dataclass
from typing import Optional

from print2pdf.api.config import (
    DEFAULT_BACKGROUND,
    DEFAULT_FORMAT,
    DEFAULT_LAYOUT,
    DEFAULT_MEDIA,
    DEFAULT_SCALE,
    PAPER_FORMAT_ALIASES,
)
from print2pdf.api.models import PrintRequest


@dataclass(frozen=True)
class PageMargin:
    """Four-sided page margin."""

    top: str
    bottom: str
    left: str
    right: str

    def as_dict(self) -> dict[str, str]:
        return {
            "top": self.top,
            "bottom": self.bottom,
            "left": self.left,
            "right": self.right,
        }


@dataclass(frozen=True)
class RenderOptions:
    """Fully resolved rendering configuration."""

    media: str = DEFAULT_MEDIA
    format: str = DEFAULT_FORMAT
    background: bool = DEFAULT_BACKGROUND
    layout: str = DEFAULT_LAYOUT
    margin: Optional[PageMargin] = None
    scale: float = DEFAULT_SCALE

    @property
    def landscape(self) -> bool:
        return self.layout == "landscape"


def resolve_options(request: PrintRequest) -> RenderOptions:
    """Merge the caller's options with the documented defaults."""
    paper_format = request.format or DEFAULT_FORMAT

    margin = None
    if request.margin is not None:
        margin = PageMargin(
            top=request.margin.top,
            bottom=request.margin.bottom,
            left=request.margin.left,
            right=request.margin.right,
        )

    return RenderOptions(
        media=request.media or DEFAULT_MEDIA,
        format=PAPER_FORMAT_ALIASES.get(paper_format, paper_format),
        background=DEFAULT_BACKGROUND if request.background is None else request.background,
        layout=request.layout or DEFAULT_LAYOUT,
        margin=margin,
        scale=DEFAULT_SCALE if request.scale is None else float(request.scale),
    )
