"""API request and response models."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, StrictBool

from print2pdf.api.config import FILE_NAME_PATTERN


class Margin(BaseModel):
    """Page margins as CSS measurements (e.g. ``"1cm"``, ``"0.5in"``)."""

    model_config = ConfigDict(extra="forbid")

    top: str = Field(..., description="Top margin")
    bottom: str = Field(..., description="Bottom margin")
    left: str = Field(..., description="Left margin")
    right: str = Field(..., description="Right margin")


class PrintRequest(BaseModel):
    """Request to render a web page as a PDF.

    Optional fields are left as ``None`` when the caller omits them; defaults
    are applied by :func:`print2pdf.core.options.resolve_options`.
    """

    model_config = ConfigDict(extra="forbid", regex_engine="python-re")

    url: HttpUrl = Field(..., description="Absolute URL of the page to render")
    file_name: str = Field(
        ...,
        pattern=FILE_NAME_PATTERN,
        description="Name of the generated file, ending in .pdf",
    )
    media: Optional[Literal["screen", "print"]] = Field(
        default=None, description="CSS media type to emulate"
    )
    format: Optional[
        Literal[
            "Letter",
            "Legal",
            "Tabloid",
            "Tabload",
            "Ledger",
            "A0",
            "A1",
            "A2",
            "A3",
            "A4",
            "A5",
            "A6",
        ]
    ] = Field(default=None, description="Paper size")
    layout: Optional[Literal["portrait", "landscape"]] = Field(
        default=None, description="Page orientation"
    )
    background: Optional[StrictBool] = Field(
        default=None, description="Print background graphics"
    )
    margin: Optional[Margin] = Field(default=None, description="Page margins")
    scale: Optional[float] = Field(
        default=None, gt=0, strict=True, description="Scale of the page rendering"
    )


class PrintResponse(BaseModel):
    """Response containing the retrieval URL of the generated PDF."""

    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., description="Public URL of the generated PDF")


class ErrorResponse(BaseModel):
    """Error payload returned for any failed request."""

    model_config = ConfigDict(extra="forbid")

    message: str = Field(..., description="Caller-facing error message")


class StatusResponse(BaseModel):
    """Liveness probe payload."""

    model_config = ConfigDict(extra="forbid")

    status: bool = Field(..., description="Whether the service is up")
