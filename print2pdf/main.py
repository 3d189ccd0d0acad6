"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from print2pdf.api.config import settings
from print2pdf.api.routes import printing
from print2pdf.utils.metrics import configure_logging

logger = logging.getLogger(__name__)


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Handle rate limit exceeded errors."""
    from fastapi.responses import JSONResponse

    return JSONResponse(
        status_code=429,
        content={"message": "Rate limit exceeded. Please try again later."},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events."""
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)
    logger.info("Application started successfully")

    yield

    logger.info("Shutting down application...")
    await printing.browser_session.close()
    logger.info("Application shut down successfully")


app = FastAPI(
    title="Print2Pdf",
    description="Render web pages as PDF documents stored in S3",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = printing.limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "OPTIONS", "POST"],
    allow_headers=["Content-Type"],
)

app.include_router(printing.router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Print2Pdf",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "print2pdf.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
