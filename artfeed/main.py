"""
Main FastAPI application entry point.
Configures logging, exception handlers, telemetry, and routers.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from artfeed.api.dependencies import get_feed_config
from artfeed.api.routers import feed_router, health_router
from artfeed.config import get_settings
from artfeed.config.logging import configure_logging
from artfeed.core.exceptions import AppException
from artfeed.core.telemetry import setup_telemetry


# =============================================================================
# Lifespan (Startup/Shutdown)
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger = logging.getLogger(__name__)
    settings = get_settings()
    config = get_feed_config()

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(
        f"Feed size={config.feed_size}, max_per_artist={config.max_per_artist}, "
        f"max_per_category={config.max_per_category}"
    )

    yield

    logger.info("Shutting down application")


# =============================================================================
# Exception Handlers
# =============================================================================


async def app_exception_handler(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    """Handle custom application exceptions."""
    logger = logging.getLogger(__name__)
    logger.warning(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions - return generic error."""
    logger = logging.getLogger(__name__)
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
            }
        },
    )


# =============================================================================
# Application Factory
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    configure_logging(debug=settings.DEBUG)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
        Artwork Feed API

        Ranks a catalogue of artworks for one viewer and serves a diverse feed.

        ## Features
        - Weighted blend of recency, engagement, quality, personalization and trending
        - Per-artist and per-category caps on the feed
        - "More like this" by category and tag overlap
        - Observability: JSON logs, Prometheus, OpenTelemetry
        """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_router)
    app.include_router(feed_router)

    setup_telemetry(app)

    return app


app = create_app()


# =============================================================================
# Development Entry Point
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "artfeed.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
