"""Main FastAPI application."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from structlog import get_logger

from .. import __version__
from ..infrastructure.config import Settings, get_settings
from ..infrastructure.logging_config import configure_logging
from .dependencies import close_database
from .exceptions import setup_exception_handlers
from .middleware import CORSHeadersMiddleware, ErrorHandlingMiddleware, LoggingMiddleware
from .routes import streams

logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup and release the database on shutdown."""
    configure_logging(app.state.settings)
    logger.info("Relay starting", version=__version__)
    yield
    await close_database()
    logger.info("Relay stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create FastAPI application."""
    settings = settings or get_settings()

    # Every top-level path is a stream identifier, so no docs routes.
    app = FastAPI(
        title="sludge",
        description="Live audio relay",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_exception_handlers(app)

    # Middleware, innermost first
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(
        CORSHeadersMiddleware,
        allow_origin=settings.cors_allow_origin,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(LoggingMiddleware)

    # Routes
    app.include_router(streams.router)

    return app


app = create_app()
