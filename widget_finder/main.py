"""
FastAPI application factory + lifespan.

Thin HTTP surface over :class:`WidgetQueryService`:
- ``/api/v1/widgets``        widgets carrying a tag.
- ``/api/v1/system/health``  liveness + database ping.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from widget_finder import __version__
from widget_finder.api.v1 import api_router
from widget_finder.core.config import settings
from widget_finder.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """No long-lived resources: every request opens its own connection."""
    logger.info(f"Starting {settings.APP_NAME} API ({settings.APP_ENV})")
    yield
    logger.info(f"Shutting down {settings.APP_NAME} API")


def create_fastapi_app() -> FastAPI:
    """Application factory for FastAPI."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Read-only widget lookups by tag",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": __version__,
            "status": "running",
            "docs": "/api/docs" if settings.DEBUG else "disabled",
        }

    return app


# Module-level instance for ``uvicorn widget_finder.main:app``
app = create_fastapi_app()
