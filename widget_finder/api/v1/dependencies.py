"""
FastAPI dependencies — Shared ``Depends()`` callables.

Endpoints never build a :class:`WidgetQueryService` themselves; tests
swap it out through ``app.dependency_overrides[get_widget_service]``.
"""

from __future__ import annotations

from widget_finder.core.config import settings
from widget_finder.services.widgets.widget_service import WidgetQueryService


def get_widget_service() -> WidgetQueryService:
    """Dependency: a query service bound to the configured catalog DB."""
    return WidgetQueryService(
        settings.db_credentials,
        url=settings.DB_URL,
        connect_timeout=settings.connect_timeout,
        query_timeout=settings.query_timeout,
    )
