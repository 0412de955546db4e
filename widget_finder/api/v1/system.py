"""System endpoints — health check."""

from fastapi import APIRouter, Depends

from widget_finder.api.v1.dependencies import get_widget_service
from widget_finder.services.widgets.widget_service import WidgetQueryService

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
def health_check(service: WidgetQueryService = Depends(get_widget_service)):
    """Liveness check plus a ``SELECT 1`` against the catalog DB."""
    return {
        "status": "ok",
        "database": service.ping(),
    }
