"""
API v1 — Router aggregation.
"""

from fastapi import APIRouter

from widget_finder.api.v1.system import router as system_router
from widget_finder.api.v1.widgets import router as widgets_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(system_router)
api_router.include_router(widgets_router)
