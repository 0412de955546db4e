"""
Widget API endpoints — Widgets carrying a given tag.

Routes:
  GET /widgets?tag=...&offset=0&limit=20&expand=false

Handlers are plain ``def`` so the blocking DB call runs in FastAPI's
threadpool.  Data-access failures become a 503 with a generic detail;
the underlying cause is only logged.
"""

from __future__ import annotations

from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from widget_finder.api.v1.dependencies import get_widget_service
from widget_finder.core.config import settings
from widget_finder.services.widgets.widget_service import WidgetQueryService

router = APIRouter(prefix="/widgets", tags=["widgets"])


# ── Pydantic models ──────────────────────────────────────────────

class TagOut(BaseModel):
    id: int
    tag: str


class DongleOut(BaseModel):
    id: int


class WidgetOut(BaseModel):
    id: int
    name: str
    tag_ids: List[int]
    dongle_ids: List[int]


class WidgetDetailOut(BaseModel):
    id: int
    name: str
    tags: List[TagOut]
    dongles: List[DongleOut]


class WidgetPage(BaseModel):
    data: Union[List[WidgetDetailOut], List[WidgetOut]]
    count: int
    offset: int
    limit: int


# ── Endpoints ────────────────────────────────────────────────────

@router.get("", response_model=WidgetPage)
def list_widgets_with_tag(
    tag: str = Query(..., min_length=1, description="Exact tag value"),
    offset: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=0, le=settings.MAX_PAGE_SIZE),
    expand: bool = Query(False, description="Return full tag/dongle records"),
    service: WidgetQueryService = Depends(get_widget_service),
):
    """
    Widgets carrying *tag*, ordered by id.

    With ``expand=true`` each widget lists ``tags`` / ``dongles``
    records instead of ``tag_ids`` / ``dongle_ids``.
    """
    lookup = service.lookup_widgets_with_tag(tag, offset, limit, expand=expand)
    if not lookup.ok:
        raise HTTPException(status_code=503, detail=lookup.error)

    return {
        "data": [w.to_dict() for w in lookup.widgets],
        "count": len(lookup.widgets),
        "offset": offset,
        "limit": limit,
    }
