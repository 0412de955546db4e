"""
WidgetQueryService — Public entry point for widget lookups by tag.

Each call opens its own connection, runs the query and closes the
connection before returning; no state is kept between calls.

Two calling styles:

  - ``find_widgets_with_tag``   raises typed errors
                                (``DatabaseConnectionError``,
                                ``ConnectionStateError``, ``QueryError``).
  - ``lookup_widgets_with_tag`` returns a :class:`WidgetLookup` so
                                callers can tell "no widgets" from
                                "lookup failed" without try/except.

Usage::

    service = WidgetQueryService(settings.db_credentials)
    widgets = service.find_widgets_with_tag("tag5", 0, 20)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.engine import URL

from widget_finder.core.database import DatabaseCredentials, open_connection
from widget_finder.core.exceptions import WidgetFinderError
from widget_finder.services.widgets.query_builder import widget_query_builder
from widget_finder.services.widgets.records import (
    Dongle,
    Tag,
    Widget,
    WidgetDetail,
    WidgetLookup,
)
from widget_finder.services.widgets.row_mapper import (
    coerce_non_negative_int,
    expand_widget,
    map_widget_rows,
)

logger = logging.getLogger(__name__)

# Shown to callers instead of driver / connection detail
LOOKUP_FAILED_MESSAGE = "Widget lookup failed, please try again later"


class WidgetQueryService:
    """Runs the widget-by-tag query against the catalog database."""

    def __init__(
        self,
        credentials: Optional[DatabaseCredentials] = None,
        *,
        url: Union[str, URL, None] = None,
        connect_timeout: Optional[int] = None,
        query_timeout: Optional[int] = None,
    ) -> None:
        if credentials is None and url is None:
            raise ValueError("credentials or url is required")
        self._credentials = credentials
        self._url = url
        self._connect_timeout = connect_timeout
        self._query_timeout = query_timeout

    def _connection(self):
        return open_connection(
            self._credentials,
            url=self._url,
            connect_timeout=self._connect_timeout,
            query_timeout=self._query_timeout,
        )

    # ─────────────────────────────────────────────────────────────
    #  PUBLIC API
    # ─────────────────────────────────────────────────────────────

    def find_widgets_with_tag(self, tag: str, offset: Any, limit: Any) -> List[Widget]:
        """
        Widgets carrying *tag*, ordered by id, paginated by *offset*/*limit*.

        Deleted widgets are never returned.  Each widget lists all of
        its tag ids (not only *tag*) and its dongle ids, both ascending.
        """
        offset = coerce_non_negative_int(offset)
        limit = coerce_non_negative_int(limit)
        sql, params = widget_query_builder.build_widgets_with_tag_query(
            tag=tag, offset=offset, limit=limit,
        )

        with self._connection() as conn:
            rows = conn.execute(sql, params)

        widgets = map_widget_rows(rows)
        logger.info(
            f"[WidgetService] tag={tag!r} offset={offset} limit={limit}: "
            f"{len(widgets)} widgets"
        )
        return widgets

    def find_widget_details_with_tag(
        self, tag: str, offset: Any, limit: Any,
    ) -> List[WidgetDetail]:
        """
        Same page as :meth:`find_widgets_with_tag`, with tags and
        dongles resolved into full records.

        Runs on a single connection: the widget query plus at most one
        tag and one dongle lookup for the whole page.
        """
        offset = coerce_non_negative_int(offset)
        limit = coerce_non_negative_int(limit)
        sql, params = widget_query_builder.build_widgets_with_tag_query(
            tag=tag, offset=offset, limit=limit,
        )

        with self._connection() as conn:
            widgets = map_widget_rows(conn.execute(sql, params))

            tag_ids = sorted({i for w in widgets for i in w.tag_ids})
            dongle_ids = sorted({i for w in widgets for i in w.dongle_ids})

            tags_by_id: Dict[int, Tag] = {}
            if tag_ids:
                sql, params = widget_query_builder.build_tags_by_id_query(tag_ids)
                for row in conn.execute(sql, params):
                    tags_by_id[int(row["id"])] = Tag(id=int(row["id"]), tag=row["tag"])

            dongles_by_id: Dict[int, Dongle] = {}
            if dongle_ids:
                sql, params = widget_query_builder.build_dongles_by_id_query(dongle_ids)
                for row in conn.execute(sql, params):
                    dongles_by_id[int(row["id"])] = Dongle(id=int(row["id"]))

        logger.info(
            f"[WidgetService] tag={tag!r} offset={offset} limit={limit}: "
            f"{len(widgets)} widgets, {len(tags_by_id)} tags, "
            f"{len(dongles_by_id)} dongles"
        )
        return [expand_widget(w, tags_by_id, dongles_by_id) for w in widgets]

    def lookup_widgets_with_tag(
        self, tag: str, offset: Any, limit: Any, expand: bool = False,
    ) -> WidgetLookup:
        """
        Result-or-error wrapper around the finders.

        Typed data-access errors are logged and turned into a
        :class:`WidgetLookup` carrying a generic message.
        """
        finder = self.find_widget_details_with_tag if expand else self.find_widgets_with_tag
        try:
            widgets = finder(tag, offset, limit)
        except WidgetFinderError as exc:
            logger.error(
                f"[WidgetService] Lookup for tag={tag!r} failed: "
                f"{type(exc).__name__}: {exc}"
            )
            return WidgetLookup(widgets=(), error=LOOKUP_FAILED_MESSAGE)
        return WidgetLookup(widgets=tuple(widgets))

    def ping(self) -> bool:
        """Open a connection and run ``SELECT 1``; False on any data-access error."""
        try:
            with self._connection() as conn:
                conn.execute("SELECT 1 AS ok")
        except WidgetFinderError as exc:
            logger.warning(f"[WidgetService] Health check failed: {exc}")
            return False
        return True
