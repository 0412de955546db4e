"""
Widget QueryBuilder — SQL construction for the catalog tables.

Single Responsibility: compose parameterized queries.  Every method
returns a fresh ``(sql, bind_params)`` tuple; nothing is executed here.

Usage::

    from widget_finder.services.widgets.query_builder import widget_query_builder

    sql, params = widget_query_builder.build_widgets_with_tag_query(
        tag="tag5", offset=0, limit=20,
    )
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

# Type alias for the (sql_string, bind_params) return
QueryResult = Tuple[str, Dict[str, Any]]


def build_in_clause(
    values: Optional[Sequence[Any]],
    column: str,
    prefix: str,
    params: Dict[str, Any],
) -> Optional[str]:
    """
    Build ``column IN (:prefix_0, :prefix_1, ...)``.

    Adds numbered bind params to *params* dict.
    Returns ``None`` if *values* is empty or ``None``.
    """
    if not values:
        return None
    placeholders: List[str] = []
    for i, v in enumerate(values):
        key = f"{prefix}_{i}"
        placeholders.append(f":{key}")
        params[key] = v
    return f"{column} IN ({', '.join(placeholders)})"


class WidgetQueryBuilder:
    """Constructs parameterized SQL for widget, tag and dongle lookups."""

    # The first widget_tag_map/tag pair filters by the requested tag,
    # the second collects every tag of the matching widgets.  Dongles
    # are left-joined so widgets without any still come back.
    WIDGETS_WITH_TAG_SQL = """
        SELECT    w.id AS id,
                  w.name AS name,
                  GROUP_CONCAT(DISTINCT t2.id) AS tag_ids,
                  GROUP_CONCAT(DISTINCT d.id) AS dongle_ids
        FROM      widget w
        JOIN      widget_tag_map wtm
          ON      wtm.widget_id = w.id
        JOIN      tag t
          ON      t.id = wtm.tag_id
        JOIN      widget_tag_map wtm2
          ON      wtm2.widget_id = w.id
        JOIN      tag t2
          ON      t2.id = wtm2.tag_id
        LEFT JOIN widget_dongle_map wdm
          ON      wdm.widget_id = w.id
        LEFT JOIN dongle d
          ON      d.id = wdm.dongle_id
        WHERE     t.tag = :tag
        AND       w.deleted = 0
        GROUP BY  w.id, w.name
        ORDER BY  w.id ASC
        LIMIT     :limit OFFSET :offset
    """

    def build_widgets_with_tag_query(
        self,
        tag: str,
        offset: int,
        limit: int,
    ) -> QueryResult:
        """
        Build the paginated widget query for a single tag.

        *offset* and *limit* must already be non-negative integers.
        """
        params: Dict[str, Any] = {
            "tag": tag,
            "offset": int(offset),
            "limit": int(limit),
        }
        return self.WIDGETS_WITH_TAG_SQL, params

    def build_tags_by_id_query(self, tag_ids: Sequence[int]) -> QueryResult:
        """``SELECT id, tag FROM tag WHERE id IN (...)``, ordered by id."""
        params: Dict[str, Any] = {}
        clause = build_in_clause(list(tag_ids), "id", "tag", params)
        if clause is None:
            raise ValueError("tag_ids must not be empty")
        sql = f"SELECT id, tag FROM tag WHERE {clause} ORDER BY id"
        return sql, params

    def build_dongles_by_id_query(self, dongle_ids: Sequence[int]) -> QueryResult:
        """``SELECT id FROM dongle WHERE id IN (...)``, ordered by id."""
        params: Dict[str, Any] = {}
        clause = build_in_clause(list(dongle_ids), "id", "dongle", params)
        if clause is None:
            raise ValueError("dongle_ids must not be empty")
        sql = f"SELECT id FROM dongle WHERE {clause} ORDER BY id"
        return sql, params


# ── Singleton ────────────────────────────────────────────────────
widget_query_builder = WidgetQueryBuilder()
