"""
Row mapping helpers — pure functions, no I/O.

``GROUP_CONCAT`` hands back comma separated id strings (``bytes`` on
some MySQL collations, ``NULL`` when a left join found nothing); these
helpers turn them into sorted, unique ``int`` lists and build records.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterable, List, Mapping

from widget_finder.services.widgets.records import Dongle, Tag, Widget, WidgetDetail

# Leading number of a string, e.g. " 12.7abc" → sign "", integer part "12"
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?)(?:(\d+)(?:\.\d*)?|\.\d+)")

# Largest value both MySQL and SQLite bind as LIMIT / OFFSET
MAX_PAGINATION_VALUE = 2**63 - 1


def coerce_non_negative_int(value: Any) -> int:
    """
    Coerce a pagination argument to an ``int >= 0``.

    Floats are truncated, strings use their leading number, anything
    non-numeric becomes 0.  Results are clamped to
    ``0 .. MAX_PAGINATION_VALUE``.
    """
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        number = int(value)
    elif isinstance(value, float):
        number = int(value) if math.isfinite(value) else 0
    else:
        match = _NUMERIC_PREFIX.match(str(value))
        if match is None or match.group(1) == "-":
            number = 0
        else:
            digits = (match.group(2) or "0").lstrip("0") or "0"
            # int() refuses very long digit strings; those are past the clamp anyway
            number = int(digits) if len(digits) <= 19 else MAX_PAGINATION_VALUE
    return min(max(number, 0), MAX_PAGINATION_VALUE)


def parse_id_list(value: Any) -> List[int]:
    """``"5,2,5"`` → ``[2, 5]``; ``None`` / ``""`` → ``[]``."""
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    if isinstance(value, int):
        return [value]

    ids = {int(part) for part in str(value).split(",") if part.strip()}
    return sorted(ids)


def map_widget_row(row: Mapping[str, Any]) -> Widget:
    """Build a :class:`Widget` from one grouped query row."""
    return Widget(
        id=int(row["id"]),
        name=row["name"],
        tag_ids=tuple(parse_id_list(row.get("tag_ids"))),
        dongle_ids=tuple(parse_id_list(row.get("dongle_ids"))),
    )


def map_widget_rows(rows: Iterable[Mapping[str, Any]]) -> List[Widget]:
    return [map_widget_row(row) for row in rows]


def expand_widget(
    widget: Widget,
    tags_by_id: Dict[int, Tag],
    dongles_by_id: Dict[int, Dongle],
) -> WidgetDetail:
    """
    Replace id lists with full records.

    Ids missing from the lookup dicts (rows removed between the two
    queries) are skipped.
    """
    return WidgetDetail(
        id=widget.id,
        name=widget.name,
        tags=tuple(tags_by_id[i] for i in widget.tag_ids if i in tags_by_id),
        dongles=tuple(dongles_by_id[i] for i in widget.dongle_ids if i in dongles_by_id),
    )
