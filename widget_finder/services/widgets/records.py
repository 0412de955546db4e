"""
Plain records returned by the widget query.

Records are immutable, hashable snapshots of catalog rows: id lists
are stored as tuples, deduplicated and sorted ascending.
``to_dict`` renders them back as JSON-friendly lists.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Tag:
    id: int
    tag: str


@dataclass(frozen=True)
class Dongle:
    id: int


@dataclass(frozen=True)
class Widget:
    """A widget with the ids of all its tags and dongles."""
    id: int
    name: str
    tag_ids: Tuple[int, ...] = ()
    dongle_ids: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tag_ids": list(self.tag_ids),
            "dongle_ids": list(self.dongle_ids),
        }


@dataclass(frozen=True)
class WidgetDetail:
    """A widget with tag and dongle ids resolved into full records."""
    id: int
    name: str
    tags: Tuple[Tag, ...] = ()
    dongles: Tuple[Dongle, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tags": [asdict(t) for t in self.tags],
            "dongles": [asdict(d) for d in self.dongles],
        }


@dataclass(frozen=True)
class WidgetLookup:
    """
    Result-or-error value for a widget lookup.

    ``error is None`` means success, even when ``widgets`` is empty.
    ``error`` is a message safe to show to callers.
    """
    widgets: Tuple[Any, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
