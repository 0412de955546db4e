"""
Catalog Database Models — widgets, tags, dongles and their join tables.

The catalog is owned by another system; this package only reads it.
The mappings document the schema the widget query relies on and let
the test-suite build an equivalent database.

Tables: widget, tag, dongle, widget_tag_map, widget_dongle_map.
"""

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# ── Declarative base for the catalog database ────────────────────
CatalogBase = declarative_base()


class WidgetRow(CatalogBase):
    """Catalog widget; ``deleted`` is a soft-delete flag."""
    __tablename__ = "widget"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class TagRow(CatalogBase):
    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tag: Mapped[str] = mapped_column(String(255), nullable=False)


class DongleRow(CatalogBase):
    __tablename__ = "dongle"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class WidgetTagMap(CatalogBase):
    """Many-to-many: widget ↔ tag."""
    __tablename__ = "widget_tag_map"

    widget_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("widget.id"), primary_key=True
    )
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tag.id"), primary_key=True
    )


class WidgetDongleMap(CatalogBase):
    """Many-to-many: widget ↔ dongle (optional association)."""
    __tablename__ = "widget_dongle_map"

    widget_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("widget.id"), primary_key=True
    )
    dongle_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("dongle.id"), primary_key=True
    )
