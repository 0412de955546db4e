import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from widget_finder.models.catalog_models import (
    CatalogBase,
    DongleRow,
    TagRow,
    WidgetDongleMap,
    WidgetRow,
    WidgetTagMap,
)
from widget_finder.services.widgets.widget_service import WidgetQueryService

# tag6 is carried by a run of widgets used for pagination tests
PAGED_WIDGET_IDS = list(range(100, 115))


def _seed(session: Session) -> None:
    session.add_all([
        TagRow(id=1, tag="tag1"),
        TagRow(id=2, tag="tag2"),
        TagRow(id=3, tag="tag3"),
        TagRow(id=5, tag="tag5"),
        TagRow(id=6, tag="tag6"),
        DongleRow(id=9),
        DongleRow(id=10),
        DongleRow(id=11),
    ])
    # Inserted out of id order on purpose
    session.add_all([
        WidgetRow(id=7, name="Widget 7", deleted=False),
        WidgetRow(id=3, name="Widget 3", deleted=False),
        WidgetRow(id=1, name="Widget 1", deleted=False),
        WidgetRow(id=4, name="Deleted widget", deleted=True),
        WidgetRow(id=8, name="Untagged widget", deleted=False),
    ])
    session.add_all([
        WidgetRow(id=i, name=f"Paged {i}", deleted=False) for i in PAGED_WIDGET_IDS
    ])
    session.flush()

    session.add_all([
        WidgetTagMap(widget_id=7, tag_id=5),
        WidgetTagMap(widget_id=3, tag_id=5),
        WidgetTagMap(widget_id=3, tag_id=2),
        WidgetTagMap(widget_id=1, tag_id=3),
        WidgetTagMap(widget_id=1, tag_id=1),
        WidgetTagMap(widget_id=1, tag_id=2),
        WidgetTagMap(widget_id=4, tag_id=5),
        WidgetDongleMap(widget_id=3, dongle_id=9),
        WidgetDongleMap(widget_id=1, dongle_id=11),
        WidgetDongleMap(widget_id=1, dongle_id=10),
        WidgetDongleMap(widget_id=4, dongle_id=10),
        WidgetDongleMap(widget_id=8, dongle_id=9),
    ])
    for i in PAGED_WIDGET_IDS:
        session.add(WidgetTagMap(widget_id=i, tag_id=6))
        if i % 2:
            session.add(WidgetTagMap(widget_id=i, tag_id=1))
        if i % 3 == 0:
            session.add(WidgetDongleMap(widget_id=i, dongle_id=9))
            session.add(WidgetDongleMap(widget_id=i, dongle_id=11))


@pytest.fixture(scope="session")
def catalog_url(tmp_path_factory):
    """SQLite copy of the catalog schema, seeded once per session."""
    path = tmp_path_factory.mktemp("db") / "catalog_test.db"
    url = f"sqlite:///{path}"

    engine = create_engine(url)
    try:
        CatalogBase.metadata.create_all(engine)
        with Session(engine) as session:
            _seed(session)
            session.commit()
    finally:
        engine.dispose()
    return url


@pytest.fixture()
def service(catalog_url):
    return WidgetQueryService(url=catalog_url)


@pytest.fixture()
def broken_url(tmp_path):
    """A SQLite URL whose directory does not exist, so connecting fails."""
    return f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}"
