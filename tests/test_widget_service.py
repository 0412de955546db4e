"""Widget lookups against the seeded SQLite catalog."""

from unittest.mock import patch

import pytest

from tests.conftest import PAGED_WIDGET_IDS
from widget_finder.core.exceptions import DatabaseConnectionError, QueryError
from widget_finder.services.widgets.records import Dongle, Tag, Widget, WidgetDetail
from widget_finder.services.widgets.widget_service import (
    LOOKUP_FAILED_MESSAGE,
    WidgetQueryService,
)


def test_find_widgets_with_tag_example(service):
    widgets = service.find_widgets_with_tag("tag5", 0, 20)

    assert widgets == [
        Widget(id=3, name="Widget 3", tag_ids=(2, 5), dongle_ids=(9,)),
        Widget(id=7, name="Widget 7", tag_ids=(5,), dongle_ids=()),
    ]


def test_every_widget_carries_the_filter_tag(service):
    for tag, tag_id in [("tag1", 1), ("tag2", 2), ("tag5", 5), ("tag6", 6)]:
        widgets = service.find_widgets_with_tag(tag, 0, 100)
        assert widgets
        assert all(tag_id in w.tag_ids for w in widgets)


def test_deleted_widgets_never_returned(service):
    for tag in ("tag1", "tag2", "tag3", "tag5", "tag6"):
        ids = [w.id for w in service.find_widgets_with_tag(tag, 0, 100)]
        assert 4 not in ids


def test_untagged_widget_never_returned(service):
    for tag in ("tag1", "tag2", "tag3", "tag5", "tag6"):
        ids = [w.id for w in service.find_widgets_with_tag(tag, 0, 100)]
        assert 8 not in ids


def test_id_lists_strictly_ascending(service):
    for tag in ("tag1", "tag2", "tag5", "tag6"):
        for w in service.find_widgets_with_tag(tag, 0, 100):
            assert all(a < b for a, b in zip(w.tag_ids, w.tag_ids[1:]))
            assert all(a < b for a, b in zip(w.dongle_ids, w.dongle_ids[1:]))


def test_three_tags_two_dongles(service):
    widgets = service.find_widgets_with_tag("tag3", 0, 20)

    assert widgets == [
        Widget(id=1, name="Widget 1", tag_ids=(1, 2, 3), dongle_ids=(10, 11)),
    ]


def test_single_tag_without_dongles_has_empty_list(service):
    widget_7 = next(w for w in service.find_widgets_with_tag("tag5", 0, 20) if w.id == 7)

    assert widget_7.dongle_ids == ()


def test_results_ordered_by_widget_id(service):
    ids = [w.id for w in service.find_widgets_with_tag("tag2", 0, 20)]

    assert ids == [1, 3]


def test_limit_caps_result_size(service):
    assert len(service.find_widgets_with_tag("tag6", 0, 4)) == 4
    assert service.find_widgets_with_tag("tag6", 0, 0) == []


def test_pages_continue_without_gap_or_duplicate(service):
    collected = []
    offset, limit = 0, 4
    while True:
        page = service.find_widgets_with_tag("tag6", offset, limit)
        assert len(page) <= limit
        if not page:
            break
        collected.extend(w.id for w in page)
        offset += limit

    assert collected == PAGED_WIDGET_IDS


def test_offset_past_the_end_is_empty(service):
    assert service.find_widgets_with_tag("tag6", 1000, 10) == []


def test_unknown_tag_is_empty(service):
    assert service.find_widgets_with_tag("no-such-tag", 0, 10) == []


def test_pagination_arguments_are_coerced(service):
    widgets = service.find_widgets_with_tag("tag6", "2", 3.9)

    assert [w.id for w in widgets] == PAGED_WIDGET_IDS[2:5]
    assert service.find_widgets_with_tag("tag6", "abc", "abc") == []
    assert len(service.find_widgets_with_tag("tag6", -5, "2")) == 2


def test_oversized_pagination_arguments_are_clamped(service):
    assert service.find_widgets_with_tag("tag6", 2**64, 20) == []
    assert service.find_widgets_with_tag("tag6", "9" * 400, 20) == []
    assert [w.id for w in service.find_widgets_with_tag("tag5", 0, 2**64)] == [3, 7]


def test_lookup_oversized_offset_is_empty_success(service):
    lookup = service.lookup_widgets_with_tag("tag5", "9" * 400, 20)

    assert lookup.ok
    assert lookup.widgets == ()


def test_tag_value_is_bound_not_interpolated(service):
    assert service.find_widgets_with_tag("tag5' OR '1'='1", 0, 100) == []
    assert service.find_widgets_with_tag('tag5" OR 1=1 --', 0, 100) == []


def test_find_widget_details_with_tag(service):
    details = service.find_widget_details_with_tag("tag5", 0, 20)

    assert details == [
        WidgetDetail(
            id=3,
            name="Widget 3",
            tags=(Tag(id=2, tag="tag2"), Tag(id=5, tag="tag5")),
            dongles=(Dongle(id=9),),
        ),
        WidgetDetail(id=7, name="Widget 7", tags=(Tag(id=5, tag="tag5"),), dongles=()),
    ]


def test_find_widget_details_empty_page(service):
    assert service.find_widget_details_with_tag("no-such-tag", 0, 10) == []


def test_connection_failure_raises_typed_error(broken_url):
    service = WidgetQueryService(url=broken_url)

    with pytest.raises(DatabaseConnectionError):
        service.find_widgets_with_tag("tag5", 0, 20)


def test_connection_failure_runs_no_query(broken_url):
    service = WidgetQueryService(url=broken_url)

    with patch("widget_finder.core.database.DatabaseConnection.execute") as mock_execute:
        with pytest.raises(DatabaseConnectionError):
            service.find_widgets_with_tag("tag5", 0, 20)

    mock_execute.assert_not_called()


def test_lookup_success(service):
    lookup = service.lookup_widgets_with_tag("tag5", 0, 20)

    assert lookup.ok
    assert [w.id for w in lookup.widgets] == [3, 7]


def test_lookup_no_widgets_is_success(service):
    lookup = service.lookup_widgets_with_tag("no-such-tag", 0, 20)

    assert lookup.ok
    assert lookup.widgets == ()


def test_lookup_expand_returns_details(service):
    lookup = service.lookup_widgets_with_tag("tag3", 0, 20, expand=True)

    assert lookup.ok
    assert isinstance(lookup.widgets[0], WidgetDetail)
    assert [d.id for d in lookup.widgets[0].dongles] == [10, 11]


def test_lookup_connection_failure_is_error_value(broken_url):
    lookup = WidgetQueryService(url=broken_url).lookup_widgets_with_tag("tag5", 0, 20)

    assert not lookup.ok
    assert lookup.widgets == ()
    assert lookup.error == LOOKUP_FAILED_MESSAGE
    assert "sqlite" not in lookup.error


def test_lookup_query_failure_is_error_value(service):
    with patch(
        "widget_finder.core.database.DatabaseConnection.execute",
        side_effect=QueryError("Error executing query"),
    ):
        lookup = service.lookup_widgets_with_tag("tag5", 0, 20)

    assert not lookup.ok
    assert lookup.error == LOOKUP_FAILED_MESSAGE


def test_ping(service, broken_url):
    assert service.ping() is True
    assert WidgetQueryService(url=broken_url).ping() is False


def test_service_requires_credentials_or_url():
    with pytest.raises(ValueError):
        WidgetQueryService()
