from __future__ import annotations

from datetime import datetime, timedelta, timezone

from stockdesk.app.application.reactive import Signal
from stockdesk.app.ui.derived_view import DerivedView, apply_view
from stockdesk.app.ui.filters import (
    PRODUCT_SEARCH_FIELDS,
    clean_filters,
    date_range_filter,
    day_bounds,
    equals_filter,
    search_filter,
)
from tests.fakes import make_product, make_transaction


def _products(count: int) -> list:
    return [make_product(product_id=f"p{i}", sku=f"SKU-{i}", name=f"Item {i}") for i in range(1, count + 1)]


def _by_search(filters: dict) -> list:
    return [search_filter(filters.get("search"), PRODUCT_SEARCH_FIELDS), equals_filter("category", filters.get("category"))]


def test_setting_a_filter_resets_page() -> None:
    source = Signal(_products(30))
    view = DerivedView(source, _by_search, page_size=12)
    view.goto_page(3)
    assert view.result.value.page == 3
    view.set_filter("search", "item")
    assert view.result.value.page == 1
    assert view.result.value.total == 30


def test_snapshot_change_clamps_page() -> None:
    source = Signal(_products(30))
    view = DerivedView(source, _by_search, page_size=12)
    view.goto_page(3)
    source.set(_products(5))
    assert view.result.value.page == 1
    assert view.result.value.total_pages == 1
    assert len(view.result.value.rows) == 5


def test_recompute_is_idempotent() -> None:
    source = Signal(_products(15))
    view = DerivedView(source, _by_search, page_size=12, filters={"search": "item 1"})
    first = view.recompute()
    second = view.recompute()
    assert first == second


def test_dispose_stops_following_source() -> None:
    source = Signal(_products(3))
    view = DerivedView(source, _by_search, page_size=12)
    view.dispose()
    source.set(_products(1))
    assert view.result.value.total == 3


def test_search_is_case_insensitive_substring() -> None:
    rows = [make_product(name="Blue Widget"), make_product(product_id="p2", name="Gadget", supplier="Widgetco")]
    predicate = search_filter("  WIDGET ", PRODUCT_SEARCH_FIELDS)
    assert [row.id for row in rows if predicate(row)] == ["p1", "p2"]
    assert search_filter("   ", PRODUCT_SEARCH_FIELDS) is None


def test_all_sentinel_is_not_a_filter() -> None:
    assert equals_filter("category", "all") is None
    assert clean_filters({"category": "all", "search": "", "type": "sale"}) == {"type": "sale"}


def test_end_bound_includes_last_millisecond() -> None:
    lower, upper = day_bounds("2024-01-01", "2024-01-31")
    assert lower == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert upper == datetime(2024, 1, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)

    inside = make_transaction(transaction_id="in", date=upper)
    outside = make_transaction(transaction_id="out", date=upper + timedelta(milliseconds=1))
    before = make_transaction(transaction_id="early", date=lower - timedelta(microseconds=1))
    predicate = date_range_filter("2024-01-01", "2024-01-31", lambda row: row.date)
    assert [row.id for row in (inside, outside, before) if predicate(row)] == ["in"]


def test_single_bound_applies_alone() -> None:
    rows = [
        make_transaction(transaction_id="a", date=datetime(2023, 12, 31, 23, 0, tzinfo=timezone.utc)),
        make_transaction(transaction_id="b", date=datetime(2024, 2, 1, 0, 0, tzinfo=timezone.utc)),
    ]
    from_only = date_range_filter("2024-01-01", None, lambda row: row.date)
    until_only = date_range_filter(None, "2024-01-31", lambda row: row.date)
    assert [row.id for row in rows if from_only(row)] == ["b"]
    assert [row.id for row in rows if until_only(row)] == ["a"]
    assert date_range_filter(None, "", lambda row: row.date) is None


def test_apply_view_filters_then_sorts_then_pages() -> None:
    rows = [
        make_product(product_id="p1", name="b", category="Tools"),
        make_product(product_id="p2", name="a", category="Tools"),
        make_product(product_id="p3", name="c", category="Food"),
    ]
    result = apply_view(
        rows,
        predicates=[equals_filter("category", "Tools")],
        sort_key=lambda row: row.name,
        page=5,
        page_size=1,
    )
    assert result.total == 2
    assert result.page == 2
    assert [row.id for row in result.rows] == ["p1"]
    assert result.has_prev and not result.has_next
