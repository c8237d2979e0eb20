from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

from stockdesk.app.application.reactive import Signal
from stockdesk.app.ui.filters import Predicate
from stockdesk.app.ui.pagination import (
    PaginationState,
    clamp_page,
    goto_page,
    next_page,
    page_window,
    prev_page,
    total_pages,
)

T = TypeVar("T")

PredicateBuilder = Callable[[dict[str, Any]], Sequence[Predicate | None]]


@dataclass(frozen=True)
class PageResult(Generic[T]):
    rows: list[T]
    page: int
    page_size: int
    total: int
    total_pages: int
    window: list[int] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def render(self) -> dict[str, object]:
        return {
            "rows": list(self.rows),
            "page": self.page,
            "page_size": self.page_size,
            "total": self.total,
            "total_pages": self.total_pages,
            "window": list(self.window),
        }


def filter_rows(items: Iterable[T], predicates: Sequence[Predicate | None]) -> list[T]:
    rows = list(items)
    for predicate in predicates:
        if predicate is not None:
            rows = [row for row in rows if predicate(row)]
    return rows


def sort_rows(rows: list[T], sort_key: Callable[[T], Any] | None, descending: bool = False) -> list[T]:
    if sort_key is None:
        return rows
    return sorted(rows, key=sort_key, reverse=descending)


def apply_view(
    items: Iterable[T],
    *,
    predicates: Sequence[Predicate | None] = (),
    sort_key: Callable[[T], Any] | None = None,
    descending: bool = False,
    page: int = 1,
    page_size: int = 10,
) -> PageResult[T]:
    """Filter in the given order, then sort, then slice one page. Pure."""
    rows = sort_rows(filter_rows(items, predicates), sort_key, descending)
    pages = total_pages(len(rows), page_size)
    current = min(max(1, page), pages)
    start = (current - 1) * page_size
    return PageResult(
        rows=rows[start:start + page_size],
        page=current,
        page_size=page_size,
        total=len(rows),
        total_pages=pages,
        window=page_window(current, pages),
    )


class DerivedView(Generic[T]):
    """Live page of a store snapshot.

    Recomputes when the source signal publishes or a parameter changes.
    Setting any filter resets the page to 1; a new snapshot only clamps it.
    """

    def __init__(
        self,
        source: Signal[list[T]],
        build_predicates: PredicateBuilder,
        *,
        page_size: int,
        sort_key: Callable[[T], Any] | None = None,
        descending: bool = False,
        filters: dict[str, Any] | None = None,
    ) -> None:
        self.source = source
        self.build_predicates = build_predicates
        self.sort_key = sort_key
        self.descending = descending
        self.filters: dict[str, Any] = dict(filters or {})
        self.pagination = PaginationState(page=1, page_size=page_size)
        self.result: Signal[PageResult[T]] = Signal(self._compute())
        self._unsubscribe = source.subscribe(self._on_snapshot)

    def filtered(self) -> list[T]:
        return sort_rows(filter_rows(self.source.value, self.build_predicates(self.filters)), self.sort_key, self.descending)

    def set_filter(self, key: str, value: Any) -> None:
        self.filters[key] = value
        self.pagination.page = 1
        self.recompute()

    def set_filters(self, **values: Any) -> None:
        self.filters.update(values)
        self.pagination.page = 1
        self.recompute()

    def goto_page(self, page: int) -> None:
        goto_page(self.pagination, page, self.result.value.total_pages)
        self.recompute()

    def next_page(self) -> None:
        next_page(self.pagination, self.result.value.total_pages)
        self.recompute()

    def prev_page(self) -> None:
        prev_page(self.pagination)
        self.recompute()

    def recompute(self) -> PageResult[T]:
        result = self._compute()
        self.result.set(result)
        return result

    def dispose(self) -> None:
        self._unsubscribe()

    def _on_snapshot(self, _items: list[T]) -> None:
        self.recompute()

    def _compute(self) -> PageResult[T]:
        result = apply_view(
            self.source.value,
            predicates=self.build_predicates(self.filters),
            sort_key=self.sort_key,
            descending=self.descending,
            page=self.pagination.page,
            page_size=self.pagination.page_size,
        )
        clamp_page(self.pagination, result.total_pages)
        return result
