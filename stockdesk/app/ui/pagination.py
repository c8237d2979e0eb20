from __future__ import annotations

from dataclasses import dataclass

WINDOW_FULL_THRESHOLD = 7
WINDOW_EDGE_SIZE = 5


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 12


def total_pages(total_items: int, page_size: int) -> int:
    """Never less than one, so an empty set still renders page 1 of 1."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return max(1, -(-total_items // page_size))


def clamp_page(state: PaginationState, pages: int) -> PaginationState:
    state.page = min(max(1, state.page), max(1, pages))
    return state


def next_page(state: PaginationState, pages: int) -> PaginationState:
    if state.page < pages:
        state.page += 1
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(1, state.page - 1)
    return state


def goto_page(state: PaginationState, page: int, pages: int) -> PaginationState:
    if 1 <= page <= pages:
        state.page = page
    return state


def page_window(current: int, pages: int) -> list[int]:
    if pages <= WINDOW_FULL_THRESHOLD:
        return list(range(1, pages + 1))
    if current <= 3:
        return list(range(1, WINDOW_EDGE_SIZE + 1))
    if current >= pages - 2:
        return list(range(pages - WINDOW_EDGE_SIZE + 1, pages + 1))
    return [current - 1, current, current + 1]
