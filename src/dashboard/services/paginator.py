"""Paginator and page-window helpers.

``paginate`` slices a page out of an already sorted/filtered list and
reports the page count. It does not clamp: an out-of-range page simply
yields an empty slice; the view model is responsible for keeping the
current page inside ``[1, total_pages]``.

``page_window`` computes the bounded set of page-number buttons shown in
the footer, centred on the current page where possible.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from dashboard.config.settings import PAGE_WINDOW_SIZE

__all__ = [
    "PageRange",
    "PageSlice",
    "clamp_page",
    "page_range",
    "page_window",
    "paginate",
    "total_pages",
]

T = TypeVar("T")


@dataclass(frozen=True)
class PageSlice(Generic[T]):
    visible: List[T]
    total_pages: int


@dataclass(frozen=True)
class PageRange:
    """1-based bounds of the visible rows within the filtered list."""

    first: int
    last: int
    total: int

    def as_text(self) -> str:
        return f"Showing {self.first} to {self.last} of {self.total} entries"


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def paginate(records: Sequence[T], page: int, page_size: int) -> PageSlice[T]:
    start = (page - 1) * page_size
    visible = list(records[start : start + page_size]) if start >= 0 else []
    return PageSlice(visible=visible, total_pages=total_pages(len(records), page_size))


def page_window(current: int, pages: int, size: int = PAGE_WINDOW_SIZE) -> List[int]:
    """Page numbers to expose as navigation buttons (at most ``size``).

    With the default size of 5:
      - 5 pages or fewer: all pages
      - current in the first three: 1..5
      - current in the last three: pages-4..pages
      - otherwise: current-2..current+2
    """
    if pages <= size:
        return list(range(1, pages + 1))
    half = size // 2
    if current <= half + 1:
        start = 1
    elif current >= pages - half:
        start = pages - size + 1
    else:
        start = current - half
    return list(range(start, start + size))


def page_range(page: int, page_size: int, count: int) -> PageRange:
    if count <= 0:
        return PageRange(first=0, last=0, total=0)
    first = (page - 1) * page_size + 1
    last = min(page * page_size, count)
    return PageRange(first=min(first, count), last=last, total=count)
