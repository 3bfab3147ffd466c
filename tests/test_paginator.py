import pytest

from dashboard.services.paginator import (
    clamp_page,
    page_range,
    page_window,
    paginate,
    total_pages,
)


def test_total_pages_minimum_one():
    assert total_pages(0, 10) == 1
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2


def test_paginate_slices_and_out_of_range():
    rows = list(range(23))
    first = paginate(rows, 1, 10)
    assert first.visible == list(range(10))
    assert first.total_pages == 3
    assert paginate(rows, 3, 10).visible == [20, 21, 22]
    assert paginate(rows, 4, 10).visible == []
    assert paginate([], 1, 10).visible == []


def test_pages_cover_collection_exactly_once():
    rows = list(range(47))
    pages = paginate(rows, 1, 7).total_pages
    union = []
    for p in range(1, pages + 1):
        union.extend(paginate(rows, p, 7).visible)
    assert union == rows


@pytest.mark.parametrize(
    "current,pages,expected",
    [
        (1, 10, [1, 2, 3, 4, 5]),
        (10, 10, [6, 7, 8, 9, 10]),
        (5, 10, [3, 4, 5, 6, 7]),
        (3, 10, [1, 2, 3, 4, 5]),
        (8, 10, [6, 7, 8, 9, 10]),
        (4, 10, [2, 3, 4, 5, 6]),
        (1, 3, [1, 2, 3]),
        (3, 3, [1, 2, 3]),
        (1, 1, [1]),
        (2, 5, [1, 2, 3, 4, 5]),
    ],
)
def test_page_window(current, pages, expected):
    assert page_window(current, pages) == expected


def test_clamp_page():
    assert clamp_page(0, 5) == 1
    assert clamp_page(9, 5) == 5
    assert clamp_page(3, 0) == 1


def test_page_range_text():
    assert page_range(2, 10, 25).as_text() == "Showing 11 to 20 of 25 entries"
    assert page_range(3, 10, 25).as_text() == "Showing 21 to 25 of 25 entries"
    assert page_range(1, 10, 0).as_text() == "Showing 0 to 0 of 0 entries"
