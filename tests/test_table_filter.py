from dataclasses import dataclass
from typing import NamedTuple

from dashboard.services.table_filter import filter_records, normalize_term, scalar_text


@dataclass
class Order:
    id: int
    customer: str
    total: float
    paid: bool
    items: list
    meta: dict


class City(NamedTuple):
    name: str
    country: str


class Place:
    __slots__ = ("name", "_cache")

    def __init__(self, name):
        self.name = name
        self._cache = "hidden"


class Venue(Place):
    __slots__ = "capacity"

    def __init__(self, name, capacity):
        super().__init__(name)
        self.capacity = capacity


ROWS = [
    {"name": "Alice", "city": "Berlin", "age": 31, "tags": ["vip"]},
    {"name": "Bob", "city": None, "age": 42, "address": {"city": "Paris"}},
    {"name": "carol", "city": "Paris", "age": 27},
]


def test_blank_term_returns_everything():
    assert filter_records(ROWS, "") == ROWS
    assert filter_records(ROWS, "   ") == ROWS
    assert filter_records(ROWS, None) == ROWS


def test_case_insensitive_substring():
    assert [r["name"] for r in filter_records(ROWS, "PAR")] == ["carol"]
    assert [r["name"] for r in filter_records(ROWS, "ALI")] == ["Alice"]


def test_nested_values_are_skipped():
    # "vip" only appears in a list, "Paris" for Bob only in a nested dict
    assert filter_records(ROWS, "vip") == []
    assert [r["name"] for r in filter_records(ROWS, "paris")] == ["carol"]


def test_numbers_and_booleans_match_as_text():
    orders = [
        Order(1, "Ann", 19.5, True, ["x"], {}),
        Order(2, "Ben", 20.0, False, [], {"note": "Ann"}),
    ]
    assert [o.id for o in filter_records(orders, "19.5")] == [1]
    assert [o.id for o in filter_records(orders, "false")] == [2]
    assert [o.id for o in filter_records(orders, "20")] == [2]
    assert [o.id for o in filter_records(orders, "ann")] == [1]


def test_order_preserved_and_monotonic():
    out = filter_records(ROWS, "a")
    assert len(out) <= len(ROWS)
    assert out == [r for r in ROWS if r in out]


def test_helpers():
    assert normalize_term("  ") == ""
    assert normalize_term("MiXed") == "mixed"
    assert scalar_text(True) == "true"
    assert scalar_text(3.0) == "3"
    assert scalar_text(None) is None
    assert scalar_text([1]) is None


def test_namedtuple_and_slotted_records():
    cities = [City("Alice Springs", "Australia"), City("Rome", "Italy")]
    assert filter_records(cities, "alice") == [cities[0]]
    assert filter_records(cities, "ITALY") == [cities[1]]
    venues = [Venue("Arena", 500), Venue("Hall", 80), Place("Club")]
    assert filter_records(venues, "hall") == [venues[1]]
    assert filter_records(venues, "500") == [venues[0]]
    assert filter_records(venues, "club") == [venues[2]]
    assert filter_records(venues, "hidden") == []
