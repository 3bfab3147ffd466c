from collections import namedtuple
from dataclasses import dataclass

import pytest

from dashboard.services.columns import (
    Align,
    ColumnDescriptor,
    ColumnRegistry,
    InvalidTableConfigError,
    field_value,
    record_fields,
    status_tone,
)


@dataclass
class Row:
    name: str
    tags: list


class Plain:
    def __init__(self):
        self.title = "x"
        self._hidden = 1


def test_field_value_mapping_and_object():
    assert field_value({"a": 1}, "a") == 1
    assert field_value({"a": 1}, "missing") is None
    assert field_value(Row("n", []), "name") == "n"
    assert field_value(Row("n", []), "missing") is None


def test_record_fields_shapes():
    assert record_fields({"a": 1, "b": None}) == [("a", 1), ("b", None)]
    assert record_fields(Row("n", [1])) == [("name", "n"), ("tags", [1])]
    assert record_fields(Plain()) == [("title", "x")]
    assert record_fields(42) == []


def test_record_fields_namedtuple_and_slots():
    Pair = namedtuple("Pair", "left right")
    assert record_fields(Pair(1, "b")) == [("left", 1), ("right", "b")]

    class Base:
        __slots__ = ("code",)

    class Item(Base):
        __slots__ = ("label", "_secret")

    item = Item()
    item.code = 7
    item.label = "box"
    assert record_fields(item) == [("code", 7), ("label", "box")]
    assert record_fields(Item()) == []


def test_registry_rejects_duplicate_and_empty_keys():
    with pytest.raises(InvalidTableConfigError):
        ColumnRegistry([ColumnDescriptor("a", "A"), ColumnDescriptor("a", "Again")])
    with pytest.raises(InvalidTableConfigError):
        ColumnRegistry([ColumnDescriptor("", "Blank")])


def test_registry_lookup():
    reg = ColumnRegistry(
        [ColumnDescriptor("name", "Name", sortable=True), ColumnDescriptor("notes", "Notes")]
    )
    assert reg.keys() == ["name", "notes"]
    assert reg.labels() == ["Name", "Notes"]
    assert reg.is_sortable("name")
    assert not reg.is_sortable("notes")
    assert not reg.is_sortable("unknown")
    assert "name" in reg and len(reg) == 2
    assert reg[1].key == "notes"
    assert ColumnRegistry.coerce(reg) is reg


def test_display_prefers_render_hook():
    col = ColumnDescriptor("price", "Price", align=Align.RIGHT, render=lambda v, r: f"${v}")
    assert col.display({"price": 5}) == "$5"
    plain = ColumnDescriptor("price", "Price")
    assert plain.display_text({"price": 5}) == "5"
    assert plain.display_text({}) == ""


def test_status_tone_keywords():
    assert status_tone("Active") == "success"
    assert status_tone("Inactive") == "neutral"
    assert status_tone("pending review") == "warning"
    assert status_tone("Payment failed") == "danger"
    assert status_tone("archived") == "neutral"
    assert status_tone(None) == "neutral"
    assert ColumnDescriptor("verificationStatus", "Status").is_status
