from decimal import Decimal

from parts_quote_tool.selection import PriceOverrideMap, SelectionSet


def test_add_is_idempotent_and_ordered():
    sel = SelectionSet()
    sel.add("B")
    sel.add("A")
    sel.add("B")
    assert sel.to_sequence() == ["B", "A"]
    assert len(sel) == 2


def test_remove_is_idempotent():
    sel = SelectionSet()
    sel.add("A")
    sel.remove("A")
    sel.remove("A")
    sel.remove("never-added")
    assert sel.to_sequence() == []
    assert not sel.contains("A")


def test_add_does_not_check_catalog():
    sel = SelectionSet()
    sel.add("anything")
    assert "anything" in sel


def test_override_set_coerces_input():
    ovr = PriceOverrideMap()
    entry = ovr.set("P1", "-3", "12.345")
    assert entry.quantity == 0
    assert entry.final_price == Decimal("12.35")

    entry = ovr.set("P1", "abc", "junk")
    assert entry.quantity == 0
    assert entry.final_price == Decimal("0.00")

    assert ovr.set("P1", 2, "-5").final_price == 0


def test_override_upsert_and_clear():
    ovr = PriceOverrideMap()
    ovr.set("P1", 2, "20")
    ovr.set("P1", 3, "30")
    assert ovr.get("P1").quantity == 3
    assert len(ovr) == 1

    ovr.clear("P1")
    ovr.clear("P1")
    assert ovr.get("P1") is None
    assert "P1" not in ovr
