import csv
import io
from decimal import Decimal

import pytest

from parts_quote_tool.session import (
    AddPart,
    Checkout,
    QuoteSession,
    RemovePart,
    Reset,
    Search,
    SetDiscount,
    SetQuantity,
)


def _summary(rows):
    return [(r.part_no, r.quantity, r.value("Price")) for r in rows]


def test_not_ready_until_loaded(catalog):
    s = QuoteSession()
    assert not s.ready
    assert s.dispatch(Search("P")) == []
    assert s.dispatch(AddPart("P1")) == []
    s.load(catalog)
    assert s.ready
    assert s.dispatch(Search("P")) == ["P1", "P2", "p10"]


def test_search_skips_selected_parts(session):
    session.dispatch(AddPart("P1"))
    assert session.dispatch(Search("p")) == ["P2", "p10"]
    assert session.dispatch(Search("")) == []


def test_add_unknown_part_is_ignored(session):
    assert session.dispatch(AddPart("NOPE")) == []
    assert session.selection.to_sequence() == []


def test_quantity_edit_and_checkout(session):
    session.dispatch(AddPart("P1"))
    session.dispatch(AddPart("P2"))
    rows = session.dispatch(SetQuantity("P1", "3"))
    assert _summary(rows) == [("P1", 3, "30.00"), ("P2", 1, "5.00")]

    quote = session.dispatch(Checkout("10"))
    assert quote.subtotal == Decimal("35.00")
    assert quote.final_total == Decimal("31.50")

    quote = session.dispatch(SetDiscount("0"))
    assert quote.final_total == Decimal("35.00")


def test_junk_quantity_prices_at_zero(session):
    session.dispatch(AddPart("P1"))
    rows = session.dispatch(SetQuantity("P1", "xyz"))
    assert _summary(rows) == [("P1", 0, "0.00")]


def test_quantity_for_unselected_part_is_ignored(session):
    session.dispatch(SetQuantity("P2", "4"))
    assert session.overrides.get("P2") is None


def test_remove_clears_override(session):
    session.dispatch(AddPart("P1"))
    session.dispatch(SetQuantity("P1", "7"))
    session.dispatch(RemovePart("P1"))
    assert session.overrides.get("P1") is None

    rows = session.dispatch(AddPart("P1"))
    assert _summary(rows) == [("P1", 1, "10.00")]


def test_remove_unselected_part_is_noop(session):
    session.dispatch(AddPart("P2"))
    assert _summary(session.dispatch(RemovePart("P1"))) == [("P2", 1, "5.00")]


def test_listeners_see_every_change(session):
    seen = []
    session.subscribe(lambda rows: seen.append(_summary(rows)))
    session.dispatch(AddPart("P2"))
    session.dispatch(SetQuantity("P2", 2))
    session.dispatch(Reset())
    assert seen == [[("P2", 1, "5.00")], [("P2", 2, "10.00")], []]
    assert len(session.overrides) == 0


def test_export_round_trip(session):
    session.dispatch(AddPart("P1"))
    session.dispatch(AddPart("P2"))
    session.dispatch(SetQuantity("P1", 3))
    session.dispatch(Checkout(10))

    name, text = session.export("my quote")
    assert name == "my_quote.csv"

    lines = text.split("\r\n")
    reader = csv.DictReader(io.StringIO("\r\n".join(lines[:3]), newline=""))
    assert [(r["Part No"], r["Quantity"], r["Price"]) for r in reader] == [
        ("P1", "3", "30.00"),
        ("P2", "1", "5.00"),
    ]
    assert lines[5] == '"","","Final Total","31.50"'


def test_export_without_checkout_uses_current_rows(session):
    session.dispatch(AddPart("P2"))
    name, text = session.export("", include_summary=False)
    assert name == "quantities.csv"
    assert text == 'Part No,CUBIX LP,Quantity,Price\r\n"P2","5.00","1","5.00"\r\n'


def test_unknown_action_is_rejected(session):
    with pytest.raises(TypeError):
        session.dispatch("add P1")


def test_export_after_checkout_drops_removed_part(session):
    session.dispatch(AddPart("P1"))
    session.dispatch(AddPart("P2"))
    session.dispatch(Checkout(10))
    session.dispatch(RemovePart("P1"))

    _, text = session.export("quote")
    assert '"P1"' not in text
    assert '"P2","5.00","1","5.00"' in text
    assert '"","","Final Total","4.50"' in text


def test_discount_after_quantity_edit_uses_new_rows(session):
    session.dispatch(AddPart("P1"))
    session.dispatch(Checkout(0))
    session.dispatch(SetQuantity("P1", 5))

    assert session.current_snapshot.subtotal == Decimal("50.00")
    quote = session.dispatch(SetDiscount("0"))
    assert quote.subtotal == Decimal("50.00")
    assert _summary(quote.rows) == [("P1", 5, "50.00")]
