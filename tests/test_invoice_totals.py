"""Tests for invoice totals and the Invoice model's derived fields."""

from datetime import date

import pytest

from billtrack.engine.invoice_totals import totals
from billtrack.errors import InvalidStatus, InvalidTaxRate
from billtrack.models.invoice import Invoice, InvoiceLineItem
from billtrack.models.money import Money

OWNER = "owner-1"


def _items():
    return [
        InvoiceLineItem(description="A", quantity=2, unit_price="10.00"),
        InvoiceLineItem(description="B", quantity=1, unit_price="5.00"),
    ]


class TestTotals:
    def test_concrete_invoice(self):
        """Items 2×10.00 + 1×5.00 at 10% tax."""
        t = totals(_items(), 10)
        assert t.subtotal == Money("25.00")
        assert t.tax_amount == Money("2.50")
        assert t.total == Money("27.50")

    @pytest.mark.parametrize("rate", [0, "7.25", 19.6, 100])
    def test_total_is_subtotal_plus_tax(self, rate):
        t = totals(_items(), rate)
        assert t.total == t.subtotal + t.tax_amount

    def test_tax_rounds_half_even(self):
        items = [InvoiceLineItem(description="x", quantity=1, unit_price="0.25")]
        assert totals(items, 10).tax_amount == Money("0.02")

    @pytest.mark.parametrize("rate", [0, 20, 100])
    def test_zero_items_is_valid_draft(self, rate):
        t = totals([], rate)
        assert t.subtotal == Money("0")
        assert t.total == Money("0")

    @pytest.mark.parametrize("rate", [-1, "100.01", 150, "abc"])
    def test_rate_out_of_range(self, rate):
        with pytest.raises(InvalidTaxRate):
            totals(_items(), rate)

    def test_order_does_not_change_sum(self):
        items = _items()
        assert totals(items, 5) == totals(list(reversed(items)), 5)

    def test_idempotent(self):
        items = _items()
        assert totals(items, 8.5) == totals(items, 8.5)


class TestInvoiceModel:
    def _invoice(self, **kw):
        return Invoice(owner_id=OWNER, client_id="c1", invoice_number="INV-001",
                       issue_date=date(2024, 3, 1), items=_items(), **kw)

    def test_derived_fields(self):
        inv = self._invoice(tax_rate=10)
        assert (inv.subtotal, inv.tax_amount, inv.total) == (
            Money("25.00"), Money("2.50"), Money("27.50"))

    def test_stored_totals_are_ignored(self):
        raw = self._invoice(tax_rate=10).model_dump(mode="json")
        raw.update(subtotal="1.00", tax_amount="1.00", total="1.00")
        inv = Invoice.model_validate(raw)
        assert inv.total == Money("27.50")

    def test_replacing_items_recomputes(self):
        inv = self._invoice(tax_rate=10)
        new = inv.with_items([InvoiceLineItem(description="C", quantity=4, unit_price="2.50")])
        assert [i.description for i in new.items] == ["C"]
        assert new.subtotal == Money("10.00")
        assert new.total == Money("11.00")
        # l'original n'est pas modifié
        assert inv.total == Money("27.50")

    def test_changing_tax_rate_recomputes(self):
        inv = self._invoice().with_tax_rate(20)
        assert inv.tax_amount == Money("5.00")
        with pytest.raises(InvalidTaxRate):
            inv.with_tax_rate(101)

    def test_invalid_status(self):
        with pytest.raises(InvalidStatus):
            self._invoice(status="archived")

    def test_invalid_tax_rate_on_construction(self):
        with pytest.raises(InvalidTaxRate):
            self._invoice(tax_rate=-5)
