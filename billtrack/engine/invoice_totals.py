from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict

from billtrack.errors import InvalidTaxRate
from billtrack.models.money import Money, to_decimal

_HUNDRED = Decimal(100)


class InvoiceTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Money
    tax_amount: Money
    total: Money


def parse_tax_rate(rate: Any) -> Decimal:
    if rate is None or rate == "":
        return Decimal(0)
    try:
        r = to_decimal(rate)
    except ValueError as e:
        raise InvalidTaxRate(str(e)) from None
    if r < 0 or r > _HUNDRED:
        raise InvalidTaxRate(f"tax rate must be within [0, 100], got {rate!r}")
    return r


def totals(items: Iterable[Any], tax_rate_percent: Any = 0) -> InvoiceTotals:
    """
    Seule source des montants d'une facture.
    - subtotal = somme exacte des `amount` des lignes (dans l'ordre donné)
    - tax_amount = subtotal × taux / 100, arrondi au centime (half-even)
    - total = subtotal + tax_amount
    Une facture sans ligne est un brouillon valide (subtotal = 0).
    """
    rate = parse_tax_rate(tax_rate_percent)
    subtotal = Money.total(it.amount for it in items)
    tax_amount = subtotal * (rate / _HUNDRED)
    return InvoiceTotals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)
