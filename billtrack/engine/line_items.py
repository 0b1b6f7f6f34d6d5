from __future__ import annotations

from decimal import Decimal
from typing import Any

from billtrack.errors import InvalidAmount, InvalidPrice, InvalidQuantity
from billtrack.models.money import Money, to_decimal


def parse_quantity(qty: Any) -> Decimal:
    try:
        q = to_decimal(qty)
    except ValueError as e:
        raise InvalidQuantity(str(e)) from None
    if q <= 0:
        raise InvalidQuantity(f"quantity must be > 0, got {qty!r}")
    return q


def parse_unit_price(price: Any) -> Money:
    try:
        p = Money.of(price)
    except InvalidAmount as e:
        raise InvalidPrice(str(e)) from None
    if p.is_negative():
        raise InvalidPrice(f"unit price must be >= 0, got {p}")
    return p


def amount(quantity: Any, unit_price: Any) -> Money:
    """Montant d'une ligne = quantité × prix unitaire, arrondi au centime (half-even)."""
    return parse_unit_price(unit_price) * parse_quantity(quantity)
