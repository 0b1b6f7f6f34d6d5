from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import Any, List, Literal, Optional, Sequence
from decimal import Decimal
from datetime import date
from billtrack.errors import InvalidStatus
from billtrack.engine import line_items
from billtrack.engine import invoice_totals
from billtrack.engine.invoice_totals import InvoiceTotals, parse_tax_rate
from .common import Record, TimeStamped, gen_id
from .money import Money

InvoiceStatus = Literal["draft", "sent", "paid", "cancelled"]
INVOICE_STATUSES: tuple[str, ...] = ("draft", "sent", "paid", "cancelled")


class InvoiceLineItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=gen_id)
    description: str
    quantity: Decimal = Decimal(1)
    unit_price: Money = Money()

    @field_validator("quantity", mode="before")
    @classmethod
    def _positive_qty(cls, v: Any) -> Decimal:
        return line_items.parse_quantity(v)

    @field_validator("unit_price", mode="before")
    @classmethod
    def _non_negative_price(cls, v: Any) -> Money:
        return line_items.parse_unit_price(v)

    @computed_field  # type: ignore[misc]
    @property
    def amount(self) -> Money:
        return line_items.amount(self.quantity, self.unit_price)


class Invoice(Record, TimeStamped):
    client_id: str
    invoice_number: str
    issue_date: date = Field(default_factory=date.today)
    due_date: Optional[date] = None
    status: InvoiceStatus = "draft"
    tax_rate: Decimal = Decimal(0)
    items: List[InvoiceLineItem] = Field(default_factory=list)
    notes: Optional[str] = None

    @field_validator("invoice_number")
    @classmethod
    def _number_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("invoice number is required")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, v: Any) -> Any:
        if v not in INVOICE_STATUSES:
            raise InvalidStatus(f"invoice status must be one of {INVOICE_STATUSES}, got {v!r}")
        return v

    @field_validator("tax_rate", mode="before")
    @classmethod
    def _rate_in_range(cls, v: Any) -> Decimal:
        return parse_tax_rate(v)

    # ---- montants dérivés: jamais saisis, jamais stockés désynchronisés ----

    @property
    def totals(self) -> InvoiceTotals:
        return invoice_totals.totals(self.items, self.tax_rate)

    @computed_field  # type: ignore[misc]
    @property
    def subtotal(self) -> Money:
        return self.totals.subtotal

    @computed_field  # type: ignore[misc]
    @property
    def tax_amount(self) -> Money:
        return self.totals.tax_amount

    @computed_field  # type: ignore[misc]
    @property
    def total(self) -> Money:
        return self.totals.total

    def with_items(self, items: Sequence[InvoiceLineItem]) -> "Invoice":
        """Remplace tout le jeu de lignes (les anciennes sont abandonnées)."""
        return self.model_copy(update={"items": list(items)})

    def with_tax_rate(self, rate: Any) -> "Invoice":
        return self.model_copy(update={"tax_rate": parse_tax_rate(rate)})
