from __future__ import annotations
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Any, Literal, Optional
from datetime import date
from billtrack.errors import InvalidAmount, InvalidStatus
from .common import Record, TimeStamped
from .money import Money

PaymentStatus = Literal["pending", "overdue", "paid"]
PAYMENT_STATUSES: tuple[str, ...] = ("paid", "pending", "overdue")
Frequency = Literal["weekly", "biweekly", "monthly", "quarterly", "yearly"]

# colonnes "à plat" des anciennes lignes -> champs de Recurrence
_FLAT_RECURRENCE_KEYS = {
    "is_recurring": "is_recurring",
    "recurrence_frequency": "frequency",
    "recurrence_end_date": "end_date",
}


class Recurrence(BaseModel):
    """Métadonnée seulement: aucune échéance future n'est générée."""
    model_config = ConfigDict(frozen=True)

    is_recurring: bool = False
    frequency: Optional[Frequency] = None
    end_date: Optional[date] = None


class Payment(Record, TimeStamped):
    client_id: str
    amount: Money
    status: PaymentStatus = "pending"
    description: Optional[str] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    recurrence: Recurrence = Recurrence()
    invoice_document_id: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_recurrence(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if not any(k in data for k in _FLAT_RECURRENCE_KEYS):
            return data
        data = dict(data)
        flat = {f: data.pop(k) for k, f in _FLAT_RECURRENCE_KEYS.items() if k in data}
        # le champ imbriqué, s'il existe, fait foi sur les colonnes héritées
        if data.get("recurrence") is None:
            data["recurrence"] = {f: v for f, v in flat.items() if v is not None}
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _known_status(cls, v: Any) -> Any:
        if v not in PAYMENT_STATUSES:
            raise InvalidStatus(f"payment status must be one of {PAYMENT_STATUSES}, got {v!r}")
        return v

    @field_validator("amount")
    @classmethod
    def _non_negative(cls, v: Money) -> Money:
        if v.is_negative():
            raise InvalidAmount(f"payment amount must be >= 0, got {v}")
        return v

    @model_validator(mode="after")
    def _paid_date_only_when_paid(self) -> "Payment":
        # paid sans date reste admis (ancienne ligne), l'inverse non
        if self.status != "paid" and self.paid_date is not None:
            self.paid_date = None
        return self
