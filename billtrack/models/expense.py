from __future__ import annotations
import datetime as dt
from pydantic import field_validator
from typing import Optional
from billtrack.errors import InvalidAmount
from .common import Record, TimeStamped
from .money import Money

class Expense(Record, TimeStamped):
    amount: Money
    description: Optional[str] = None
    date: dt.date
    category: Optional[str] = None
    invoice_document_id: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def _non_negative(cls, v: Money) -> Money:
        if v.is_negative():
            raise InvalidAmount(f"expense amount must be >= 0, got {v}")
        return v
