from __future__ import annotations

from datetime import date
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict

from billtrack.engine.timeseries import as_date
from billtrack.models.money import ZERO, Money


class ExpenseSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: Money = ZERO
    month_total: Money = ZERO


def summarize_expenses(expenses: Iterable[Any], today: date) -> ExpenseSummary:
    """Total des dépenses et total du mois calendaire de `today`."""
    total = 0
    month = 0
    for e in expenses:
        cents = Money.of(e.amount).cents
        total += cents
        d = as_date(e.date)
        if d.year == today.year and d.month == today.month:
            month += cents
    return ExpenseSummary(total=Money.from_cents(total), month_total=Money.from_cents(month))
