from __future__ import annotations

from typing import Any, List, Sized

from pydantic import BaseModel, ConfigDict

from billtrack.engine import ledger, timeseries
from billtrack.engine.timeseries import DailyRevenue, MonthlyRevenue, StatusShare
from billtrack.models.money import Money


class DashboardSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    client_count: int
    paid_total: Money
    outstanding_total: Money
    document_count: int
    monthly_revenue: List[MonthlyRevenue]
    daily_timeline: List[DailyRevenue]
    status_distribution: List[StatusShare]


def build_summary(
    clients: Sized,
    payments: Any,
    documents: Sized,
    *,
    monthly_window: int = timeseries.MONTHLY_WINDOW,
    daily_window: int = timeseries.DAILY_WINDOW,
) -> DashboardSummary:
    """
    Recalcule tout à partir de l'instantané fourni (aucun cache).
    `payments` est lu plusieurs fois: il est matérialisé en liste.
    """
    payments = list(payments)
    totals = ledger.summarize(payments)
    return DashboardSummary(
        client_count=len(clients),
        paid_total=totals.paid_total,
        outstanding_total=totals.outstanding_total,
        document_count=len(documents),
        monthly_revenue=timeseries.monthly_revenue(payments, window=monthly_window),
        daily_timeline=timeseries.daily_timeline(payments, window=daily_window),
        status_distribution=timeseries.status_distribution(payments),
    )
