"""
Séries pour les graphiques du tableau de bord.

- monthly_revenue: CA encaissé par mois calendaire, 6 derniers mois présents
- daily_timeline: CA encaissé par jour (libellé "Mar 10"), 30 dernières entrées
- status_distribution: montant total par statut, tous paiements confondus

Les deux premières séries ne retiennent que les paiements `paid` avec une
paid_date; les autres sont exclus (et non comptés à zéro).
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict

from billtrack.engine.payment_status import PAID, validate_status
from billtrack.models.money import Money
from billtrack.models.payment import PAYMENT_STATUSES

MONTHLY_WINDOW = 6
DAILY_WINDOW = 30


class MonthlyRevenue(BaseModel):
    model_config = ConfigDict(frozen=True)

    month_label: str
    year: int
    month: int
    revenue: Money
    payment_count: int


class DailyRevenue(BaseModel):
    model_config = ConfigDict(frozen=True)

    date_label: str
    revenue: Money


class StatusShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    amount: Money


def as_date(val: Any) -> date:
    if isinstance(val, datetime):
        return val.date()
    if isinstance(val, date):
        return val
    return date.fromisoformat(str(val)[:10])


def _paid_with_date(payments: Iterable[Any]) -> Iterator[Tuple[date, int]]:
    for p in payments:
        if p.status != PAID or p.paid_date is None:
            continue
        yield as_date(p.paid_date), Money.of(p.amount).cents


def monthly_revenue(payments: Iterable[Any], *, window: int = MONTHLY_WINDOW) -> List[MonthlyRevenue]:
    buckets: Dict[Tuple[int, int], List[int]] = {}
    for d, cents in _paid_with_date(payments):
        b = buckets.setdefault((d.year, d.month), [0, 0])
        b[0] += cents
        b[1] += 1

    keys = sorted(buckets)
    keys = keys[-window:] if window > 0 else []
    return [
        MonthlyRevenue(
            month_label=date(y, m, 1).strftime("%b %Y"),
            year=y,
            month=m,
            revenue=Money.from_cents(buckets[(y, m)][0]),
            payment_count=buckets[(y, m)][1],
        )
        for y, m in keys
    ]


def daily_timeline(payments: Iterable[Any], *, window: int = DAILY_WINDOW) -> List[DailyRevenue]:
    # La clé est le libellé (sans année): le même jour de deux années
    # différentes tombe dans le même seau. Ordre = première apparition.
    buckets: Dict[str, int] = {}
    for d, cents in _paid_with_date(payments):
        label = d.strftime("%b %d")
        buckets[label] = buckets.get(label, 0) + cents

    labels = list(buckets)
    labels = labels[-window:] if window > 0 else []
    return [DailyRevenue(date_label=lb, revenue=Money.from_cents(buckets[lb])) for lb in labels]


def status_distribution(payments: Iterable[Any]) -> List[StatusShare]:
    sums = {s: 0 for s in PAYMENT_STATUSES}
    for p in payments:
        sums[validate_status(p.status)] += Money.of(p.amount).cents
    # ordre fixe paid, pending, overdue; statuts à zéro omis
    return [
        StatusShare(status=s, amount=Money.from_cents(sums[s]))
        for s in PAYMENT_STATUSES
        if sums[s] > 0
    ]
