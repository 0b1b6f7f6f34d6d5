from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, ConfigDict

from billtrack.engine.payment_status import PAID, validate_status
from billtrack.models.money import ZERO, Money

logger = logging.getLogger(__name__)


class LedgerSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    paid_total: Money = ZERO
    outstanding_total: Money = ZERO

    @property
    def grand_total(self) -> Money:
        return self.paid_total + self.outstanding_total


def summarize(payments: Iterable[Any]) -> LedgerSummary:
    """
    Encaissé vs en attente sur la séquence donnée, telle quelle.
    Le filtrage par client est fait par l'appelant (voir for_client).
    """
    paid = 0
    outstanding = 0
    for p in payments:
        cents = Money.of(p.amount).cents
        if validate_status(p.status) == PAID:
            paid += cents
        else:
            outstanding += cents
    return LedgerSummary(
        paid_total=Money.from_cents(paid),
        outstanding_total=Money.from_cents(outstanding),
    )


def for_client(payments: Iterable[Any], client_id: str) -> List[Any]:
    return [p for p in payments if p.client_id == client_id]


def client_balances(payments: Iterable[Any]) -> Dict[str, LedgerSummary]:
    groups: Dict[str, List[Any]] = {}
    for p in payments:
        groups.setdefault(p.client_id, []).append(p)
    logger.debug("client_balances: %d clients", len(groups))
    return {cid: summarize(rows) for cid, rows in groups.items()}
