"""
Cycle de vie d'un paiement: pending / overdue / paid.

- pending et overdue sont "en attente" (outstanding)
- passer à paid estampille paid_date avec la date de la transition
- quitter paid efface paid_date
- overdue n'est jamais déduit de due_date: c'est l'appelant qui le pose
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional

from billtrack.errors import InvalidStatus
from billtrack.models.payment import PAYMENT_STATUSES, Payment

PAID = "paid"
OUTSTANDING_STATUSES: tuple[str, ...] = ("pending", "overdue")


def validate_status(status: Any) -> str:
    if status not in PAYMENT_STATUSES:
        raise InvalidStatus(f"payment status must be one of {PAYMENT_STATUSES}, got {status!r}")
    return status


def is_outstanding(status: Any) -> bool:
    return validate_status(status) in OUTSTANDING_STATUSES


def paid_date_for(current_status: Optional[str], current_paid_date: Optional[date],
                  new_status: str, on: date) -> Optional[date]:
    new_status = validate_status(new_status)
    if new_status != PAID:
        return None
    # déjà payé: la date d'encaissement d'origine est conservée
    if current_status == PAID and current_paid_date is not None:
        return current_paid_date
    return on


def transition(payment: Payment, status: str, on: date) -> Payment:
    """Retourne une copie du paiement dans le nouveau statut."""
    paid_date = paid_date_for(payment.status, payment.paid_date, status, on)
    return payment.model_copy(update={"status": status, "paid_date": paid_date})


def stamp_new(payment: Payment, on: date) -> Payment:
    """Paiement créé directement: paid => paid_date = date de création, sinon effacée."""
    paid_date = paid_date_for(None, None, payment.status, on)
    if paid_date == payment.paid_date:
        return payment
    return payment.model_copy(update={"paid_date": paid_date})
