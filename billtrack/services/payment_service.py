from __future__ import annotations
import logging
from datetime import date
from typing import List, Optional

from billtrack.engine import ledger, payment_status
from billtrack.engine.ledger import LedgerSummary
from billtrack.models.payment import Payment
from billtrack.services.base import RepoService, hydrate

logger = logging.getLogger(__name__)


class PaymentService(RepoService):
    filename = "payments.json"
    entity_name = "payment"

    def list_payments(self, owner_id: str, client_id: Optional[str] = None) -> List[Payment]:
        payments = hydrate(self.repo.list_for_owner(owner_id), Payment)
        if client_id is not None:
            payments = ledger.for_client(payments, client_id)
        # plus récents d'abord
        return sorted(payments, key=lambda p: p.created_at, reverse=True)

    def get_by_id(self, owner_id: str, payment_id: str) -> Optional[Payment]:
        d = self.repo.get_by_id(payment_id)
        if not d or d.get("owner_id") != owner_id:
            return None
        found = hydrate([d], Payment)
        return found[0] if found else None

    def add_payment(self, payment: Payment, today: Optional[date] = None) -> Payment:
        payment = payment_status.stamp_new(payment, today or date.today())
        self.repo.add(payment)
        return payment

    def update_payment(self, payment: Payment, today: Optional[date] = None) -> Payment:
        """Enregistre une édition; paid_date suit le changement de statut éventuel."""
        current = self.get_by_id(payment.owner_id, payment.id)
        if current is None:
            raise ValueError(f"payment with id={payment.id} not found")
        paid_date = payment_status.paid_date_for(
            current.status, current.paid_date, payment.status, today or date.today()
        )
        payment = payment.model_copy(update={"paid_date": paid_date})
        payment.touch()
        self.repo.replace(payment)
        return payment

    def set_status(self, owner_id: str, payment_id: str, status: str,
                   today: Optional[date] = None) -> Payment:
        current = self.get_by_id(owner_id, payment_id)
        if current is None:
            raise ValueError(f"payment with id={payment_id} not found")
        updated = payment_status.transition(current, status, today or date.today())
        updated.touch()
        self.repo.replace(updated)
        logger.info("Paiement %s: %s -> %s", payment_id, current.status, updated.status)
        return updated

    def delete_payment(self, owner_id: str, payment_id: str) -> bool:
        return self.repo.delete_where(
            lambda d: d.get("id") == payment_id and d.get("owner_id") == owner_id
        ) > 0

    def delete_for_client(self, owner_id: str, client_id: str) -> int:
        return self.repo.delete_where(
            lambda d: d.get("owner_id") == owner_id and d.get("client_id") == client_id
        )

    def client_summary(self, owner_id: str, client_id: str) -> LedgerSummary:
        return ledger.summarize(self.list_payments(owner_id, client_id))

    def account_summary(self, owner_id: str) -> LedgerSummary:
        return ledger.summarize(self.list_payments(owner_id))
