from __future__ import annotations
import logging
import os
from typing import Optional

from billtrack.engine.dashboard import DashboardSummary, build_summary
from billtrack.services.base import resolve_data_dir
from billtrack.services.client_service import ClientService
from billtrack.services.document_service import DocumentService
from billtrack.services.payment_service import PaymentService
from billtrack.settings import Settings, load_settings

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, data_dir: Optional[os.PathLike | str] = None,
                 settings: Optional[Settings] = None) -> None:
        base = resolve_data_dir(data_dir)
        self.settings = settings or load_settings(base)
        self.clients = ClientService(base, self.settings)
        self.payments = PaymentService(base, self.settings)
        self.documents = DocumentService(base, self.settings)

    def summary(self, owner_id: str) -> DashboardSummary:
        """Relit l'instantané du compte à chaque appel (pas de cache)."""
        summary = build_summary(
            self.clients.list_clients(owner_id),
            self.payments.list_payments(owner_id),
            self.documents.list_documents(owner_id),
            monthly_window=self.settings.monthly_window,
            daily_window=self.settings.daily_window,
        )
        logger.debug("Dashboard %s: %d clients, %s encaissé", owner_id,
                     summary.client_count, summary.paid_total)
        return summary
