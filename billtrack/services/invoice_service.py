from __future__ import annotations
import logging
from typing import Any, List, Optional, Sequence

from billtrack.models.invoice import Invoice, InvoiceLineItem
from billtrack.services.base import RepoService, hydrate

logger = logging.getLogger(__name__)


class InvoiceService(RepoService):
    """
    Les lignes sont stockées dans la facture: remplacer le jeu de lignes est
    une seule écriture. subtotal / tax_amount / total sont recalculés à chaque
    sérialisation, ils ne peuvent pas diverger des lignes.
    """

    filename = "invoices.json"
    entity_name = "invoice"

    def list_invoices(self, owner_id: str, client_id: Optional[str] = None) -> List[Invoice]:
        invoices = hydrate(self.repo.list_for_owner(owner_id), Invoice)
        if client_id is not None:
            invoices = [i for i in invoices if i.client_id == client_id]
        # plus récentes d'abord
        return sorted(invoices, key=lambda i: i.created_at, reverse=True)

    def get_by_id(self, owner_id: str, invoice_id: str) -> Optional[Invoice]:
        d = self.repo.get_by_id(invoice_id)
        if not d or d.get("owner_id") != owner_id:
            return None
        found = hydrate([d], Invoice)
        return found[0] if found else None

    def add_invoice(self, inv: Invoice) -> Invoice:
        if inv.tax_rate == 0 and "tax_rate" not in inv.model_fields_set:
            inv = inv.with_tax_rate(self.settings.default_tax_rate)
        self.repo.add(inv)
        logger.info("Facture %s créée, total %s", inv.invoice_number, inv.total)
        return inv

    def update_invoice(self, inv: Invoice) -> Invoice:
        inv.touch()
        self.repo.update(inv)
        return inv

    def replace_items(self, owner_id: str, invoice_id: str,
                      items: Sequence[InvoiceLineItem], tax_rate: Any = None) -> Invoice:
        inv = self.get_by_id(owner_id, invoice_id)
        if inv is None:
            raise ValueError(f"invoice with id={invoice_id} not found")
        inv = inv.with_items(items)
        if tax_rate is not None:
            inv = inv.with_tax_rate(tax_rate)
        return self.update_invoice(inv)

    def set_status(self, owner_id: str, invoice_id: str, status: str) -> Invoice:
        inv = self.get_by_id(owner_id, invoice_id)
        if inv is None:
            raise ValueError(f"invoice with id={invoice_id} not found")
        inv = Invoice.model_validate({**inv.model_dump(), "status": status})
        return self.update_invoice(inv)

    def delete_invoice(self, owner_id: str, invoice_id: str) -> bool:
        return self.repo.delete_where(
            lambda d: d.get("id") == invoice_id and d.get("owner_id") == owner_id
        ) > 0
