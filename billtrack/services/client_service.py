from __future__ import annotations
import logging
from typing import List, Optional

from billtrack.models.client import Client
from billtrack.services.base import RepoService, hydrate
from billtrack.services.document_service import DocumentService
from billtrack.services.payment_service import PaymentService

logger = logging.getLogger(__name__)


class ClientService(RepoService):
    filename = "clients.json"
    entity_name = "client"

    def list_clients(self, owner_id: str) -> List[Client]:
        clients = hydrate(self.repo.list_for_owner(owner_id), Client)
        # plus récents d'abord
        return sorted(clients, key=lambda c: c.created_at, reverse=True)

    def get_by_id(self, owner_id: str, client_id: str) -> Optional[Client]:
        d = self.repo.get_by_id(client_id)
        if not d or d.get("owner_id") != owner_id:
            return None
        found = hydrate([d], Client)
        return found[0] if found else None

    def add_client(self, client: Client) -> Client:
        self.repo.add(client)
        logger.info("Client %s ajouté", client.id)
        return client

    def update_client(self, client: Client) -> Client:
        client.touch()
        self.repo.update(client)
        return client

    def delete_client(self, owner_id: str, client_id: str) -> bool:
        """Supprime le client et, en cascade, ses paiements et documents."""
        if self.get_by_id(owner_id, client_id) is None:
            return False
        payments = PaymentService(self.data_dir, self.settings).delete_for_client(owner_id, client_id)
        documents = DocumentService(self.data_dir, self.settings).delete_for_client(owner_id, client_id)
        self.repo.delete(client_id)
        logger.info("Client %s supprimé (%d paiements, %d documents)", client_id, payments, documents)
        return True
