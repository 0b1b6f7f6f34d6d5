from __future__ import annotations
from typing import List, Optional

from billtrack.models.document import Document
from billtrack.services.base import RepoService, hydrate


class DocumentService(RepoService):
    """Métadonnées seulement: le stockage des fichiers est externe."""

    filename = "documents.json"
    entity_name = "document"

    def list_documents(self, owner_id: str, client_id: Optional[str] = None) -> List[Document]:
        docs = hydrate(self.repo.list_for_owner(owner_id), Document)
        if client_id is not None:
            docs = [d for d in docs if d.client_id == client_id]
        return docs

    def add_document(self, doc: Document) -> Document:
        self.repo.add(doc)
        return doc

    def delete_document(self, owner_id: str, doc_id: str) -> bool:
        return self.repo.delete_where(
            lambda d: d.get("id") == doc_id and d.get("owner_id") == owner_id
        ) > 0

    def delete_for_client(self, owner_id: str, client_id: str) -> int:
        return self.repo.delete_where(
            lambda d: d.get("owner_id") == owner_id and d.get("client_id") == client_id
        )
