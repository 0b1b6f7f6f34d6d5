from __future__ import annotations
from pydantic import Field, field_validator
from typing import Literal, Optional
from datetime import datetime
from .common import Record, utcnow

DocumentCategory = Literal["Invoice", "Contract", "Price suggestion", "Expense"]

class Document(Record):
    client_id: Optional[str] = None  # None => pièce isolée (justificatif de dépense)
    file_name: str
    file_path: str
    file_size: Optional[int] = None
    file_type: Optional[str] = None
    category: Optional[DocumentCategory] = None
    created_at: datetime = Field(default_factory=utcnow)

    @field_validator("category", mode="before")
    @classmethod
    def _blank_category(cls, v):
        return v or None

    @property
    def is_standalone(self) -> bool:
        return self.client_id is None
