from __future__ import annotations
from pydantic import EmailStr, field_validator
from typing import Optional
from .common import Record, TimeStamped

class Client(Record, TimeStamped):
    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("client name is required")
        return v

    @field_validator("email", "phone", "company", "notes", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        # les formulaires envoient "" pour un champ vide
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.company})" if self.company else self.name
