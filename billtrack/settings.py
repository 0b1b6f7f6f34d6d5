from __future__ import annotations
import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from billtrack.engine.invoice_totals import parse_tax_rate
from billtrack.errors import InvalidTaxRate

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = Path(os.environ.get("BILLTRACK_DATA_DIR") or ROOT_DIR / "data")


def settings_path(data_dir: Optional[os.PathLike | str] = None) -> Path:
    return Path(data_dir or DATA_DIR) / "settings.json"


def _load_json(path: os.PathLike | str):
    p = Path(path)
    if not p.exists():
        return None
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Lecture impossible de %s (%s), valeurs par défaut", p, e)
        return None


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    currency_symbol: str = "$"
    monthly_window: int = Field(default=6, ge=0)
    daily_window: int = Field(default=30, ge=0)
    default_tax_rate: Decimal = Decimal(0)
    backup_enabled: bool = True
    backup_keep: int = Field(default=5, ge=0)

    @field_validator("default_tax_rate", mode="before")
    @classmethod
    def _rate(cls, v):
        return parse_tax_rate(v)

    def format_money(self, m) -> str:
        return f"{self.currency_symbol}{m}"


def load_settings(data_dir: Optional[os.PathLike | str] = None) -> Settings:
    raw = _load_json(settings_path(data_dir))
    if not isinstance(raw, dict):
        return Settings()
    try:
        return Settings.model_validate(raw)
    except (ValidationError, InvalidTaxRate) as e:
        logger.warning("settings.json invalide, valeurs par défaut: %s", e)
        return Settings()
