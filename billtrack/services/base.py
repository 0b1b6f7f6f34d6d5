from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from billtrack.settings import DATA_DIR, Settings, load_settings
from billtrack.storage.json_repo import JsonRepository

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def resolve_data_dir(data_dir: Optional[os.PathLike | str]) -> Path:
    base = Path(data_dir) if data_dir else DATA_DIR
    base.mkdir(parents=True, exist_ok=True)
    return base


def open_repo(base: Path, filename: str, entity_name: str, settings: Settings) -> JsonRepository:
    return JsonRepository(
        base / filename,
        entity_name=entity_name,
        key="id",
        backup_enabled=settings.backup_enabled,
        backup_keep=settings.backup_keep,
    )


def hydrate(rows: Iterable[Dict[str, Any]], model: Type[T]) -> List[T]:
    """
    JSON -> objets. Une ligne structurellement invalide est ignorée pour ne pas
    casser les listes; un montant/statut invalide (BillingError) remonte.
    """
    out: List[T] = []
    for d in rows:
        try:
            out.append(model.model_validate(d))
        except ValidationError as e:
            logger.warning("%s ignoré (id=%s): %s", model.__name__, d.get("id"), e.errors()[0]["msg"])
    return out


class RepoService:
    filename: str = ""
    entity_name: str = "entity"

    def __init__(self, data_dir: Optional[os.PathLike | str] = None,
                 settings: Optional[Settings] = None) -> None:
        self.data_dir = resolve_data_dir(data_dir)
        self.settings = settings or load_settings(self.data_dir)
        self.repo = open_repo(self.data_dir, self.filename, self.entity_name, self.settings)
