from __future__ import annotations

import glob
import json
import logging
import shutil
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
from uuid import uuid4

from pydantic import BaseModel

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def _json_default(o: Any) -> Any:
    if isinstance(o, (date, datetime)):
        return o.isoformat()
    return str(o)


class JsonRepository:
    """
    Repo JSON générique (une liste de lignes par fichier), clé primaire configurable.
    - Chaque ligne porte un owner_id: les lectures métier passent par list_for_owner
    - Rotation de backups (backup_enabled, backup_keep)
    - N'écrit pas si le contenu ne change pas
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        entity_name: str = "entity",
        key: str = "id",
        *,
        backup_enabled: bool = True,
        backup_keep: int = 5,
    ) -> None:
        self.filepath = Path(filepath)
        self.entity_name = entity_name
        self.key = key
        self._lock = threading.Lock()
        self.backup_enabled = backup_enabled
        self.backup_keep = max(0, int(backup_keep))

        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        if not self.filepath.exists():
            self._write_raw([])

    # ---------------- I/O bas niveau ---------------- #

    def _read_raw(self) -> List[Row]:
        try:
            with self.filepath.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, list) else []
        except FileNotFoundError:
            return []
        except json.JSONDecodeError:
            # Fichier corrompu → copie de côté et repart sur liste vide
            backup = self.filepath.with_suffix(".corrupt.json")
            logger.error("%s corrompu, copie dans %s", self.filepath, backup)
            try:
                shutil.copy2(self.filepath, backup)
            except OSError as e:
                logger.warning("Copie de %s impossible: %s", self.filepath, e)
            return []

    def _rotate_backups(self) -> None:
        if not self.backup_enabled or self.backup_keep <= 0:
            return
        pattern = str(self.filepath.with_suffix(".*.bak.json"))
        files = sorted(glob.glob(pattern))
        # garde les plus récents
        for old in files[: max(0, len(files) - self.backup_keep)]:
            Path(old).unlink(missing_ok=True)

    def _write_raw(self, data: Iterable[Mapping[str, Any]]) -> None:
        with self._lock:
            new_dump = json.dumps(list(data), ensure_ascii=False, indent=2, default=_json_default)

            # si contenu identique → ne rien faire
            if self.filepath.exists():
                if self.filepath.read_text(encoding="utf-8") == new_dump:
                    return

                if self.backup_enabled:
                    ts = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
                    shutil.copy2(self.filepath, self.filepath.with_suffix(f".{ts}.bak.json"))
                    self._rotate_backups()

            with self.filepath.open("w", encoding="utf-8") as f:
                f.write(new_dump)

    # ---------------- Helpers ---------------- #

    @staticmethod
    def _to_dict(item: Union[BaseModel, Mapping[str, Any]]) -> Row:
        if isinstance(item, BaseModel):
            return item.model_dump(mode="json")
        return dict(item)

    # ---------------- CRUD ---------------- #

    def list_all(self) -> List[Row]:
        return self._read_raw()

    def list_for_owner(self, owner_id: str) -> List[Row]:
        return [r for r in self._read_raw() if str(r.get("owner_id")) == str(owner_id)]

    def get_by_id(self, obj_id: Any) -> Optional[Row]:
        k = self.key
        for it in self._read_raw():
            if str(it.get(k)) == str(obj_id):
                return it
        return None

    def add(self, item: Union[BaseModel, Mapping[str, Any]]) -> Row:
        record = self._to_dict(item)
        k = self.key
        if not record.get(k):
            record[k] = uuid4().hex
        data = self._read_raw()
        if any(str(d.get(k)) == str(record[k]) for d in data):
            raise ValueError(f"{self.entity_name} with {k}={record[k]} already exists")
        data.append(record)
        self._write_raw(data)
        return record

    def update(self, item: Union[BaseModel, Mapping[str, Any]]) -> Row:
        record = self._to_dict(item)
        k = self.key
        obj_id = record.get(k)
        if not obj_id:
            raise ValueError(f"Cannot update {self.entity_name} without '{k}'")
        data = self._read_raw()
        for idx, existing in enumerate(data):
            if str(existing.get(k)) == str(obj_id):
                merged = {**existing, **record}
                data[idx] = merged
                self._write_raw(data)
                return merged
        raise ValueError(f"{self.entity_name} with {k}={obj_id} not found")

    def replace(self, item: Union[BaseModel, Mapping[str, Any]]) -> Row:
        """Comme update, mais la ligne stockée est remplacée entièrement (pas de fusion)."""
        record = self._to_dict(item)
        k = self.key
        obj_id = record.get(k)
        data = self._read_raw()
        for idx, existing in enumerate(data):
            if obj_id and str(existing.get(k)) == str(obj_id):
                data[idx] = record
                self._write_raw(data)
                return record
        raise ValueError(f"{self.entity_name} with {k}={obj_id} not found")

    def upsert(self, item: Union[BaseModel, Mapping[str, Any]]) -> Row:
        record = self._to_dict(item)
        k = self.key
        if record.get(k) and self.get_by_id(record[k]) is not None:
            return self.update(record)
        return self.add(record)

    def delete(self, obj_id: Any) -> bool:
        return self.delete_where(lambda d: str(d.get(self.key)) == str(obj_id)) > 0

    def delete_where(self, predicate: Callable[[Row], bool]) -> int:
        data = self._read_raw()
        new_data = [d for d in data if not predicate(d)]
        removed = len(data) - len(new_data)
        if removed:
            self._write_raw(new_data)
        return removed

    # ---------------- Recherches ---------------- #

    def find(self, predicate: Callable[[Row], bool]) -> List[Row]:
        return [r for r in self._read_raw() if predicate(r)]

    def find_one(self, predicate: Callable[[Row], bool]) -> Optional[Row]:
        for r in self._read_raw():
            if predicate(r):
                return r
        return None
