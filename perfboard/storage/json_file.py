from __future__ import annotations

import json
import os
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from perfboard.core.exceptions import StorageUnavailableError
from perfboard.core.logging import get_logger
from perfboard.core.stats import as_score
from perfboard.schemas.category import Category
from perfboard.schemas.employee import EmployeeCreate, EmployeeOut
from perfboard.schemas.evaluation import EvaluationCreate, EvaluationOut
from perfboard.storage.memory import MemoryStore

logger = get_logger(__name__)

_CATEGORY_VALUES = frozenset(c.value for c in Category)


class StoreDocument(BaseModel):
    employees: list[EmployeeOut] = []
    evaluations: list[EvaluationOut] = []


def _salvage_scores(raw: Any) -> dict[Category, int]:
    """Known categories only; unusable values count as 0, fractions round half up."""
    if not isinstance(raw, dict):
        return {}
    scores: dict[Category, int] = {}
    for key, value in raw.items():
        try:
            category = Category(key)
        except ValueError:
            continue
        scores[category] = int(Decimal(str(as_score(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return scores


def _scores_intact(raw: Any, salvaged: dict[Category, int]) -> bool:
    return (
        isinstance(raw, dict)
        and len(raw) == len(salvaged)
        and all(
            type(v) is int and salvaged.get(Category(k)) == v
            for k, v in raw.items()
            if k in _CATEGORY_VALUES
        )
    )


class JsonFileStore(MemoryStore):
    """
    Both collections kept in one JSON document on local disk.

    The file is re-read before every operation and writes go through a temp
    file and an atomic rename. Locking is per process only: one server
    process should own the file.

    Records that fail validation are skipped (and scores coerced) on read.
    Once a read had to skip, coerce or give up on anything, the store stops
    writing until the file is repaired, so the damaged file is never
    overwritten with the partial view.
    """

    backend_name = "json"

    def __init__(self, path: str | Path, **kwargs):
        super().__init__(**kwargs)
        self.path = Path(path)
        self._read_problem: dict[str, Any] | None = None

    def _load(self) -> None:
        self._read_problem = None
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raw = ""
        except OSError as e:
            logger.warning("json_store_read_failed", path=str(self.path), error=str(e))
            self._read_problem = {"reason": "unreadable", "retryable": True}
            raw = ""

        self._employees, self._evaluations = [], []
        if not raw.strip():
            return

        try:
            doc = json.loads(raw)
        except ValueError as e:
            logger.warning("json_store_malformed", path=str(self.path), error=str(e))
            self._read_problem = {"reason": "malformed", "retryable": False}
            return
        if not isinstance(doc, dict):
            logger.warning("json_store_malformed", path=str(self.path), error="top level is not an object")
            self._read_problem = {"reason": "malformed", "retryable": False}
            return

        skipped = repaired = 0
        employees, evaluations = doc.get("employees") or [], doc.get("evaluations") or []
        if not isinstance(employees, list) or not isinstance(evaluations, list):
            logger.warning("json_store_malformed", path=str(self.path), error="collections are not lists")
            self._read_problem = {"reason": "malformed", "retryable": False}
            return

        for item in employees:
            try:
                self._employees.append(EmployeeOut.model_validate(item))
            except ValidationError:
                skipped += 1

        for item in evaluations:
            if not isinstance(item, dict):
                skipped += 1
                continue
            scores = _salvage_scores(item.get("scores"))
            try:
                ev = EvaluationOut.model_validate({**item, "scores": scores})
            except ValidationError:
                skipped += 1
                continue
            if not _scores_intact(item.get("scores"), scores):
                repaired += 1
            self._evaluations.append(ev)

        if skipped or repaired:
            logger.warning(
                "json_store_records_salvaged",
                path=str(self.path),
                skipped=skipped,
                repaired=repaired,
            )
            self._read_problem = {
                "reason": "damaged_records",
                "skipped": skipped,
                "repaired": repaired,
                "retryable": False,
            }

    def _load_for_write(self) -> None:
        self._load()
        if self._read_problem is not None:
            raise StorageUnavailableError(
                "Local data file could not be read cleanly; refusing to overwrite it",
                details={"path": str(self.path), **self._read_problem},
            )

    def _save(self) -> None:
        doc = StoreDocument(employees=self._employees, evaluations=self._evaluations)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(doc.model_dump_json(indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            logger.error("json_store_write_failed", path=str(self.path), error=str(e))
            raise StorageUnavailableError("Could not write the local data file", details={"path": str(self.path)}) from e

    def _changed(self, action: str, **ids) -> None:
        self._save()
        super()._changed(action, **ids)

    def ping(self) -> None:
        if self.path.exists() and not os.access(self.path, os.R_OK | os.W_OK):
            raise StorageUnavailableError("Local data file is not accessible", details={"path": str(self.path)})

    def list_employees(self) -> list[EmployeeOut]:
        with self._lock:
            self._load()
            return super().list_employees()

    def list_evaluations(self) -> list[EvaluationOut]:
        with self._lock:
            self._load()
            return super().list_evaluations()

    def create_employee(self, data: EmployeeCreate) -> EmployeeOut:
        with self._lock:
            self._load_for_write()
            return super().create_employee(data)

    def update_employee(self, employee: EmployeeOut) -> None:
        with self._lock:
            self._load_for_write()
            super().update_employee(employee)

    def delete_employee(self, employee_id: str) -> None:
        with self._lock:
            self._load_for_write()
            super().delete_employee(employee_id)

    def create_evaluation(self, data: EvaluationCreate) -> EvaluationOut:
        with self._lock:
            self._load_for_write()
            return super().create_evaluation(data)

    def delete_evaluation(self, evaluation_id: str) -> None:
        with self._lock:
            self._load_for_write()
            super().delete_evaluation(evaluation_id)
