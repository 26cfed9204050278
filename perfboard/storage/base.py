from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from perfboard.core.config import settings
from perfboard.core.events import ChangeFeed, Snapshot
from perfboard.core.logging import get_logger
from perfboard.schemas.employee import EmployeeCreate, EmployeeOut
from perfboard.schemas.evaluation import EvaluationCreate, EvaluationOut

logger = get_logger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


def iso_timestamp(dt: datetime | None = None) -> str:
    """UTC timestamp with millisecond precision, e.g. 2024-10-01T09:30:00.000Z"""
    dt = dt or datetime.now(timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


class EvaluationStore(ABC):
    """
    CRUD contract every storage backend implements.

    Mutations publish a fresh Snapshot on the store's ChangeFeed once they
    have been persisted. Backend failures surface as StorageUnavailableError.
    """

    backend_name = "abstract"

    def __init__(self, feed: ChangeFeed | None = None, avatar_url=settings.avatar_url):
        self.feed = feed or ChangeFeed()
        self.avatar_url = avatar_url

    @abstractmethod
    def list_employees(self) -> list[EmployeeOut]: ...

    @abstractmethod
    def list_evaluations(self) -> list[EvaluationOut]: ...

    @abstractmethod
    def create_employee(self, data: EmployeeCreate) -> EmployeeOut: ...

    @abstractmethod
    def update_employee(self, employee: EmployeeOut) -> None: ...

    @abstractmethod
    def delete_employee(self, employee_id: str) -> None:
        """Delete the employee and every evaluation referencing it."""

    @abstractmethod
    def create_evaluation(self, data: EvaluationCreate) -> EvaluationOut: ...

    @abstractmethod
    def delete_evaluation(self, evaluation_id: str) -> None: ...

    def ping(self) -> None:
        """Raise StorageUnavailableError if the backend cannot be reached."""

    def get_employee(self, employee_id: str) -> EmployeeOut | None:
        return next((e for e in self.list_employees() if e.id == employee_id), None)

    def get_evaluation(self, evaluation_id: str) -> EvaluationOut | None:
        return next((ev for ev in self.list_evaluations() if ev.id == evaluation_id), None)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            employees=tuple(self.list_employees()),
            evaluations=tuple(self.list_evaluations()),
        )

    def _changed(self, action: str, **ids) -> None:
        logger.info(action, backend=self.backend_name, **ids)
        if self.feed.has_subscribers:
            self.feed.publish(self.snapshot())
