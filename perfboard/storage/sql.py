from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from perfboard.core.exceptions import NotFoundError, StorageUnavailableError
from perfboard.core.logging import get_logger
from perfboard.models.employee import Employee
from perfboard.models.evaluation import Evaluation
from perfboard.models.evaluation_score import EvaluationScore
from perfboard.schemas.category import Category
from perfboard.schemas.employee import EmployeeCreate, EmployeeOut
from perfboard.schemas.evaluation import EvaluationCreate, EvaluationOut
from perfboard.storage.base import EvaluationStore, iso_timestamp

logger = get_logger(__name__)


def _parse_id(raw: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        return None


def employee_to_out(e: Employee) -> EmployeeOut:
    return EmployeeOut(
        id=str(e.id),
        name=e.name,
        email=e.email,
        position=e.position,
        department=e.department,
        avatar=e.avatar,
    )


def eval_to_out(e: Evaluation) -> EvaluationOut:
    scores: dict[Category, int] = {}
    for s in e.scores:
        try:
            scores[Category(s.category)] = s.score
        except ValueError:
            # rows written with a category we no longer know
            continue
    return EvaluationOut(
        id=str(e.id),
        employee_id=str(e.employee_id) if e.employee_id else None,
        period=e.period,
        scores=scores,
        comments=e.comments or "",
        evaluator=e.evaluator,
        date=iso_timestamp(e.created_at),
    )


class SqlStore(EvaluationStore):
    """SQLAlchemy-backed store. Each mutation commits its own transaction."""

    backend_name = "sql"

    def __init__(self, db: Session, **kwargs):
        super().__init__(**kwargs)
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except OperationalError as e:
            self.db.rollback()
            logger.error("sql_commit_failed", error=str(e.orig))
            raise StorageUnavailableError("Database is unavailable") from e

    def _query(self, fn):
        try:
            return fn()
        except OperationalError as e:
            self.db.rollback()
            logger.error("sql_query_failed", error=str(e.orig))
            raise StorageUnavailableError("Database is unavailable") from e

    def ping(self) -> None:
        self._query(lambda: self.db.execute(text("SELECT 1")))

    def _get_employee_row(self, employee_id: str) -> Employee | None:
        pk = _parse_id(employee_id)
        if pk is None:
            return None
        return self._query(lambda: self.db.get(Employee, pk))

    def list_employees(self) -> list[EmployeeOut]:
        rows = self._query(
            lambda: self.db.query(Employee).order_by(Employee.created_at.asc(), Employee.id.asc()).all()
        )
        return [employee_to_out(e) for e in rows]

    def list_evaluations(self) -> list[EvaluationOut]:
        rows = self._query(
            lambda: self.db.query(Evaluation).order_by(Evaluation.created_at.asc(), Evaluation.id.asc()).all()
        )
        return [eval_to_out(e) for e in rows]

    def get_employee(self, employee_id: str) -> EmployeeOut | None:
        e = self._get_employee_row(employee_id)
        return employee_to_out(e) if e else None

    def get_evaluation(self, evaluation_id: str) -> EvaluationOut | None:
        pk = _parse_id(evaluation_id)
        if pk is None:
            return None
        e = self._query(lambda: self.db.get(Evaluation, pk))
        return eval_to_out(e) if e else None

    def create_employee(self, data: EmployeeCreate) -> EmployeeOut:
        e = Employee(
            name=data.name,
            email=data.email,
            position=data.position,
            department=data.department or "",
            avatar=self.avatar_url(data.email),
        )
        self.db.add(e)
        self._commit()
        self.db.refresh(e)
        self._changed("employee_created", employee_id=str(e.id))
        return employee_to_out(e)

    def update_employee(self, employee: EmployeeOut) -> None:
        e = self._get_employee_row(employee.id)
        if not e:
            raise NotFoundError("Employee not found")
        e.name = employee.name
        e.email = employee.email
        e.position = employee.position
        e.department = employee.department
        e.avatar = employee.avatar
        self._commit()
        self._changed("employee_updated", employee_id=employee.id)

    def delete_employee(self, employee_id: str) -> None:
        e = self._get_employee_row(employee_id)
        if not e:
            raise NotFoundError("Employee not found")

        evaluations = self._query(
            lambda: self.db.query(Evaluation).filter(Evaluation.employee_id == e.id).all()
        )
        for ev in evaluations:
            self.db.delete(ev)
        self.db.delete(e)
        self._commit()
        self._changed("employee_deleted", employee_id=employee_id, evaluations_removed=len(evaluations))

    def create_evaluation(self, data: EvaluationCreate) -> EvaluationOut:
        emp = self._get_employee_row(data.employee_id)
        if not emp:
            raise NotFoundError("Employee not found")

        ev = Evaluation(
            employee_id=emp.id,
            period=data.period,
            comments=data.comments,
            evaluator=data.evaluator or "",
            created_at=datetime.now(timezone.utc),
        )
        ev.scores = [
            EvaluationScore(category=category.value, score=score)
            for category, score in data.scores.items()
        ]
        self.db.add(ev)
        self._commit()
        self.db.refresh(ev)
        self._changed("evaluation_created", evaluation_id=str(ev.id), employee_id=data.employee_id)
        return eval_to_out(ev)

    def delete_evaluation(self, evaluation_id: str) -> None:
        pk = _parse_id(evaluation_id)
        ev = self._query(lambda: self.db.get(Evaluation, pk)) if pk else None
        if not ev:
            raise NotFoundError("Evaluation not found")
        self.db.delete(ev)
        self._commit()
        self._changed("evaluation_deleted", evaluation_id=evaluation_id)
