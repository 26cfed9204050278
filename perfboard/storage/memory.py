from __future__ import annotations

import threading

from perfboard.core.exceptions import NotFoundError
from perfboard.schemas.employee import EmployeeCreate, EmployeeOut
from perfboard.schemas.evaluation import EvaluationCreate, EvaluationOut
from perfboard.storage.base import EvaluationStore, iso_timestamp, new_id


class MemoryStore(EvaluationStore):
    """Process-local store. Contents are lost on restart."""

    backend_name = "memory"

    def __init__(
        self,
        employees: list[EmployeeOut] | None = None,
        evaluations: list[EvaluationOut] | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._lock = threading.RLock()
        self._employees: list[EmployeeOut] = list(employees or [])
        self._evaluations: list[EvaluationOut] = list(evaluations or [])

    def list_employees(self) -> list[EmployeeOut]:
        with self._lock:
            return list(self._employees)

    def list_evaluations(self) -> list[EvaluationOut]:
        with self._lock:
            return list(self._evaluations)

    def create_employee(self, data: EmployeeCreate) -> EmployeeOut:
        emp = EmployeeOut(
            id=new_id(),
            name=data.name,
            email=data.email,
            position=data.position,
            department=data.department or "",
            avatar=self.avatar_url(data.email),
        )
        with self._lock:
            self._employees.append(emp)
        self._changed("employee_created", employee_id=emp.id)
        return emp

    def update_employee(self, employee: EmployeeOut) -> None:
        with self._lock:
            for i, e in enumerate(self._employees):
                if e.id == employee.id:
                    self._employees[i] = employee
                    break
            else:
                raise NotFoundError("Employee not found")
        self._changed("employee_updated", employee_id=employee.id)

    def delete_employee(self, employee_id: str) -> None:
        with self._lock:
            before = len(self._employees)
            self._employees = [e for e in self._employees if e.id != employee_id]
            if len(self._employees) == before:
                raise NotFoundError("Employee not found")
            kept = [ev for ev in self._evaluations if ev.employee_id != employee_id]
            removed = len(self._evaluations) - len(kept)
            self._evaluations = kept
        self._changed("employee_deleted", employee_id=employee_id, evaluations_removed=removed)

    def create_evaluation(self, data: EvaluationCreate) -> EvaluationOut:
        with self._lock:
            if not any(e.id == data.employee_id for e in self._employees):
                raise NotFoundError("Employee not found")
            ev = EvaluationOut(
                id=new_id(),
                employee_id=data.employee_id,
                period=data.period,
                scores=data.scores,
                comments=data.comments,
                evaluator=data.evaluator or "",
                date=iso_timestamp(),
            )
            self._evaluations.append(ev)
        self._changed("evaluation_created", evaluation_id=ev.id, employee_id=ev.employee_id)
        return ev

    def delete_evaluation(self, evaluation_id: str) -> None:
        with self._lock:
            before = len(self._evaluations)
            self._evaluations = [ev for ev in self._evaluations if ev.id != evaluation_id]
            if len(self._evaluations) == before:
                raise NotFoundError("Evaluation not found")
        self._changed("evaluation_deleted", evaluation_id=evaluation_id)
