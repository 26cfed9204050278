from __future__ import annotations

from enum import Enum
from typing import Sequence

from perfboard.schemas.caller import Caller, Screen
from perfboard.schemas.employee import EmployeeOut
from perfboard.schemas.evaluation import EvaluationOut


class VisibilityPolicy(str, Enum):
    # admins are limited to their own department outside the admin screen
    DEPARTMENT = "department"
    ADMIN_SEES_ALL = "admin_sees_all"


def resolve_screen(caller: Caller | None, screen: Screen) -> Screen:
    """
    Screen the caller actually lands on. Non-admins asking for the admin
    screen are sent to the dashboard.
    """
    if screen == Screen.ADMIN and not (caller and caller.is_admin):
        return Screen.DASHBOARD
    return screen


def visible_employees(
    employees: Sequence[EmployeeOut],
    caller: Caller | None,
    screen: Screen,
    policy: VisibilityPolicy = VisibilityPolicy.DEPARTMENT,
) -> list[EmployeeOut]:
    if caller is None:
        return []

    if caller.is_admin and (screen == Screen.ADMIN or policy == VisibilityPolicy.ADMIN_SEES_ALL):
        return list(employees)

    return [e for e in employees if e.department == caller.department]


def visible_evaluations(
    evaluations: Sequence[EvaluationOut],
    employees: Sequence[EmployeeOut],
) -> list[EvaluationOut]:
    """Evaluations whose employee is in the already visible employee set."""
    ids = {e.id for e in employees}
    return [ev for ev in evaluations if ev.employee_id is not None and ev.employee_id in ids]
