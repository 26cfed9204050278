from __future__ import annotations

from typing import Callable, Sequence

from perfboard.core.events import ChangeFeed, Snapshot
from perfboard.core.stats import (
    mean_score,
    organization_mean,
    per_category_mean,
    per_employee_mean,
    round_score,
    top_performer,
)
from perfboard.core.visibility import (
    VisibilityPolicy,
    resolve_screen,
    visible_employees,
    visible_evaluations,
)
from perfboard.schemas.caller import Caller, Screen
from perfboard.schemas.employee import EmployeeOut, RosterEntryOut
from perfboard.schemas.evaluation import (
    CategoryScoreOut,
    EvaluationDetailOut,
    EvaluationOut,
)
from perfboard.schemas.stats import (
    AdminEvaluationRow,
    AdminOverview,
    DashboardStats,
    EmployeeScoreOut,
    TopPerformerOut,
)

NOT_AVAILABLE = "N/A"


def narrow(
    snapshot: Snapshot,
    caller: Caller | None,
    screen: Screen,
    policy: VisibilityPolicy = VisibilityPolicy.DEPARTMENT,
) -> tuple[list[EmployeeOut], list[EvaluationOut]]:
    """Visible (employees, evaluations) of a snapshot for one caller and screen."""
    screen = resolve_screen(caller, screen)
    employees = visible_employees(snapshot.employees, caller, screen, policy)
    return employees, visible_evaluations(snapshot.evaluations, employees)


def newest_first(evaluations: Sequence[EvaluationOut]) -> list[EvaluationOut]:
    # ISO 8601 timestamps from the stores sort lexicographically
    return sorted(evaluations, key=lambda ev: ev.date, reverse=True)


def category_breakdown(scores) -> list[CategoryScoreOut]:
    return [CategoryScoreOut(category=c, score=round_score(v)) for c, v in scores.items()]


def evaluation_detail(evaluation: EvaluationOut) -> EvaluationDetailOut:
    return EvaluationDetailOut(
        **evaluation.model_dump(),
        average_score=round_score(mean_score(evaluation)),
        breakdown=category_breakdown(evaluation.scores),
    )


def build_dashboard(employees: Sequence[EmployeeOut], evaluations: Sequence[EvaluationOut]) -> DashboardStats:
    top = top_performer(employees, evaluations)
    return DashboardStats(
        team_average=round_score(organization_mean(evaluations)),
        total_evaluations=len(evaluations),
        team_size=len(employees),
        top_performer=(
            TopPerformerOut(
                employee_id=top.id,
                name=top.name,
                score=round_score(per_employee_mean(top, evaluations)),
            )
            if top
            else None
        ),
        performance_by_employee=[
            EmployeeScoreOut(
                employee_id=e.id,
                name=e.name.split(" ")[0],
                score=round_score(per_employee_mean(e, evaluations)),
            )
            for e in employees
        ],
        performance_by_category=category_breakdown(per_category_mean(evaluations)),
    )


def build_roster(employees: Sequence[EmployeeOut], evaluations: Sequence[EvaluationOut]) -> list[RosterEntryOut]:
    latest: dict[str, str] = {}
    counts: dict[str, int] = {}
    for ev in evaluations:
        if ev.employee_id is None:
            continue
        counts[ev.employee_id] = counts.get(ev.employee_id, 0) + 1
        if ev.date > latest.get(ev.employee_id, ""):
            latest[ev.employee_id] = ev.date

    return [
        RosterEntryOut(
            **e.model_dump(),
            last_evaluation_date=latest.get(e.id),
            evaluation_count=counts.get(e.id, 0),
        )
        for e in employees
    ]


def build_admin_overview(employees: Sequence[EmployeeOut], evaluations: Sequence[EvaluationOut]) -> AdminOverview:
    return AdminOverview(
        total_employees=len(employees),
        total_evaluations=len(evaluations),
        company_average=round_score(organization_mean(evaluations)),
        evaluators=list(dict.fromkeys(ev.evaluator for ev in evaluations)),
        departments=list(dict.fromkeys(e.department for e in employees)),
    )


def build_admin_rows(
    employees: Sequence[EmployeeOut],
    evaluations: Sequence[EvaluationOut],
    *,
    evaluator: str | None = None,
    department: str | None = None,
    search: str | None = None,
) -> list[AdminEvaluationRow]:
    """
    One row per evaluation joined with its employee, newest first.

    Filters match the admin screen: exact evaluator, exact department and a
    case-insensitive substring of the employee name. Evaluations whose
    employee no longer exists are shown with N/A fields.
    """
    by_id = {e.id: e for e in employees}
    needle = search.lower() if search else ""

    rows: list[AdminEvaluationRow] = []
    for ev in newest_first(evaluations):
        emp = by_id.get(ev.employee_id) if ev.employee_id is not None else None
        row = AdminEvaluationRow(
            id=ev.id,
            employee_id=ev.employee_id,
            employee_name=emp.name if emp else NOT_AVAILABLE,
            employee_position=emp.position if emp else NOT_AVAILABLE,
            employee_department=emp.department if emp else NOT_AVAILABLE,
            employee_avatar=emp.avatar if emp else "",
            period=ev.period,
            evaluator=ev.evaluator,
            date=ev.date,
            comments=ev.comments,
            scores=ev.scores,
            average_score=round_score(mean_score(ev)),
        )
        if evaluator and row.evaluator != evaluator:
            continue
        if department and row.employee_department != department:
            continue
        if needle and needle not in row.employee_name.lower():
            continue
        rows.append(row)
    return rows


class LiveDashboard:
    """
    Keeps one caller's dashboard current by recomputing it from every
    snapshot published on a ChangeFeed.
    """

    def __init__(
        self,
        feed: ChangeFeed,
        caller: Caller,
        screen: Screen = Screen.DASHBOARD,
        policy: VisibilityPolicy = VisibilityPolicy.DEPARTMENT,
        on_update: Callable[[DashboardStats], None] | None = None,
    ):
        self.caller = caller
        self.screen = screen
        self.policy = policy
        self.on_update = on_update
        self.latest: DashboardStats | None = None
        self._unsubscribe = feed.subscribe(self.refresh)

    def refresh(self, snapshot: Snapshot) -> DashboardStats:
        employees, evaluations = narrow(snapshot, self.caller, self.screen, self.policy)
        self.latest = build_dashboard(employees, evaluations)
        if self.on_update:
            self.on_update(self.latest)
        return self.latest

    def close(self) -> None:
        self._unsubscribe()
