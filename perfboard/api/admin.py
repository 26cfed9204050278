from fastapi import APIRouter, Depends, Query

from perfboard.core.access import get_visibility_policy, require_admin
from perfboard.core.dashboard import build_admin_overview, build_admin_rows, narrow
from perfboard.core.visibility import VisibilityPolicy
from perfboard.schemas.caller import Caller, Screen
from perfboard.schemas.stats import AdminEvaluationRow, AdminOverview
from perfboard.storage import EvaluationStore, get_store

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/overview", response_model=AdminOverview)
def admin_overview(
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(require_admin),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """
    Company cards. Counts and averages cover the same evaluations as
    /admin/evaluations, including those whose employee was removed.
    """
    snapshot = store.snapshot()
    employees, _ = narrow(snapshot, caller, Screen.ADMIN, policy)
    return build_admin_overview(employees, snapshot.evaluations)


@router.get("/evaluations", response_model=list[AdminEvaluationRow])
def admin_evaluations(
    evaluator: str | None = Query(default=None, description="Exact evaluator name"),
    department: str | None = Query(default=None, description="Exact employee department"),
    search: str | None = Query(default=None, description="Substring of the employee name"),
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(require_admin),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """
    Every evaluation in the company joined with its employee, newest first.
    """
    snapshot = store.snapshot()
    employees, _ = narrow(snapshot, caller, Screen.ADMIN, policy)
    return build_admin_rows(
        employees,
        snapshot.evaluations,
        evaluator=evaluator,
        department=department,
        search=search,
    )
