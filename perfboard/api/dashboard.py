from fastapi import APIRouter, Depends, Query

from perfboard.core.access import get_visibility_policy
from perfboard.core.dashboard import build_dashboard, build_roster, narrow
from perfboard.core.security import get_current_caller
from perfboard.core.visibility import VisibilityPolicy
from perfboard.schemas.caller import Caller, Screen
from perfboard.schemas.employee import RosterEntryOut
from perfboard.schemas.stats import DashboardStats
from perfboard.storage import EvaluationStore, get_store

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardStats)
def dashboard(
    screen: Screen = Query(default=Screen.DASHBOARD),
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """
    Team average, top performer, per-employee scores and the per-category
    radar data for everything the caller can see.
    """
    employees, evaluations = narrow(store.snapshot(), caller, screen, policy)
    return build_dashboard(employees, evaluations)


@router.get("/evaluate/roster", response_model=list[RosterEntryOut])
def evaluate_roster(
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """Employees the caller can evaluate, with their latest evaluation date."""
    employees, evaluations = narrow(store.snapshot(), caller, Screen.EVALUATE, policy)
    return build_roster(employees, evaluations)
