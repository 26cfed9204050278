from fastapi import APIRouter, Depends, Query, Response

from perfboard.core.access import (
    get_visibility_policy,
    get_visible_employee_or_404,
    management_screen,
)
from perfboard.core.dashboard import evaluation_detail, narrow, newest_first
from perfboard.core.exceptions import NotFoundError
from perfboard.core.security import get_current_caller
from perfboard.core.visibility import VisibilityPolicy, visible_employees
from perfboard.schemas.caller import Caller, Screen
from perfboard.schemas.evaluation import EvaluationCreate, EvaluationDetailOut, EvaluationOut
from perfboard.storage import EvaluationStore, get_store

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


def _get_visible_evaluation_or_404(
    store: EvaluationStore,
    caller: Caller,
    evaluation_id: str,
    policy: VisibilityPolicy,
) -> EvaluationOut:
    ev = store.get_evaluation(evaluation_id)
    if not ev or ev.employee_id is None:
        raise NotFoundError("Evaluation not found")
    employee = store.get_employee(ev.employee_id)
    if not employee or not visible_employees([employee], caller, management_screen(caller), policy):
        raise NotFoundError("Evaluation not found")
    return ev


@router.get("", response_model=list[EvaluationOut])
def list_evaluations(
    screen: Screen = Query(default=Screen.DASHBOARD, description="Screen the list is shown on"),
    employee_id: str | None = Query(default=None, description="Only evaluations of this employee"),
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """Evaluations of employees visible to the caller, newest first."""
    _, evaluations = narrow(store.snapshot(), caller, screen, policy)
    if employee_id:
        evaluations = [ev for ev in evaluations if ev.employee_id == employee_id]
    return newest_first(evaluations)


@router.get("/{evaluation_id}", response_model=EvaluationDetailOut)
def get_evaluation(
    evaluation_id: str,
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    return evaluation_detail(_get_visible_evaluation_or_404(store, caller, evaluation_id, policy))


@router.post("", response_model=EvaluationOut, status_code=201)
def create_evaluation(
    payload: EvaluationCreate,
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """Record an evaluation. The caller is always the evaluator."""
    get_visible_employee_or_404(store, caller, payload.employee_id, Screen.EVALUATE, policy)
    data = payload.model_copy(update={"evaluator": caller.name})
    return store.create_evaluation(data)


@router.delete("/{evaluation_id}", status_code=204)
def delete_evaluation(
    evaluation_id: str,
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    _get_visible_evaluation_or_404(store, caller, evaluation_id, policy)
    store.delete_evaluation(evaluation_id)
    return Response(status_code=204)
