from fastapi import APIRouter, Depends, Query, Response

from perfboard.core.access import (
    get_visibility_policy,
    get_visible_employee_or_404,
    management_screen,
)
from perfboard.core.security import get_current_caller
from perfboard.core.visibility import VisibilityPolicy, resolve_screen, visible_employees
from perfboard.schemas.caller import Caller, Screen
from perfboard.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate
from perfboard.schemas.pagination import PaginatedResponse, paginate
from perfboard.storage import EvaluationStore, get_store

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeOut] | PaginatedResponse[EmployeeOut])
def list_employees(
    screen: Screen = Query(default=Screen.TEAM, description="Screen the list is shown on"),
    search: str | None = Query(default=None, description="Search by name or position"),
    limit: int = Query(default=100, ge=1, le=500, description="Maximum number of results"),
    offset: int = Query(default=0, ge=0, description="Number of results to skip"),
    include_pagination: bool = Query(default=False, description="Include pagination metadata"),
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """
    Employees visible to the caller on the given screen, in storage order.

    Use ?include_pagination=true to get pagination metadata.
    """
    screen = resolve_screen(caller, screen)
    employees = visible_employees(store.list_employees(), caller, screen, policy)

    if search:
        term = search.lower()
        employees = [
            e for e in employees
            if term in e.name.lower() or term in e.position.lower()
        ]

    page = paginate(employees, limit, offset)
    if include_pagination:
        return page
    return page.items


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(
    employee_id: str,
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    return get_visible_employee_or_404(store, caller, employee_id, management_screen(caller), policy)


@router.post("", response_model=EmployeeOut, status_code=201)
def create_employee(
    payload: EmployeeCreate,
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
):
    """New employees always join the caller's own department."""
    data = payload.model_copy(update={"department": caller.department})
    return store.create_employee(data)


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    employee_id: str,
    payload: EmployeeUpdate,
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """Only admins may move an employee to another department."""
    current = get_visible_employee_or_404(store, caller, employee_id, management_screen(caller), policy)

    changes = payload.model_dump(exclude_none=True)
    if not caller.is_admin:
        changes.pop("department", None)

    updated = current.model_copy(update=changes)
    store.update_employee(updated)
    return updated


@router.delete("/{employee_id}", status_code=204)
def delete_employee(
    employee_id: str,
    store: EvaluationStore = Depends(get_store),
    caller: Caller = Depends(get_current_caller),
    policy: VisibilityPolicy = Depends(get_visibility_policy),
):
    """Deletes the employee together with all of their evaluations."""
    get_visible_employee_or_404(store, caller, employee_id, management_screen(caller), policy)
    store.delete_employee(employee_id)
    return Response(status_code=204)
