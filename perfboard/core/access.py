from fastapi import Depends

from perfboard.core.config import settings
from perfboard.core.exceptions import AccessDeniedError, NotFoundError
from perfboard.core.security import get_current_caller
from perfboard.core.visibility import VisibilityPolicy, visible_employees
from perfboard.schemas.caller import Caller, Screen
from perfboard.schemas.employee import EmployeeOut
from perfboard.storage import EvaluationStore


def get_visibility_policy() -> VisibilityPolicy:
    return VisibilityPolicy(settings.VISIBILITY_POLICY)


def require_admin(caller: Caller = Depends(get_current_caller)) -> Caller:
    if not caller.is_admin:
        raise AccessDeniedError("Forbidden. Requires an admin session")
    return caller


def management_screen(caller: Caller) -> Screen:
    """Screen whose visibility governs edits: admins manage from the admin screen."""
    return Screen.ADMIN if caller.is_admin else Screen.TEAM


def get_visible_employee_or_404(
    store: EvaluationStore,
    caller: Caller,
    employee_id: str,
    screen: Screen,
    policy: VisibilityPolicy,
) -> EmployeeOut:
    employee = store.get_employee(employee_id)
    # hidden employees look exactly like missing ones
    if not employee or not visible_employees([employee], caller, screen, policy):
        raise NotFoundError("Employee not found")
    return employee
