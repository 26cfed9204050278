from fastapi import APIRouter, Depends

from perfboard.core.security import get_current_caller
from perfboard.core.visibility import resolve_screen
from perfboard.schemas.caller import Caller, Screen, SessionCreate, SessionOut

router = APIRouter(tags=["auth"])


@router.post("/session", response_model=SessionOut)
def start_session(payload: SessionCreate, screen: Screen = Screen.DASHBOARD):
    """
    Login form. Identity is accepted as declared; the client then sends it
    back on every request through the X-User-* headers.
    """
    caller = Caller(
        name=payload.name,
        email=payload.email,
        department=payload.department,
        is_admin=payload.is_admin,
    )
    return SessionOut(caller=caller, screen=resolve_screen(caller, screen))


@router.get("/me", response_model=Caller)
def me(caller: Caller = Depends(get_current_caller)):
    return caller
