from fastapi import Header, HTTPException, status

from perfboard.schemas.caller import Caller


def get_current_caller(
    x_user_email: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_department: str | None = Header(default=None),
    x_user_admin: bool = Header(default=False),
) -> Caller:
    """
    DEV AUTH: identity is self-declared through headers, nothing is verified.
    Example:
      X-User-Email: john.doe@example.com
      X-User-Name: John Doe
      X-User-Department: Engineering
      X-User-Admin: true
    """
    missing = [
        h for h, v in (
            ("X-User-Email", x_user_email),
            ("X-User-Name", x_user_name),
            ("X-User-Department", x_user_department),
        )
        if not v or not v.strip()
    ]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {', '.join(missing)} header (dev auth)",
        )

    return Caller(
        name=x_user_name.strip(),
        email=x_user_email.strip(),
        department=x_user_department.strip(),
        is_admin=x_user_admin,
    )
