from perfboard.schemas.category import Category
from perfboard.schemas.employee import EmployeeCreate, EmployeeOut
from perfboard.schemas.evaluation import EvaluationCreate, EvaluationOut
from perfboard.storage import EvaluationStore


def caller_headers(
    name: str = "John Doe",
    email: str = "john.doe@example.com",
    department: str = "Engineering",
    is_admin: bool = False,
) -> dict[str, str]:
    return {
        "X-User-Name": name,
        "X-User-Email": email,
        "X-User-Department": department,
        "X-User-Admin": "true" if is_admin else "false",
    }


def uniform_scores(value: int) -> dict[Category, int]:
    return {c: value for c in Category}


def scores_json(**by_category: int) -> dict[str, int]:
    """Request body scores, every category 3 unless overridden by enum name."""
    out = {c.value: 3 for c in Category}
    for name, value in by_category.items():
        out[Category[name].value] = value
    return out


def make_employee(
    id: str,
    department: str = "Engineering",
    name: str | None = None,
    position: str = "Engineer",
) -> EmployeeOut:
    name = name or f"Employee {id}"
    return EmployeeOut(
        id=id,
        name=name,
        email=f"{id}@example.com",
        position=position,
        department=department,
        avatar=f"https://i.pravatar.cc/150?u={id}@example.com",
    )


def make_evaluation(
    id: str,
    employee_id: str | None,
    scores: dict | None = None,
    evaluator: str = "John Doe",
    date: str = "2024-12-01T10:00:00.000Z",
    period: str = "Q4 2024",
) -> EvaluationOut:
    return EvaluationOut(
        id=id,
        employee_id=employee_id,
        period=period,
        scores=scores if scores is not None else uniform_scores(3),
        comments="",
        evaluator=evaluator,
        date=date,
    )


def create_employee(
    store: EvaluationStore,
    name: str,
    department: str = "Engineering",
    position: str = "Engineer",
    email: str | None = None,
) -> EmployeeOut:
    email = email or f"{name.lower().replace(' ', '.')}@example.com"
    return store.create_employee(
        EmployeeCreate(name=name, email=email, position=position, department=department)
    )


def create_evaluation(
    store: EvaluationStore,
    employee: EmployeeOut,
    scores: dict[Category, int] | None = None,
    period: str = "Q4 2024",
    evaluator: str = "John Doe",
    comments: str = "",
) -> EvaluationOut:
    return store.create_evaluation(
        EvaluationCreate(
            employee_id=employee.id,
            period=period,
            scores=scores or uniform_scores(3),
            comments=comments,
            evaluator=evaluator,
        )
    )
