"""Demo data for the memory backend and scripts/seed_demo.py."""
from perfboard.core.config import settings
from perfboard.schemas.category import Category
from perfboard.schemas.employee import EmployeeOut
from perfboard.schemas.evaluation import EvaluationOut

_EMPLOYEES = [
    # id, name, email, position, department
    ("emp-1", "Ana Torres", "ana.torres@example.com", "Backend Engineer", "Engineering"),
    ("emp-2", "Luis Gomez", "luis.gomez@example.com", "Frontend Engineer", "Engineering"),
    ("emp-3", "Marta Ruiz", "marta.ruiz@example.com", "QA Analyst", "Engineering"),
    ("emp-4", "Carlos Vega", "carlos.vega@example.com", "Content Strategist", "Marketing"),
    ("emp-5", "Elena Diaz", "elena.diaz@example.com", "Account Executive", "Sales"),
]

_EVALUATIONS = [
    # id, employee id, period, scores in category order, comments, evaluator, date
    ("eval-1", "emp-1", "Q3 2024", (5, 4, 5, 4, 4), "Consistently ships on time.", "John Doe", "2024-09-30T10:00:00.000Z"),
    ("eval-2", "emp-2", "Q3 2024", (4, 4, 3, 3, 4), "Solid quarter.", "John Doe", "2024-09-30T11:00:00.000Z"),
    ("eval-3", "emp-3", "Q3 2024", (3, 5, 4, 2, 3), "Excellent test coverage.", "John Doe", "2024-09-30T12:00:00.000Z"),
    ("eval-4", "emp-1", "Q4 2024", (5, 5, 4, 5, 4), "Led the storage migration.", "John Doe", "2024-12-15T09:30:00.000Z"),
    ("eval-5", "emp-4", "Q4 2024", (4, 3, 5, 3, 5), "Great campaign copy.", "Sara Lee", "2024-12-16T14:00:00.000Z"),
    ("eval-6", "emp-5", "Q4 2024", (5, 4, 4, 3, 5), "Beat quota.", "Sara Lee", "2024-12-17T16:45:00.000Z"),
]


def demo_employees() -> list[EmployeeOut]:
    return [
        EmployeeOut(
            id=id_,
            name=name,
            email=email,
            position=position,
            department=department,
            avatar=settings.avatar_url(email),
        )
        for id_, name, email, position, department in _EMPLOYEES
    ]


def demo_evaluations() -> list[EvaluationOut]:
    return [
        EvaluationOut(
            id=id_,
            employee_id=employee_id,
            period=period,
            scores=dict(zip(Category, scores)),
            comments=comments,
            evaluator=evaluator,
            date=date,
        )
        for id_, employee_id, period, scores, comments, evaluator, date in _EVALUATIONS
    ]
