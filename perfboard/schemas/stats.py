from pydantic import BaseModel

from perfboard.schemas.category import Category
from perfboard.schemas.evaluation import CategoryScoreOut


class TopPerformerOut(BaseModel):
    employee_id: str
    name: str
    score: float


class EmployeeScoreOut(BaseModel):
    employee_id: str
    name: str  # first name, as charted
    score: float


class DashboardStats(BaseModel):
    """Aggregates for the overview screen"""
    team_average: float = 0.0
    total_evaluations: int = 0
    team_size: int = 0
    top_performer: TopPerformerOut | None = None
    performance_by_employee: list[EmployeeScoreOut] = []
    performance_by_category: list[CategoryScoreOut] = []


class AdminOverview(BaseModel):
    """Company-wide cards and filter options for the admin screen"""
    total_employees: int = 0
    total_evaluations: int = 0
    company_average: float = 0.0
    evaluators: list[str] = []
    departments: list[str] = []


class AdminEvaluationRow(BaseModel):
    id: str
    employee_id: str | None
    employee_name: str
    employee_position: str
    employee_department: str
    employee_avatar: str
    period: str
    evaluator: str
    date: str
    comments: str
    scores: dict[Category, int]
    average_score: float
