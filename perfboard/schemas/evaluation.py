from pydantic import BaseModel, Field, field_validator

from perfboard.schemas.category import (
    ALL_CATEGORIES,
    DEFAULT_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    Category,
)


def default_scores() -> dict[Category, int]:
    return {c: DEFAULT_SCORE for c in ALL_CATEGORIES}


class EvaluationCreate(BaseModel):
    employee_id: str = Field(min_length=1)
    period: str = Field(min_length=1, max_length=50)
    scores: dict[Category, int] = Field(default_factory=default_scores)
    comments: str = Field(default="", max_length=5000)
    evaluator: str | None = Field(default=None, max_length=200)

    @field_validator("scores")
    @classmethod
    def _check_scores(cls, v: dict[Category, int]) -> dict[Category, int]:
        missing = [c.value for c in ALL_CATEGORIES if c not in v]
        if missing:
            raise ValueError(f"Missing scores for: {', '.join(missing)}")
        for category, score in v.items():
            if not MIN_SCORE <= score <= MAX_SCORE:
                raise ValueError(f"{category.value} must be between {MIN_SCORE} and {MAX_SCORE}")
        # keep the canonical category order
        return {c: v[c] for c in ALL_CATEGORIES}


class EvaluationOut(BaseModel):
    id: str
    employee_id: str | None
    period: str
    scores: dict[Category, int]
    comments: str
    evaluator: str
    date: str  # ISO 8601


class CategoryScoreOut(BaseModel):
    category: Category
    score: float
    full_mark: int = MAX_SCORE


class EvaluationDetailOut(EvaluationOut):
    """Evaluation with its mean and radar data"""
    average_score: float
    breakdown: list[CategoryScoreOut]
