"""
Aggregate statistics over evaluations.

All functions are pure and expect inputs that were already narrowed by
perfboard.core.visibility. Means are accumulated unrounded; call
round_score() only when presenting a number.
"""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Mapping, Sequence

from perfboard.schemas.category import ALL_CATEGORIES, Category
from perfboard.schemas.employee import EmployeeOut
from perfboard.schemas.evaluation import EvaluationOut


def round_score(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def as_score(value: Any) -> float:
    # bool is a Real, but never a valid score
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    x = float(value)
    return x if math.isfinite(x) else 0.0


def _as_category(key: Any) -> Category | None:
    try:
        return Category(key)
    except ValueError:
        return None


def mean_score(evaluation: EvaluationOut) -> float:
    scores: Mapping[Any, Any] = evaluation.scores or {}
    if not scores:
        return 0.0
    return sum(as_score(v) for v in scores.values()) / len(scores)


def organization_mean(evaluations: Sequence[EvaluationOut]) -> float:
    if not evaluations:
        return 0.0
    return sum(mean_score(ev) for ev in evaluations) / len(evaluations)


def per_employee_mean(employee: EmployeeOut, evaluations: Sequence[EvaluationOut]) -> float:
    own = [ev for ev in evaluations if ev.employee_id is not None and ev.employee_id == employee.id]
    return organization_mean(own)


def top_performer(
    employees: Sequence[EmployeeOut],
    evaluations: Sequence[EvaluationOut],
) -> EmployeeOut | None:
    """Highest per-employee mean. Ties go to the employee listed first."""
    top: EmployeeOut | None = None
    top_score = 0.0
    for emp in employees:
        score = per_employee_mean(emp, evaluations)
        if top is None or score > top_score:
            top, top_score = emp, score
    return top


def per_category_mean(evaluations: Sequence[EvaluationOut]) -> dict[Category, float]:
    totals = {c: 0.0 for c in ALL_CATEGORIES}
    counts = {c: 0 for c in ALL_CATEGORIES}

    for ev in evaluations:
        for key, value in (ev.scores or {}).items():
            category = _as_category(key)
            if category is None:
                continue
            totals[category] += as_score(value)
            counts[category] += 1

    return {
        c: (totals[c] / counts[c]) if counts[c] else 0.0
        for c in ALL_CATEGORIES
    }
