import math

import pytest

from perfboard.core.stats import (
    mean_score,
    organization_mean,
    per_category_mean,
    per_employee_mean,
    round_score,
    top_performer,
)
from perfboard.schemas.category import Category
from perfboard.schemas.evaluation import EvaluationOut

from tests.helpers import make_employee, make_evaluation, uniform_scores


def _raw_evaluation(scores, employee_id="a"):
    # bypass validation to feed malformed data
    return EvaluationOut.model_construct(
        id="raw",
        employee_id=employee_id,
        period="Q1",
        scores=scores,
        comments="",
        evaluator="x",
        date="2024-01-01T00:00:00.000Z",
    )


def test_mean_score_of_five_categories():
    scores = dict(zip(Category, [1, 2, 3, 4, 5]))
    assert mean_score(make_evaluation("v", "a", scores)) == 3.0


def test_mean_score_of_empty_map_is_zero():
    assert mean_score(_raw_evaluation({})) == 0.0


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, "4", None, True])
def test_non_finite_or_non_numeric_scores_count_as_zero(bad):
    scores = {c: 5 for c in Category}
    scores[Category.LEADERSHIP] = bad
    assert mean_score(_raw_evaluation(scores)) == 4.0


def test_organization_mean_empty():
    assert organization_mean([]) == 0


def test_organization_mean_single_all_fours():
    assert organization_mean([make_evaluation("v", "a", uniform_scores(4))]) == 4.0


def test_organization_mean_averages_evaluation_means():
    evaluations = [
        make_evaluation("v1", "a", uniform_scores(2)),
        make_evaluation("v2", "b", uniform_scores(5)),
    ]
    assert organization_mean(evaluations) == 3.5


def test_per_employee_mean_only_counts_own_evaluations():
    a = make_employee("a")
    evaluations = [
        make_evaluation("v1", "a", uniform_scores(4)),
        make_evaluation("v2", "b", uniform_scores(1)),
        make_evaluation("v3", "a", uniform_scores(5)),
    ]
    assert per_employee_mean(a, evaluations) == 4.5


def test_per_employee_mean_without_evaluations_is_zero():
    assert per_employee_mean(make_employee("a"), [make_evaluation("v1", "b")]) == 0.0


def test_per_employee_mean_skips_missing_references():
    a = make_employee("a")
    evaluations = [
        make_evaluation("v1", "a", uniform_scores(4)),
        make_evaluation("v2", None, uniform_scores(1)),
    ]
    assert per_employee_mean(a, evaluations) == 4.0


def test_top_performer_first_occurrence_wins_ties():
    a, b, c = make_employee("a"), make_employee("b"), make_employee("c")
    evaluations = [
        make_evaluation("v1", "a", uniform_scores(3)),
        make_evaluation("v2", "b", uniform_scores(4)),
        make_evaluation("v3", "b", uniform_scores(5)),
        make_evaluation("v4", "c", uniform_scores(5)),
        make_evaluation("v5", "c", uniform_scores(4)),
    ]
    assert per_employee_mean(b, evaluations) == 4.5
    assert per_employee_mean(c, evaluations) == 4.5
    assert top_performer([a, b, c], evaluations) == b
    assert top_performer([a, c, b], evaluations) == c


def test_top_performer_empty_employees():
    assert top_performer([], [make_evaluation("v1", "a")]) is None


def test_top_performer_without_evaluations_is_first_employee():
    a, b = make_employee("a"), make_employee("b")
    assert top_performer([a, b], []) == a


def test_per_category_mean():
    first = uniform_scores(3)
    first[Category.LEADERSHIP] = 2
    second = uniform_scores(5)
    second[Category.LEADERSHIP] = 4

    means = per_category_mean([make_evaluation("v1", "a", first), make_evaluation("v2", "a", second)])

    assert means[Category.LEADERSHIP] == 3.0
    assert means[Category.PRODUCTIVITY] == 4.0
    assert list(means) == list(Category)


def test_per_category_mean_absent_category_is_zero():
    partial = {Category.PRODUCTIVITY: 4, "Unknown": 5}
    means = per_category_mean([_raw_evaluation(partial), _raw_evaluation(partial)])
    assert means[Category.PRODUCTIVITY] == 4.0
    assert means[Category.LEADERSHIP] == 0
    assert "Unknown" not in means


def test_per_category_mean_accepts_plain_string_keys():
    means = per_category_mean([_raw_evaluation({"Leadership": 2}), _raw_evaluation({"Leadership": 4})])
    assert means[Category.LEADERSHIP] == 3.0


def test_per_category_mean_of_nothing_is_all_zero():
    assert per_category_mean([]) == {c: 0.0 for c in Category}


@pytest.mark.parametrize(
    "value, expected",
    [(3.0, 3.0), (3.25, 3.3), (3.24, 3.2), (4.45, 4.5), (10 / 3, 3.3), (math.nan, 0.0)],
)
def test_round_score(value, expected):
    assert round_score(value) == expected


def test_accumulation_is_unrounded():
    # means 3.25, 3.25, 3.2 -> 3.2333 -> 3.2; rounding each first would give 3.3
    evaluations = [
        _raw_evaluation({"a": 3.25}),
        _raw_evaluation({"a": 3.25}),
        _raw_evaluation({"a": 3.2}),
    ]
    assert round_score(organization_mean(evaluations)) == 3.2


def test_aggregates_are_deterministic():
    employees = [make_employee("a"), make_employee("b")]
    evaluations = [make_evaluation("v1", "a", uniform_scores(4)), make_evaluation("v2", "b", uniform_scores(2))]
    assert organization_mean(evaluations) == organization_mean(evaluations)
    assert per_category_mean(evaluations) == per_category_mean(evaluations)
    assert top_performer(employees, evaluations) == top_performer(employees, evaluations)
