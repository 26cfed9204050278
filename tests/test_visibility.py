import pytest

from perfboard.core.visibility import (
    VisibilityPolicy,
    resolve_screen,
    visible_employees,
    visible_evaluations,
)
from perfboard.schemas.caller import Caller, Screen

from tests.helpers import make_employee, make_evaluation

ENG = Caller(name="John Doe", email="john@example.com", department="Engineering")
ENG_ADMIN = Caller(name="Root", email="root@example.com", department="Engineering", is_admin=True)


@pytest.fixture()
def employees():
    return [
        make_employee("a", "Engineering"),
        make_employee("b", "Marketing"),
        make_employee("c", "Engineering"),
        make_employee("d", "Sales"),
    ]


@pytest.mark.parametrize("screen", list(Screen))
def test_member_sees_only_own_department_on_every_screen(employees, screen):
    visible = visible_employees(employees, ENG, screen)
    assert [e.id for e in visible] == ["a", "c"]


@pytest.mark.parametrize("screen", [Screen.DASHBOARD, Screen.TEAM, Screen.EVALUATE])
def test_admin_is_department_restricted_on_managerial_screens(employees, screen):
    visible = visible_employees(employees, ENG_ADMIN, screen)
    assert [e.id for e in visible] == ["a", "c"]


def test_admin_sees_everyone_on_admin_screen(employees):
    visible = visible_employees(employees, ENG_ADMIN, Screen.ADMIN)
    assert [e.id for e in visible] == ["a", "b", "c", "d"]


def test_admin_sees_all_policy_applies_to_every_screen(employees):
    for screen in Screen:
        visible = visible_employees(employees, ENG_ADMIN, screen, VisibilityPolicy.ADMIN_SEES_ALL)
        assert len(visible) == 4


def test_admin_sees_all_policy_does_not_widen_members(employees):
    visible = visible_employees(employees, ENG, Screen.DASHBOARD, VisibilityPolicy.ADMIN_SEES_ALL)
    assert [e.id for e in visible] == ["a", "c"]


def test_no_caller_sees_nothing(employees):
    evaluations = [make_evaluation("v1", "a")]
    visible = visible_employees(employees, None, Screen.ADMIN)
    assert visible == []
    assert visible_evaluations(evaluations, visible) == []


def test_unknown_department_yields_empty(employees):
    caller = Caller(name="X", email="x@example.com", department="Legal")
    assert visible_employees(employees, caller, Screen.TEAM) == []


def test_department_match_is_exact(employees):
    caller = Caller(name="X", email="x@example.com", department="engineering")
    assert visible_employees(employees, caller, Screen.TEAM) == []


def test_evaluations_follow_visible_employees():
    a = make_employee("a", "X")
    b = make_employee("b", "Y")
    caller = Caller(name="M", email="m@example.com", department="X")
    evaluations = [
        make_evaluation("v1", "a"),
        make_evaluation("v2", "b"),
        make_evaluation("v3", "a"),
        make_evaluation("v4", "b"),
    ]

    visible = visible_employees([a, b], caller, Screen.DASHBOARD)
    assert visible == [a]

    shown = visible_evaluations(evaluations, visible)
    assert [ev.id for ev in shown] == ["v1", "v3"]


def test_visible_evaluations_sound_and_complete(employees):
    evaluations = [make_evaluation(f"v{i}", e.id) for i, e in enumerate(employees * 2)]
    evaluations.append(make_evaluation("orphan", "ghost"))
    evaluations.append(make_evaluation("unlinked", None))

    visible = visible_employees(employees, ENG, Screen.TEAM)
    ids = {e.id for e in visible}
    shown = visible_evaluations(evaluations, visible)

    assert all(ev.employee_id in ids for ev in shown)
    assert {ev.id for ev in shown} == {ev.id for ev in evaluations if ev.employee_id in ids}


def test_filter_is_deterministic(employees):
    evaluations = [make_evaluation("v1", "a"), make_evaluation("v2", "b")]
    first = visible_employees(employees, ENG, Screen.TEAM)
    second = visible_employees(employees, ENG, Screen.TEAM)
    assert first == second
    assert visible_evaluations(evaluations, first) == visible_evaluations(evaluations, second)


def test_resolve_screen_redirects_members_away_from_admin():
    assert resolve_screen(ENG, Screen.ADMIN) == Screen.DASHBOARD
    assert resolve_screen(None, Screen.ADMIN) == Screen.DASHBOARD
    assert resolve_screen(ENG_ADMIN, Screen.ADMIN) == Screen.ADMIN
    assert resolve_screen(ENG, Screen.EVALUATE) == Screen.EVALUATE
