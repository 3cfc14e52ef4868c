"""
Testes da validação de sobreposição de afastamentos.
Intervalos fechados nos dois extremos; afastamentos indeterminados sem fim.
"""
import uuid
from datetime import date
from types import SimpleNamespace

import pytest

from sigo.core.exceptions import InvalidIntervalError, LeaveConflictError
from sigo.services.leave_overlap import (
    LeaveInterval,
    ensure_no_leave_conflict,
    find_leave_conflict,
    intervals_overlap,
    validate_leave_interval,
)


# ── Stubs ─────────────────────────────────────────────────────────────────────

def make_leave(start: date, end: date | None, indeterminate: bool = False, type: str = "FERIAS"):
    return SimpleNamespace(
        id=uuid.uuid4(),
        type=type,
        start_date=start,
        end_date=end,
        indeterminate=indeterminate,
    )


# ── Intervalos fechados ───────────────────────────────────────────────────────

def test_shared_boundary_day_conflicts():
    existing = make_leave(date(2026, 3, 1), date(2026, 3, 10))
    proposed = LeaveInterval(date(2026, 3, 10), date(2026, 3, 20))
    assert find_leave_conflict(proposed, [existing]) is existing


def test_adjacent_intervals_do_not_conflict():
    existing = make_leave(date(2026, 3, 1), date(2026, 3, 10))
    proposed = LeaveInterval(date(2026, 3, 11), date(2026, 3, 20))
    assert find_leave_conflict(proposed, [existing]) is None


def test_contained_interval_conflicts():
    existing = make_leave(date(2026, 3, 1), date(2026, 3, 31))
    proposed = LeaveInterval(date(2026, 3, 5), date(2026, 3, 6))
    assert find_leave_conflict(proposed, [existing]) is existing


def test_single_day_leaves_same_day_conflict():
    existing = make_leave(date(2026, 3, 5), date(2026, 3, 5))
    proposed = LeaveInterval(date(2026, 3, 5), date(2026, 3, 5))
    assert intervals_overlap(proposed, existing)


# ── Indeterminados ────────────────────────────────────────────────────────────

def test_indeterminate_proposed_conflicts_with_later_leave():
    existing = make_leave(date(2026, 4, 1), date(2026, 4, 10))
    proposed = LeaveInterval(date(2026, 3, 1), None, indeterminate=True)
    assert find_leave_conflict(proposed, [existing]) is existing


def test_indeterminate_proposed_after_finished_leave_is_free():
    existing = make_leave(date(2026, 2, 1), date(2026, 2, 28))
    proposed = LeaveInterval(date(2026, 3, 1), None, indeterminate=True)
    assert find_leave_conflict(proposed, [existing]) is None


def test_indeterminate_existing_blocks_later_bounded_leave():
    existing = make_leave(date(2026, 3, 1), None, indeterminate=True)
    proposed = LeaveInterval(date(2026, 4, 1), date(2026, 4, 10))
    assert find_leave_conflict(proposed, [existing]) is existing


def test_indeterminate_existing_allows_earlier_bounded_leave():
    existing = make_leave(date(2026, 3, 1), None, indeterminate=True)
    proposed = LeaveInterval(date(2026, 2, 1), date(2026, 2, 28))
    assert find_leave_conflict(proposed, [existing]) is None


def test_two_indeterminate_leaves_always_conflict():
    existing = make_leave(date(2030, 1, 1), None, indeterminate=True)
    proposed = LeaveInterval(date(2026, 1, 1), None, indeterminate=True)
    assert intervals_overlap(proposed, existing)


def test_indeterminate_ignores_recorded_end_date():
    """Um afastamento indeterminado com data fim registrada continua sem fim."""
    existing = make_leave(date(2026, 3, 1), date(2026, 3, 5), indeterminate=True)
    proposed = LeaveInterval(date(2026, 6, 1), date(2026, 6, 10))
    assert find_leave_conflict(proposed, [existing]) is existing


@pytest.mark.parametrize("a, b", [
    (LeaveInterval(date(2026, 3, 1), None, True), LeaveInterval(date(2026, 4, 1), date(2026, 4, 10))),
    (LeaveInterval(date(2026, 3, 1), None, True), LeaveInterval(date(2026, 2, 1), date(2026, 2, 28))),
    (LeaveInterval(date(2026, 3, 1), date(2026, 3, 10)), LeaveInterval(date(2026, 3, 10), date(2026, 3, 12))),
    (LeaveInterval(date(2026, 3, 1), date(2026, 3, 10)), LeaveInterval(date(2026, 3, 11), date(2026, 3, 12))),
    (LeaveInterval(date(2026, 3, 1), date(2026, 3, 5), True), LeaveInterval(date(2026, 6, 1), date(2026, 6, 2))),
])
def test_overlap_is_symmetric(a, b):
    assert intervals_overlap(a, b) == intervals_overlap(b, a)


# ── Busca ─────────────────────────────────────────────────────────────────────

def test_exclude_id_skips_the_leave_being_edited():
    existing = make_leave(date(2026, 3, 1), date(2026, 3, 10))
    proposed = LeaveInterval(date(2026, 3, 2), date(2026, 3, 12))
    assert find_leave_conflict(proposed, [existing], exclude_id=existing.id) is None


def test_first_conflict_in_caller_order_is_returned():
    first = make_leave(date(2026, 3, 1), date(2026, 3, 10))
    second = make_leave(date(2026, 3, 11), date(2026, 3, 20))
    proposed = LeaveInterval(date(2026, 3, 5), date(2026, 3, 15))
    assert find_leave_conflict(proposed, [second, first]) is second


def test_no_existing_leaves():
    assert find_leave_conflict(LeaveInterval(date(2026, 3, 1), date(2026, 3, 2)), []) is None


def test_ensure_no_leave_conflict_raises_with_context():
    existing = make_leave(date(2026, 3, 1), date(2026, 3, 10), type="LTS")
    with pytest.raises(LeaveConflictError) as exc_info:
        ensure_no_leave_conflict(LeaveInterval(date(2026, 3, 10), date(2026, 3, 12)), [existing])
    assert exc_info.value.conflict is existing
    assert "Tipo: LTS" in str(exc_info.value)
    assert "01/03/2026" in str(exc_info.value)


# ── Validação do intervalo ────────────────────────────────────────────────────

def test_bounded_leave_requires_end_date():
    with pytest.raises(InvalidIntervalError):
        validate_leave_interval(date(2026, 3, 1), None, indeterminate=False)


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidIntervalError):
        validate_leave_interval(date(2026, 3, 10), date(2026, 3, 1), indeterminate=False)


def test_indeterminate_without_end_is_valid():
    validate_leave_interval(date(2026, 3, 1), None, indeterminate=True)


def test_same_day_leave_is_valid():
    validate_leave_interval(date(2026, 3, 1), date(2026, 3, 1), indeterminate=False)
