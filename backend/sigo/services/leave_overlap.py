"""
Leave overlap validation.

Bounded intervals are closed on both ends: a leave ending on the day another
starts occupies that day twice and therefore conflicts. Indeterminate leaves
(or leaves without an end date) extend to infinity, so the plain closed-interval
test is not used for them.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Protocol, TypeVar

from sigo.core.exceptions import InvalidIntervalError, LeaveConflictError


class IntervalLike(Protocol):
    start_date: date
    end_date: date | None
    indeterminate: bool


T = TypeVar("T", bound=IntervalLike)


@dataclass(frozen=True)
class LeaveInterval:
    start_date: date
    end_date: date | None = None
    indeterminate: bool = False
    id: Any = None


def _is_open(interval: IntervalLike) -> bool:
    return interval.indeterminate or interval.end_date is None


def _concrete_end(interval: IntervalLike) -> date | None:
    # An indeterminate leave has no right edge even if an end date was recorded
    return None if _is_open(interval) else interval.end_date


def validate_leave_interval(start_date: date, end_date: date | None, indeterminate: bool) -> None:
    if indeterminate:
        if end_date is not None and end_date < start_date:
            raise InvalidIntervalError("Data fim anterior à data início")
        return
    if end_date is None:
        raise InvalidIntervalError("Data fim obrigatória para afastamento não indeterminado")
    if end_date < start_date:
        raise InvalidIntervalError("Data fim anterior à data início")


def intervals_overlap(proposed: IntervalLike, existing: IntervalLike) -> bool:
    if not _is_open(proposed) and not _is_open(existing):
        return not (
            proposed.start_date > existing.end_date
            or existing.start_date > proposed.end_date
        )
    if _is_open(proposed):
        existing_end = _concrete_end(existing)
        return existing_end is None or existing_end >= proposed.start_date
    # existing is open-ended, proposed is bounded
    return proposed.end_date >= existing.start_date


def find_leave_conflict(
    proposed: IntervalLike,
    existing: Iterable[T],
    exclude_id: Any = None,
) -> T | None:
    """
    Return the first existing interval (in caller order) that overlaps the
    proposed one, or None. Records whose id equals exclude_id are skipped so
    a leave being edited never conflicts with itself.
    """
    for item in existing:
        if exclude_id is not None and getattr(item, "id", None) == exclude_id:
            continue
        if intervals_overlap(proposed, item):
            return item
    return None


def ensure_no_leave_conflict(
    proposed: IntervalLike,
    existing: Iterable[T],
    exclude_id: Any = None,
) -> None:
    conflict = find_leave_conflict(proposed, existing, exclude_id)
    if conflict is not None:
        raise LeaveConflictError(conflict)
