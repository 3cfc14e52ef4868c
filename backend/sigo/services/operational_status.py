"""
Operational status of a person, derived on every read from the active
leaves and restrictions. Never stored.

Precedence: ON_LEAVE > FIT_WITH_RESTRICTION > FIT.
"""
from __future__ import annotations

import enum
from collections import Counter
from datetime import date
from typing import Any, Iterable


class OperationalStatus(str, enum.Enum):
    FIT = "FIT"
    FIT_WITH_RESTRICTION = "FIT_WITH_RESTRICTION"
    ON_LEAVE = "ON_LEAVE"


def _not_deleted(items: Iterable[Any] | None) -> list[Any]:
    return [i for i in (items or []) if not getattr(i, "deleted", False)]


def is_leave_active(leave: Any, reference_date: date) -> bool:
    if leave.start_date > reference_date:
        return False
    return leave.indeterminate or leave.end_date is None or leave.end_date >= reference_date


def is_restriction_active(restriction: Any, reference_date: date) -> bool:
    return restriction.start_date <= reference_date <= restriction.end_date


def active_leaves(leaves: Iterable[Any] | None, reference_date: date) -> list[Any]:
    return [lv for lv in _not_deleted(leaves) if is_leave_active(lv, reference_date)]


def active_restrictions(restrictions: Iterable[Any] | None, reference_date: date) -> list[Any]:
    return [r for r in _not_deleted(restrictions) if is_restriction_active(r, reference_date)]


def resolve_operational_status(
    reference_date: date | None = None,
    restrictions: Iterable[Any] | None = None,
    leaves: Iterable[Any] | None = None,
) -> OperationalStatus:
    ref = reference_date or date.today()

    if active_leaves(leaves, ref):
        return OperationalStatus.ON_LEAVE
    if active_restrictions(restrictions, ref):
        return OperationalStatus.FIT_WITH_RESTRICTION
    return OperationalStatus.FIT


def summarize_statuses(people: Iterable[Any], reference_date: date | None = None) -> dict[str, int]:
    """Count people per status; every status is present in the result."""
    ref = reference_date or date.today()
    counts = Counter(
        resolve_operational_status(ref, p.restrictions, p.leaves) for p in people
    )
    return {s.value: counts.get(s, 0) for s in OperationalStatus}
