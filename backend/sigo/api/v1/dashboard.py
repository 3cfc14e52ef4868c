"""
Dashboard – strength by operational status, upcoming expirations, alerts.
"""
from datetime import date, timedelta

from fastapi import APIRouter, Query
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from sigo.api.deps import DB
from sigo.core.config import settings
from sigo.models.leave import Leave
from sigo.models.person import Person
from sigo.models.restriction import Restriction
from sigo.schemas.dashboard import (
    AlertsOut, CriticalRestrictionAlert, ExpirationsOut, ExpiringLeave,
    ExpiringRestriction, RankCount, StrengthOut,
)
from sigo.services.operational_status import OperationalStatus, summarize_statuses
from sigo.utils.ranks import military_name, rank_label, rank_order

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _leaves_ending_between(start: date, end: date):
    return select(Leave).where(
        Leave.deleted.is_(False),
        Leave.indeterminate.is_(False),
        Leave.end_date >= start,
        Leave.end_date <= end,
    )


@router.get("/strength", response_model=StrengthOut)
async def strength(db: DB, reference_date: date | None = None):
    result = await db.execute(
        select(Person)
        .options(selectinload(Person.leaves), selectinload(Person.restrictions))
        .where(Person.is_active.is_(True))
    )
    people = result.scalars().all()
    counts = summarize_statuses(people, reference_date)

    rank_result = await db.execute(
        select(Person.rank, func.count(Person.id))
        .where(Person.is_active.is_(True))
        .group_by(Person.rank)
    )
    by_rank = sorted(rank_result.all(), key=lambda row: rank_order(row[0]), reverse=True)

    return StrengthOut(
        total=len(people),
        fit=counts[OperationalStatus.FIT.value],
        fit_with_restriction=counts[OperationalStatus.FIT_WITH_RESTRICTION.value],
        on_leave=counts[OperationalStatus.ON_LEAVE.value],
        by_rank=[RankCount(rank=r, rank_label=rank_label(r), count=c) for r, c in by_rank],
    )


@router.get("/expirations", response_model=ExpirationsOut)
async def expirations(db: DB, days: int = Query(default=settings.EXPIRATION_WINDOW_DAYS, ge=1, le=365)):
    today = date.today()
    limit = today + timedelta(days=days)

    leave_result = await db.execute(
        _leaves_ending_between(today, limit)
        .options(selectinload(Leave.person))
        .order_by(Leave.end_date.asc())
    )
    restriction_result = await db.execute(
        select(Restriction)
        .options(selectinload(Restriction.person))
        .where(
            Restriction.deleted.is_(False),
            Restriction.end_date >= today,
            Restriction.end_date <= limit,
        )
        .order_by(Restriction.end_date.asc())
    )

    return ExpirationsOut(
        leaves=[
            ExpiringLeave(
                id=lv.id,
                military_name=military_name(lv.person.rank, lv.person.war_name),
                type=lv.type,
                end_date=lv.end_date,
                days_remaining=(lv.end_date - today).days,
            )
            for lv in leave_result.scalars().all()
        ],
        restrictions=[
            ExpiringRestriction(
                id=r.id,
                military_name=military_name(r.person.rank, r.person.war_name),
                codes=r.codes,
                end_date=r.end_date,
                days_remaining=(r.end_date - today).days,
                critical=r.has_critical,
            )
            for r in restriction_result.scalars().all()
        ],
    )


@router.get("/alerts", response_model=AlertsOut)
async def alerts(db: DB):
    today = date.today()

    critical_result = await db.execute(
        select(Restriction)
        .options(selectinload(Restriction.person))
        .where(
            Restriction.deleted.is_(False),
            Restriction.has_critical.is_(True),
            Restriction.start_date <= today,
            Restriction.end_date >= today,
        )
        .order_by(Restriction.end_date.asc())
    )
    critical = [
        CriticalRestrictionAlert(
            id=r.id,
            military_name=military_name(r.person.rank, r.person.war_name),
            re=r.person.re,
            codes=r.codes,
            end_date=r.end_date,
        )
        for r in critical_result.scalars().all()
    ]

    expiring_query = _leaves_ending_between(today, today + timedelta(days=settings.EXPIRATION_WINDOW_DAYS))
    leaves_expiring = (
        await db.execute(select(func.count()).select_from(expiring_query.subquery()))
    ).scalar_one()

    return AlertsOut(
        critical_restrictions=critical,
        leaves_expiring=leaves_expiring,
        total_alerts=len(critical) + (1 if leaves_expiring else 0),
    )
