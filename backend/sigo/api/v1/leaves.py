"""
Leaves (afastamentos) – overlap-checked writes, soft delete.

The overlap check and the commit run under a per-person lock so that two
concurrent requests for the same person cannot both pass the check.
"""
import logging
import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select, func, or_
from sqlalchemy.orm import selectinload

from sigo.api.deps import DB, CurrentActor, Pagination
from sigo.api.v1.personnel import get_person_or_404
from sigo.core.exceptions import LeaveConflictError
from sigo.core.locks import person_lock
from sigo.models.leave import Leave
from sigo.schemas.common import Page
from sigo.schemas.leave import LeaveCreate, LeaveUpdate, LeaveOut, LeaveListItem, LeaveWriteOut
from sigo.services import audit_service
from sigo.services.leave_overlap import LeaveInterval, ensure_no_leave_conflict, validate_leave_interval
from sigo.utils.leave_types import career_impact_warnings, counts_toward_service
from sigo.utils.ranks import military_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leaves", tags=["leaves"])


def _active_on(reference_date: date):
    return [
        Leave.start_date <= reference_date,
        or_(
            Leave.end_date >= reference_date,
            Leave.end_date.is_(None),
            Leave.indeterminate.is_(True),
        ),
    ]


async def _other_leaves(db, person_id: uuid.UUID) -> list[Leave]:
    result = await db.execute(
        select(Leave).where(Leave.person_id == person_id, Leave.deleted.is_(False))
    )
    return list(result.scalars().all())


async def _check_overlap(db, person_id: uuid.UUID, interval: LeaveInterval, exclude_id=None) -> None:
    try:
        ensure_no_leave_conflict(interval, await _other_leaves(db, person_id), exclude_id=exclude_id)
    except LeaveConflictError as exc:
        logger.info(
            "leave conflict for person %s: %s..%s overlaps leave %s",
            person_id, interval.start_date, interval.end_date, exc.conflict.id,
        )
        # Serialized now: the session is rolled back before the 409 is rendered
        raise LeaveConflictError(LeaveOut.model_validate(exc.conflict)) from None


async def get_leave_or_404(db, leave_id: uuid.UUID) -> Leave:
    result = await db.execute(
        select(Leave).where(Leave.id == leave_id, Leave.deleted.is_(False))
    )
    leave = result.scalar_one_or_none()
    if leave is None:
        raise HTTPException(status_code=404, detail="Afastamento não encontrado")
    return leave


@router.get("", response_model=Page[LeaveListItem])
async def list_leaves(
    db: DB,
    paging: Pagination,
    person_id: uuid.UUID | None = None,
    type: str | None = None,
    active: bool = False,
):
    page, limit = paging
    conditions = [Leave.deleted.is_(False)]
    if person_id:
        conditions.append(Leave.person_id == person_id)
    if type:
        conditions.append(Leave.type == type)
    if active:
        conditions.extend(_active_on(date.today()))

    total = (await db.execute(select(func.count(Leave.id)).where(*conditions))).scalar_one()
    result = await db.execute(
        select(Leave)
        .options(selectinload(Leave.person))
        .where(*conditions)
        .order_by(Leave.start_date.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    items = [
        LeaveListItem(
            **LeaveOut.model_validate(lv).model_dump(),
            military_name=military_name(lv.person.rank, lv.person.war_name),
        )
        for lv in result.scalars().all()
    ]
    return Page.build(items, page, limit, total)


@router.get("/{leave_id}", response_model=LeaveOut)
async def get_leave(leave_id: uuid.UUID, db: DB):
    return await get_leave_or_404(db, leave_id)


@router.post("", response_model=LeaveWriteOut, status_code=status.HTTP_201_CREATED)
async def create_leave(payload: LeaveCreate, actor: CurrentActor, db: DB):
    validate_leave_interval(payload.start_date, payload.end_date, payload.indeterminate)

    async with person_lock(payload.person_id):
        await get_person_or_404(db, payload.person_id, for_update=True)
        await _check_overlap(
            db, payload.person_id,
            LeaveInterval(payload.start_date, payload.end_date, payload.indeterminate),
        )

        leave = Leave(
            **payload.model_dump(),
            counts_toward_service=counts_toward_service(payload.type),
            created_by=actor.user,
        )
        db.add(leave)
        await audit_service.audit_change(
            db, leave, "leaves", audit_service.CREATE, None, actor.user, actor.ip,
        )
        await db.commit()

    await db.refresh(leave)
    return LeaveWriteOut(
        **LeaveOut.model_validate(leave).model_dump(),
        warnings=career_impact_warnings(leave.type),
    )


@router.put("/{leave_id}", response_model=LeaveWriteOut)
async def update_leave(leave_id: uuid.UUID, payload: LeaveUpdate, actor: CurrentActor, db: DB):
    leave = await get_leave_or_404(db, leave_id)
    changes = payload.model_dump(exclude_unset=True)

    start_date = changes.get("start_date") or leave.start_date
    end_date = changes["end_date"] if "end_date" in changes else leave.end_date
    indeterminate = changes["indeterminate"] if changes.get("indeterminate") is not None else leave.indeterminate
    validate_leave_interval(start_date, end_date, indeterminate)

    async with person_lock(leave.person_id):
        await get_person_or_404(db, leave.person_id, for_update=True)
        if changes.keys() & {"start_date", "end_date", "indeterminate"}:
            await _check_overlap(
                db, leave.person_id,
                LeaveInterval(start_date, end_date, indeterminate),
                exclude_id=leave.id,
            )

        before = audit_service.snapshot(leave)
        for field, value in changes.items():
            if value is None and field in ("type", "start_date", "indeterminate"):
                continue
            setattr(leave, field, value)
        leave.counts_toward_service = counts_toward_service(leave.type)

        await audit_service.audit_change(
            db, leave, "leaves", audit_service.UPDATE, before, actor.user, actor.ip,
        )
        await db.commit()

    await db.refresh(leave)
    return LeaveWriteOut(
        **LeaveOut.model_validate(leave).model_dump(),
        warnings=career_impact_warnings(leave.type) if "type" in changes else [],
    )


@router.delete("/{leave_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave(leave_id: uuid.UUID, actor: CurrentActor, db: DB):
    """Soft delete (cancellation) – the record stays for the audit trail."""
    leave = await get_leave_or_404(db, leave_id)
    before = audit_service.snapshot(leave)
    leave.deleted = True
    await audit_service.audit_change(
        db, leave, "leaves", audit_service.DELETE, before, actor.user, actor.ip,
    )
    await db.commit()
