"""
Medical restrictions – codes are canonicalized by the rule engine before
every write (SE ⇒ UU, critical flag).
"""
import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from sigo.api.deps import DB, CurrentActor, Pagination
from sigo.api.v1.personnel import get_person_or_404
from sigo.core.exceptions import InvalidIntervalError
from sigo.models.restriction import Restriction
from sigo.schemas.common import Page
from sigo.schemas.restriction import (
    RestrictionCreate, RestrictionUpdate, RestrictionOut, RestrictionListItem, RestrictionWriteOut,
)
from sigo.services import audit_service
from sigo.services.restriction_rules import apply_restriction_rules, medical_opinion_warnings
from sigo.utils.ranks import military_name

router = APIRouter(prefix="/restrictions", tags=["restrictions"])


async def get_restriction_or_404(db, restriction_id: uuid.UUID) -> Restriction:
    result = await db.execute(
        select(Restriction).where(Restriction.id == restriction_id, Restriction.deleted.is_(False))
    )
    restriction = result.scalar_one_or_none()
    if restriction is None:
        raise HTTPException(status_code=404, detail="Restrição não encontrada")
    return restriction


@router.get("", response_model=Page[RestrictionListItem])
async def list_restrictions(
    db: DB,
    paging: Pagination,
    person_id: uuid.UUID | None = None,
    active: bool = False,
    critical: bool = False,
):
    page, limit = paging
    today = date.today()
    conditions = [Restriction.deleted.is_(False)]
    if person_id:
        conditions.append(Restriction.person_id == person_id)
    if critical:
        conditions.append(Restriction.has_critical.is_(True))
    if active:
        conditions += [Restriction.start_date <= today, Restriction.end_date >= today]

    total = (await db.execute(select(func.count(Restriction.id)).where(*conditions))).scalar_one()
    result = await db.execute(
        select(Restriction)
        .options(selectinload(Restriction.person))
        .where(*conditions)
        .order_by(Restriction.end_date.asc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    items = [
        RestrictionListItem(
            **RestrictionOut.model_validate(r).model_dump(),
            military_name=military_name(r.person.rank, r.person.war_name),
        )
        for r in result.scalars().all()
    ]
    return Page.build(items, page, limit, total)


@router.get("/{restriction_id}", response_model=RestrictionOut)
async def get_restriction(restriction_id: uuid.UUID, db: DB):
    return await get_restriction_or_404(db, restriction_id)


@router.post("", response_model=RestrictionWriteOut, status_code=status.HTTP_201_CREATED)
async def create_restriction(payload: RestrictionCreate, actor: CurrentActor, db: DB):
    await get_person_or_404(db, payload.person_id)

    rules = apply_restriction_rules(payload.codes)
    warnings = rules.warnings + medical_opinion_warnings(payload.medical_opinion)

    data = payload.model_dump(exclude={"codes"})
    restriction = Restriction(
        **data,
        codes=rules.canonical_codes,
        has_critical=rules.has_critical,
        created_by=actor.user,
    )
    db.add(restriction)
    await audit_service.audit_change(
        db, restriction, "restrictions", audit_service.CREATE, None, actor.user, actor.ip,
    )
    await db.commit()
    await db.refresh(restriction)
    return RestrictionWriteOut(**RestrictionOut.model_validate(restriction).model_dump(), warnings=warnings)


@router.put("/{restriction_id}", response_model=RestrictionWriteOut)
async def update_restriction(
    restriction_id: uuid.UUID, payload: RestrictionUpdate, actor: CurrentActor, db: DB
):
    restriction = await get_restriction_or_404(db, restriction_id)
    changes = payload.model_dump(exclude_unset=True)
    warnings: list[str] = []

    start_date = changes.get("start_date") or restriction.start_date
    end_date = changes.get("end_date") or restriction.end_date
    if end_date < start_date:
        raise InvalidIntervalError("Data fim anterior à data início")

    before = audit_service.snapshot(restriction)

    codes = changes.pop("codes", None)
    if codes is not None:
        rules = apply_restriction_rules(codes)
        restriction.codes = rules.canonical_codes
        restriction.has_critical = rules.has_critical
        warnings += rules.warnings
    if changes.get("medical_opinion"):
        warnings += medical_opinion_warnings(changes["medical_opinion"])

    for field, value in changes.items():
        if value is None and field in ("start_date", "end_date", "document"):
            continue
        setattr(restriction, field, value)

    await audit_service.audit_change(
        db, restriction, "restrictions", audit_service.UPDATE, before, actor.user, actor.ip,
    )
    await db.commit()
    await db.refresh(restriction)
    return RestrictionWriteOut(**RestrictionOut.model_validate(restriction).model_dump(), warnings=warnings)


@router.delete("/{restriction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restriction(restriction_id: uuid.UUID, actor: CurrentActor, db: DB):
    restriction = await get_restriction_or_404(db, restriction_id)
    before = audit_service.snapshot(restriction)
    restriction.deleted = True
    await audit_service.audit_change(
        db, restriction, "restrictions", audit_service.DELETE, before, actor.user, actor.ip,
    )
    await db.commit()
