"""
Personnel (P/1) – CRUD with derived operational status.
"""
import uuid
from datetime import date

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select, or_
from sqlalchemy.orm import selectinload

from sigo.api.deps import DB, CurrentActor, Pagination
from sigo.models.person import Person
from sigo.schemas.common import Page
from sigo.schemas.person import (
    PersonCreate, PersonUpdate, PersonOut, PersonStatusOut, PersonDetailOut,
)
from sigo.schemas.leave import LeaveOut
from sigo.schemas.restriction import RestrictionOut
from sigo.services import audit_service
from sigo.services.operational_status import OperationalStatus, resolve_operational_status
from sigo.utils.ranks import rank_label, rank_order

router = APIRouter(prefix="/personnel", tags=["personnel"])


def _live_leaves(person: Person) -> list:
    return sorted((lv for lv in person.leaves if not lv.deleted), key=lambda lv: lv.start_date, reverse=True)


def _live_restrictions(person: Person) -> list:
    return sorted((r for r in person.restrictions if not r.deleted), key=lambda r: r.end_date, reverse=True)


def with_status(person: Person, reference_date: date | None = None) -> PersonStatusOut:
    status_ = resolve_operational_status(reference_date, person.restrictions, person.leaves)
    return PersonStatusOut(
        **PersonOut.model_validate(person).model_dump(),
        rank_label=rank_label(person.rank),
        operational_status=status_,
    )


async def get_person_or_404(db, person_id: uuid.UUID, *, for_update: bool = False) -> Person:
    query = select(Person).where(Person.id == person_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    person = result.scalar_one_or_none()
    if person is None:
        raise HTTPException(status_code=404, detail="Policial não encontrado")
    return person


@router.get("", response_model=Page[PersonStatusOut])
async def list_personnel(
    db: DB,
    paging: Pagination,
    search: str | None = None,
    rank: str | None = None,
    subunit: str | None = None,
    status: OperationalStatus | None = None,
    active: bool = True,
):
    page, limit = paging
    query = select(Person).where(Person.is_active == active)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            Person.full_name.ilike(pattern),
            Person.war_name.ilike(pattern),
            Person.re.contains(search),
        ))
    if rank:
        query = query.where(Person.rank == rank)
    if subunit:
        query = query.where(Person.subunit == subunit)

    query = query.options(selectinload(Person.leaves), selectinload(Person.restrictions))
    result = await db.execute(query)
    people = sorted(result.scalars().all(), key=lambda p: (-rank_order(p.rank), p.war_name))

    items = [with_status(p) for p in people]
    # Status is derived, so the filter runs after resolution rather than in SQL
    if status is not None:
        items = [i for i in items if i.operational_status == status]

    total = len(items)
    start = (page - 1) * limit
    return Page.build(items[start:start + limit], page, limit, total)


@router.get("/{person_id}", response_model=PersonDetailOut)
async def get_person(person_id: uuid.UUID, db: DB):
    result = await db.execute(
        select(Person)
        .options(selectinload(Person.leaves), selectinload(Person.restrictions))
        .where(Person.id == person_id)
    )
    person = result.scalar_one_or_none()
    if person is None:
        raise HTTPException(status_code=404, detail="Policial não encontrado")

    return PersonDetailOut(
        **with_status(person).model_dump(),
        leaves=[LeaveOut.model_validate(lv) for lv in _live_leaves(person)],
        restrictions=[RestrictionOut.model_validate(r) for r in _live_restrictions(person)],
    )


@router.post("", response_model=PersonOut, status_code=status.HTTP_201_CREATED)
async def create_person(payload: PersonCreate, actor: CurrentActor, db: DB):
    existing = await db.execute(select(Person.id).where(Person.re == payload.re))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="RE já cadastrado no sistema")

    person = Person(**payload.model_dump(), created_by=actor.user)
    db.add(person)
    await audit_service.audit_change(
        db, person, "personnel", audit_service.CREATE, None, actor.user, actor.ip,
    )
    await db.commit()
    await db.refresh(person)
    return person


@router.put("/{person_id}", response_model=PersonOut)
async def update_person(person_id: uuid.UUID, payload: PersonUpdate, actor: CurrentActor, db: DB):
    person = await get_person_or_404(db, person_id)
    before = audit_service.snapshot(person)

    changes = payload.model_dump(exclude_unset=True)
    if "re" in changes and changes["re"] != person.re:
        clash = await db.execute(select(Person.id).where(Person.re == changes["re"]))
        if clash.scalar_one_or_none() is not None:
            raise HTTPException(status_code=409, detail="RE já cadastrado no sistema")

    for field, value in changes.items():
        setattr(person, field, value)

    await audit_service.audit_change(
        db, person, "personnel", audit_service.UPDATE, before, actor.user, actor.ip,
    )
    await db.commit()
    await db.refresh(person)
    return person


@router.delete("/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_person(person_id: uuid.UUID, actor: CurrentActor, db: DB):
    """Soft delete – personnel records are never removed."""
    person = await get_person_or_404(db, person_id)
    before = audit_service.snapshot(person)
    person.is_active = False
    await audit_service.audit_change(
        db, person, "personnel", audit_service.DELETE, before, actor.user, actor.ip,
    )
    await db.commit()


@router.get("/{person_id}/status", response_model=OperationalStatus)
async def get_person_status(person_id: uuid.UUID, db: DB, reference_date: date | None = None):
    """Operational status as of reference_date (default: today)."""
    result = await db.execute(
        select(Person)
        .options(selectinload(Person.leaves), selectinload(Person.restrictions))
        .where(Person.id == person_id)
    )
    person = result.scalar_one_or_none()
    if person is None:
        raise HTTPException(status_code=404, detail="Policial não encontrado")
    return resolve_operational_status(reference_date, person.restrictions, person.leaves)
