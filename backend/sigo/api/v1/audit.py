from datetime import date, datetime, time, timedelta, timezone

from fastapi import APIRouter
from sqlalchemy import select, func

from sigo.api.deps import DB, Pagination
from sigo.models.audit import AuditLog
from sigo.schemas.common import AuditLogOut, Page

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=Page[AuditLogOut])
async def list_audit_log(
    db: DB,
    paging: Pagination,
    table: str | None = None,
    user: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
):
    page, limit = paging
    conditions = []
    if table:
        conditions.append(AuditLog.table_name == table)
    if user:
        conditions.append(AuditLog.user.ilike(f"%{user}%"))
    if date_from:
        conditions.append(AuditLog.created_at >= datetime.combine(date_from, time.min, tzinfo=timezone.utc))
    if date_to:
        # inclusive: up to the end of date_to
        upper = datetime.combine(date_to + timedelta(days=1), time.min, tzinfo=timezone.utc)
        conditions.append(AuditLog.created_at < upper)

    total = (await db.execute(select(func.count(AuditLog.id)).where(*conditions))).scalar_one()
    result = await db.execute(
        select(AuditLog)
        .where(*conditions)
        .order_by(AuditLog.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    items = [AuditLogOut.model_validate(e) for e in result.scalars().all()]
    return Page.build(items, page, limit, total)
