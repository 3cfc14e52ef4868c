"""
Audit trail: every create/update/soft-delete of personnel, leaves and
restrictions is recorded with the before/after snapshot of the row.
The entry is added to the caller's session and committed together with the change.
"""
import logging
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from sigo.models.audit import AuditLog

logger = logging.getLogger(__name__)

CREATE = "CREATE"
UPDATE = "UPDATE"
DELETE = "DELETE"


def _json_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (list, tuple)):
        return [_json_value(v) for v in value]
    return value


def snapshot(obj: Any) -> dict[str, Any]:
    """Column values of an ORM instance as a JSON-serializable dict."""
    mapper = inspect(obj).mapper
    return {
        attr.key: _json_value(getattr(obj, attr.key))
        for attr in mapper.column_attrs
    }


def record_audit(
    db: AsyncSession,
    table_name: str,
    record_id: uuid.UUID | None,
    action: str,
    old_values: dict[str, Any] | None,
    new_values: dict[str, Any] | None,
    user: str,
    ip_address: str | None = None,
) -> AuditLog:
    entry = AuditLog(
        table_name=table_name,
        record_id=record_id,
        action=action,
        old_values=old_values,
        new_values=new_values,
        user=user,
        ip_address=ip_address,
    )
    db.add(entry)
    logger.info("audit %s %s %s by %s", action, table_name, record_id, user)
    return entry


async def audit_change(
    db: AsyncSession,
    obj: Any,
    table_name: str,
    action: str,
    before: dict[str, Any] | None,
    user: str,
    ip_address: str | None = None,
) -> AuditLog:
    """Flush the pending change, reload the row and record the before/after snapshot."""
    await db.flush()
    await db.refresh(obj)
    return record_audit(db, table_name, obj.id, action, before, snapshot(obj), user, ip_address)
