import math
import uuid
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, items: list[T], page: int, limit: int, total: int) -> "Page[T]":
        return cls(
            items=items,
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


class AuditLogOut(BaseModel):
    id: uuid.UUID
    table_name: str
    record_id: uuid.UUID | None
    action: str
    old_values: dict[str, Any] | None
    new_values: dict[str, Any] | None
    user: str
    ip_address: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
