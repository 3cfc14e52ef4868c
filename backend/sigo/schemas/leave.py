import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from sigo.utils.leave_types import LEAVE_TYPE_IDS


def _check_type(v: str | None) -> str | None:
    if v is not None and v not in LEAVE_TYPE_IDS:
        raise ValueError(f"Tipo de afastamento inválido: {v}")
    return v


class LeaveCreate(BaseModel):
    person_id: uuid.UUID
    type: str
    start_date: date
    end_date: date | None = None
    indeterminate: bool = False
    document: str | None = Field(default=None, max_length=100)
    notes: str | None = None

    @field_validator("type")
    @classmethod
    def type_in_catalog(cls, v: str) -> str:
        return _check_type(v)


class LeaveUpdate(BaseModel):
    type: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    indeterminate: bool | None = None
    document: str | None = Field(default=None, max_length=100)
    notes: str | None = None

    @field_validator("type")
    @classmethod
    def type_in_catalog(cls, v: str | None) -> str | None:
        return _check_type(v)


class LeaveOut(BaseModel):
    id: uuid.UUID
    person_id: uuid.UUID
    type: str
    start_date: date
    end_date: date | None
    indeterminate: bool
    counts_toward_service: bool
    document: str | None
    notes: str | None
    created_by: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class LeaveListItem(LeaveOut):
    military_name: str


class LeaveWriteOut(LeaveOut):
    warnings: list[str] = []
