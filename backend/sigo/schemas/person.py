import uuid
from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from sigo.schemas.leave import LeaveOut
from sigo.schemas.restriction import RestrictionOut
from sigo.services.operational_status import OperationalStatus
from sigo.utils.ranks import RANKS


def _check_rank(v: str | None) -> str | None:
    if v is not None and v not in RANKS:
        raise ValueError(f"Posto/graduação inválido: {v}")
    return v


class PersonCreate(BaseModel):
    re: str = Field(min_length=1, max_length=20)
    check_digit: str | None = Field(default=None, max_length=2)
    full_name: str = Field(min_length=3, max_length=200)
    war_name: str = Field(min_length=2, max_length=100)
    rank: str
    function: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    subunit: str | None = Field(default=None, max_length=100)
    inclusion_date: date | None = None
    birth_date: date | None = None

    @field_validator("rank")
    @classmethod
    def rank_in_catalog(cls, v: str) -> str:
        return _check_rank(v)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v):
        return v or None


class PersonUpdate(BaseModel):
    re: str | None = Field(default=None, min_length=1, max_length=20)
    check_digit: str | None = Field(default=None, max_length=2)
    full_name: str | None = Field(default=None, min_length=3, max_length=200)
    war_name: str | None = Field(default=None, min_length=2, max_length=100)
    rank: str | None = None
    function: str | None = Field(default=None, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    subunit: str | None = Field(default=None, max_length=100)
    inclusion_date: date | None = None
    birth_date: date | None = None
    is_active: bool | None = None

    @field_validator("rank")
    @classmethod
    def rank_in_catalog(cls, v: str | None) -> str | None:
        return _check_rank(v)

    @field_validator("email", mode="before")
    @classmethod
    def empty_email_is_none(cls, v):
        return v or None


class PersonOut(BaseModel):
    id: uuid.UUID
    re: str
    check_digit: str | None
    full_name: str
    war_name: str
    rank: str
    function: str | None
    email: str | None
    phone: str | None
    subunit: str | None
    inclusion_date: date | None
    birth_date: date | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class PersonStatusOut(PersonOut):
    """Person as shown in lists: with derived status and display label."""
    rank_label: str
    operational_status: OperationalStatus


class PersonDetailOut(PersonStatusOut):
    leaves: list[LeaveOut] = []
    restrictions: list[RestrictionOut] = []
