import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator


class RestrictionCreate(BaseModel):
    person_id: uuid.UUID
    # Codes are validated by the rule engine so every unknown code is reported at once
    codes: list[str] = Field(min_length=1, max_length=20)
    start_date: date
    end_date: date
    document: str = Field(min_length=1, max_length=100)
    medical_opinion: str | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end_date < self.start_date:
            raise ValueError("Data fim anterior à data início")
        return self


class RestrictionUpdate(BaseModel):
    codes: list[str] | None = Field(default=None, min_length=1, max_length=20)
    start_date: date | None = None
    end_date: date | None = None
    document: str | None = Field(default=None, min_length=1, max_length=100)
    medical_opinion: str | None = None
    notes: str | None = None


class RestrictionOut(BaseModel):
    id: uuid.UUID
    person_id: uuid.UUID
    codes: list[str]
    has_critical: bool
    medical_opinion: str | None
    start_date: date
    end_date: date
    document: str
    notes: str | None
    created_by: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class RestrictionListItem(RestrictionOut):
    military_name: str


class RestrictionWriteOut(RestrictionOut):
    warnings: list[str] = []
