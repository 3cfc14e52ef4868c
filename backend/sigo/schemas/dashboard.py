import uuid
from datetime import date

from pydantic import BaseModel


class RankCount(BaseModel):
    rank: str
    rank_label: str
    count: int


class StrengthOut(BaseModel):
    total: int
    fit: int
    fit_with_restriction: int
    on_leave: int
    by_rank: list[RankCount]


class ExpiringLeave(BaseModel):
    id: uuid.UUID
    military_name: str
    type: str
    end_date: date
    days_remaining: int


class ExpiringRestriction(BaseModel):
    id: uuid.UUID
    military_name: str
    codes: list[str]
    end_date: date
    days_remaining: int
    critical: bool


class ExpirationsOut(BaseModel):
    leaves: list[ExpiringLeave]
    restrictions: list[ExpiringRestriction]


class CriticalRestrictionAlert(BaseModel):
    id: uuid.UUID
    military_name: str
    re: str
    codes: list[str]
    end_date: date


class AlertsOut(BaseModel):
    critical_restrictions: list[CriticalRestrictionAlert]
    leaves_expiring: int
    total_alerts: int
