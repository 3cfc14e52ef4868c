from sigo.schemas.common import Page, AuditLogOut
from sigo.schemas.leave import LeaveCreate, LeaveUpdate, LeaveOut, LeaveListItem, LeaveWriteOut
from sigo.schemas.restriction import (
    RestrictionCreate, RestrictionUpdate, RestrictionOut, RestrictionListItem, RestrictionWriteOut,
)
from sigo.schemas.person import PersonCreate, PersonUpdate, PersonOut, PersonStatusOut, PersonDetailOut

__all__ = [
    "Page", "AuditLogOut",
    "LeaveCreate", "LeaveUpdate", "LeaveOut", "LeaveListItem", "LeaveWriteOut",
    "RestrictionCreate", "RestrictionUpdate", "RestrictionOut", "RestrictionListItem", "RestrictionWriteOut",
    "PersonCreate", "PersonUpdate", "PersonOut", "PersonStatusOut", "PersonDetailOut",
]
