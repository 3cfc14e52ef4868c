from sigo.models.person import Person
from sigo.models.leave import Leave
from sigo.models.restriction import Restriction
from sigo.models.audit import AuditLog

__all__ = [
    "Person",
    "Leave",
    "Restriction",
    "AuditLog",
]
