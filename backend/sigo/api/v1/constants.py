from fastapi import APIRouter

from sigo.utils.leave_types import LEAVE_TYPES, NON_SERVICE_LEAVE_TYPES
from sigo.utils.ranks import RANKS, rank_label
from sigo.utils.restriction_codes import CRITICAL_CODES, RESTRICTION_CODES

router = APIRouter(prefix="/constants", tags=["constants"])


@router.get("")
async def get_constants():
    """Static catalogs for the frontend forms."""
    return {
        "ranks": [{"value": r, "label": rank_label(r)} for r in RANKS],
        "leave_types": [t._asdict() for t in LEAVE_TYPES.values()],
        "non_service_leave_types": sorted(NON_SERVICE_LEAVE_TYPES),
        "restriction_codes": [c._asdict() for c in RESTRICTION_CODES.values()],
        "critical_codes": sorted(CRITICAL_CODES),
    }
