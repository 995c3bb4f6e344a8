# Hospital stays domain module
from bed_planner.domain.stays.models import (
    HospitalStay,
    HospitalStayRecord,
    StayState,
    StayType,
)
from bed_planner.domain.stays.activity import is_active_on, occupied_bed_ids

__all__ = [
    "HospitalStay",
    "HospitalStayRecord",
    "StayState",
    "StayType",
    "is_active_on",
    "occupied_bed_ids",
]
