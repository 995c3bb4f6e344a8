"""
Bed candidate selection

Filtering and ordering of the bed registry for one target date. Everything
here is pure: callers pass in the snapshot they read from storage.
"""

from typing import Callable, Iterable, List, Set
import enum

from bed_planner.domain.beds.models import Bed, BedStatus
from bed_planner.domain.patients.models import Patient


BedOrder = Callable[[Bed], object]


def by_code(bed: Bed):
    """Tie-break key: lexicographic bed code, then id for duplicate codes"""
    return (bed.code, bed.id)


BED_CODE_ORDER: BedOrder = by_code


class IsolationPolicy(str, enum.Enum):
    """How a patient's isolation requirement restricts the candidates"""
    STRICT = "strict"        # isolation-capable beds only
    PREFERRED = "preferred"  # isolation-capable beds first, others as fallback
    IGNORE = "ignore"        # flag not consulted


def eligible_beds(
    all_beds: Iterable[Bed],
    occupied_bed_ids: Set[str],
    order: BedOrder = BED_CODE_ORDER
) -> List[Bed]:
    """Available beds not held by an active stay, in tie-break order"""
    candidates = [
        bed for bed in all_beds
        if bed.status == BedStatus.AVAILABLE and bed.id not in occupied_bed_ids
    ]
    return sorted(candidates, key=order)


def apply_isolation_policy(
    candidates: List[Bed],
    patient: Patient,
    policy: IsolationPolicy = IsolationPolicy.STRICT
) -> List[Bed]:
    """Restrict or reorder ordered candidates for the patient; relative order is kept"""
    if not patient.isolation_required or policy == IsolationPolicy.IGNORE:
        return list(candidates)

    capable = [bed for bed in candidates if bed.isolation_capable]
    if policy == IsolationPolicy.STRICT:
        return capable

    others = [bed for bed in candidates if not bed.isolation_capable]
    return capable + others
