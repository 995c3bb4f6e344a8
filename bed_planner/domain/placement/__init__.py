# Bed allocation engine
from bed_planner.domain.placement.candidates import (
    BED_CODE_ORDER,
    IsolationPolicy,
    apply_isolation_policy,
    by_code,
    eligible_beds,
)

__all__ = [
    "BED_CODE_ORDER",
    "IsolationPolicy",
    "apply_isolation_policy",
    "by_code",
    "eligible_beds",
]
