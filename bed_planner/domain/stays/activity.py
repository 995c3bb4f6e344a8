from datetime import date
from typing import Iterable, Set

from bed_planner.domain.stays.models import HospitalStay


def is_active_on(stay: HospitalStay, on: date) -> bool:
    """
    True when the stay occupies its bed on the given day.

    Only the effective discharge date ends occupancy; a planned date that has
    passed without a recorded discharge still counts as occupied.
    """
    if stay.admission_date > on:
        return False
    return stay.discharge_date_effective is None or stay.discharge_date_effective >= on


def occupied_bed_ids(stays: Iterable[HospitalStay], on: date) -> Set[str]:
    """Ids of the beds held by an active stay on the given day"""
    return {stay.bed_id for stay in stays if is_active_on(stay, on)}
