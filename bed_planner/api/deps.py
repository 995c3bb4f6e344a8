from functools import lru_cache
from fastapi import Depends
from sqlalchemy.orm import Session

from bed_planner.infrastructure.database import get_db
from bed_planner.infrastructure.locks import BedLockManager, build_lock_manager
from bed_planner.domain.beds.repository import BedRepository
from bed_planner.domain.beds.service import BedService
from bed_planner.domain.patients.repository import PatientRepository
from bed_planner.domain.patients.service import PatientService
from bed_planner.domain.placement.service import PlacementService
from bed_planner.domain.stays.repository import HospitalStayRepository
from bed_planner.domain.stays.service import StayService


@lru_cache
def get_lock_manager() -> BedLockManager:
    """Process-wide lock manager; every request must share the same bed locks"""
    return build_lock_manager()


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    return PatientService(PatientRepository(db))


def get_bed_service(db: Session = Depends(get_db)) -> BedService:
    return BedService(BedRepository(db))


def get_stay_service(db: Session = Depends(get_db)) -> StayService:
    return StayService(HospitalStayRepository(db), PatientRepository(db), BedRepository(db))


def get_placement_service(
    db: Session = Depends(get_db),
    lock_manager: BedLockManager = Depends(get_lock_manager)
) -> PlacementService:
    return PlacementService(
        PatientRepository(db),
        BedRepository(db),
        HospitalStayRepository(db),
        lock_manager=lock_manager
    )
