"""
In-memory registries

Dict-backed implementations of the patient, bed and stay repositories. They
expose the same methods as the SQLAlchemy repositories and are used by the
test-suite and by embedded callers that do not need a database.
"""

from typing import Dict, Generic, List, Optional, TypeVar
from datetime import date
import threading

from bed_planner.core.exceptions import InvalidInputError, require_text
from bed_planner.domain.beds.models import Bed, BedStatus
from bed_planner.domain.patients.models import Patient
from bed_planner.domain.stays.activity import is_active_on
from bed_planner.domain.stays.models import HospitalStay

T = TypeVar("T")


class _InMemoryStore(Generic[T]):
    label = "Record"

    def __init__(self):
        self._storage: Dict[str, T] = {}
        self._lock = threading.RLock()

    def save(self, item: T) -> T:
        if item is None:
            raise InvalidInputError(f"{self.label} cannot be null")
        require_text(item.id, f"{self.label} id")
        with self._lock:
            self._storage[item.id] = item
        return item

    def find_by_id(self, item_id: str) -> Optional[T]:
        with self._lock:
            return self._storage.get(item_id)

    def find_all(self) -> List[T]:
        with self._lock:
            return list(self._storage.values())

    def delete_by_id(self, item_id: str) -> bool:
        with self._lock:
            return self._storage.pop(item_id, None) is not None


class InMemoryPatientRepository(_InMemoryStore[Patient]):
    label = "Patient"

    def exists_by_id(self, patient_id: str) -> bool:
        return self.find_by_id(patient_id) is not None


class InMemoryBedRepository(_InMemoryStore[Bed]):
    label = "Bed"

    def find_by_status(self, status: BedStatus) -> List[Bed]:
        return [bed for bed in self.find_all() if bed.status == status]


class InMemoryHospitalStayRepository(_InMemoryStore[HospitalStay]):
    label = "HospitalStay"

    def find_all_by_patient_id(self, patient_id: str) -> List[HospitalStay]:
        stays = [stay for stay in self.find_all() if stay.patient_id == patient_id]
        return sorted(stays, key=lambda stay: stay.admission_date, reverse=True)

    def find_active_on(self, on: date) -> List[HospitalStay]:
        return [stay for stay in self.find_all() if is_active_on(stay, on)]
