"""
Placement Service Layer

Suggests a bed for a patient on a date and turns a suggestion into an open
stay. The suggestion is a read-only snapshot computation; placement holds the
per-bed lock while it re-checks the bed and saves the stay.
"""

from typing import Optional
from datetime import date
import logging

from bed_planner.core.config import settings
from bed_planner.core.exceptions import (
    ConfigurationError, NotFoundError, PlacementConflictError, require_text, require_value
)
from bed_planner.domain.beds.models import Bed, BedStatus
from bed_planner.domain.placement.candidates import (
    BED_CODE_ORDER, BedOrder, IsolationPolicy, apply_isolation_policy, eligible_beds
)
from bed_planner.domain.stays.activity import occupied_bed_ids
from bed_planner.domain.stays.models import HospitalStay, StayType
from bed_planner.domain.stays.service import build_stay, validate_new_stay
from bed_planner.infrastructure.locks import BedLockManager, InMemoryBedLockManager

logger = logging.getLogger(__name__)


class PlacementService:
    """Bed allocation engine"""

    def __init__(
        self,
        patient_repo,
        bed_repo,
        stay_repo,
        lock_manager: Optional[BedLockManager] = None,
        isolation_policy: Optional[IsolationPolicy] = None,
        order: BedOrder = BED_CODE_ORDER,
        max_attempts: Optional[int] = None
    ):
        self.patient_repo = patient_repo
        self.bed_repo = bed_repo
        self.stay_repo = stay_repo
        self.lock_manager = lock_manager or InMemoryBedLockManager(
            wait_seconds=settings.BED_LOCK_WAIT_SECONDS
        )
        policy = isolation_policy or settings.ISOLATION_POLICY
        try:
            self.isolation_policy = IsolationPolicy(policy)
        except ValueError as e:
            raise ConfigurationError(
                f"Unknown isolation policy: {policy}",
                details={"isolation_policy": str(policy)}
            ) from e
        self.order = order
        self.max_attempts = max_attempts or settings.PLACEMENT_MAX_ATTEMPTS

    def suggest_bed_for_patient(self, patient_id: str, on: date) -> Optional[Bed]:
        """
        First eligible bed for the patient on the given day, or None.

        A bed is eligible when its status is available, no active stay holds
        it on that day and the isolation policy accepts it for the patient.
        Candidates are ordered by the configured key (bed code by default).
        """
        require_text(patient_id, "Patient id")
        require_value(on, "Date")

        patient = self.patient_repo.find_by_id(patient_id)
        if patient is None:
            raise NotFoundError(
                f"Patient with id {patient_id} does not exist",
                details={"patient_id": patient_id}
            )

        occupied = occupied_bed_ids(self.stay_repo.find_all(), on)
        candidates = eligible_beds(self.bed_repo.find_all(), occupied, self.order)
        candidates = apply_isolation_policy(candidates, patient, self.isolation_policy)

        if not candidates:
            logger.debug(f"No eligible bed for patient={patient_id} on {on}")
            return None
        return candidates[0]

    def _bed_still_free(self, bed_id: str, on: date) -> bool:
        bed = self.bed_repo.find_by_id(bed_id)
        if bed is None or bed.status != BedStatus.AVAILABLE:
            return False
        return all(stay.bed_id != bed_id for stay in self.stay_repo.find_active_on(on))

    def place_patient(
        self,
        stay_id: str,
        patient_id: str,
        admission_date: date,
        stay_type: StayType,
        discharge_date_planned: Optional[date] = None
    ) -> Optional[HospitalStay]:
        """
        Create an open stay on the bed the engine suggests.

        Returns None when no bed is eligible. Raises PlacementConflictError
        when every attempt lost its suggested bed to a concurrent placement.
        """
        logger.info(f"Placing patient id={patient_id} on {admission_date}")
        validate_new_stay(
            self.stay_repo, stay_id, patient_id, admission_date, discharge_date_planned, stay_type
        )

        for attempt in range(1, self.max_attempts + 1):
            bed = self.suggest_bed_for_patient(patient_id, admission_date)
            if bed is None:
                logger.warning(f"No bed available for patient id={patient_id} on {admission_date}")
                return None

            with self.lock_manager.hold(bed.id):
                if self._bed_still_free(bed.id, admission_date):
                    stay = build_stay(
                        stay_id, patient_id, bed.id, admission_date, discharge_date_planned, stay_type
                    )
                    self.stay_repo.save(stay)
                    logger.info(f"Patient placed id={patient_id} on bed={bed.id} stay={stay_id}")
                    return stay

            logger.warning(
                f"Bed {bed.id} taken by a concurrent placement "
                f"(attempt {attempt}/{self.max_attempts}) for patient id={patient_id}"
            )

        raise PlacementConflictError(
            f"Could not place patient {patient_id}: suggested beds kept being taken by concurrent placements",
            details={"patient_id": patient_id, "attempts": self.max_attempts}
        )
