"""
Hospital Stay Service Layer

Business logic for the stay lifecycle: explicit creation on a chosen bed,
discharge, and read access to the stay registry.
"""

from typing import Optional, List
from datetime import date
from pydantic import ValidationError
import logging
import uuid

from bed_planner.core.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidStateTransitionError,
    NotFoundError,
    require_text,
    require_value,
)
from bed_planner.domain.stays.models import HospitalStay, StayType

logger = logging.getLogger(__name__)


def new_stay_id() -> str:
    """Generate a stay identifier for callers that do not supply one"""
    return f"STAY-{uuid.uuid4().hex[:8].upper()}"


def validate_new_stay(
    stay_repo,
    stay_id: str,
    patient_id: str,
    admission_date: date,
    discharge_date_planned: Optional[date],
    stay_type: StayType
) -> None:
    """
    Input checks shared by explicit creation and engine placement.

    The stay id must be unused since saving is an upsert and would otherwise
    overwrite an existing stay.
    """
    require_text(stay_id, "Stay id")
    require_text(patient_id, "Patient id")
    require_value(admission_date, "Admission date")
    require_value(stay_type, "Stay type")

    if discharge_date_planned is not None and discharge_date_planned < admission_date:
        logger.warning(
            f"Invalid stay dates: admission={admission_date}, planned_discharge={discharge_date_planned}"
        )
        raise InvalidInputError(
            "Planned discharge date cannot be before admission date",
            details={
                "admission_date": admission_date.isoformat(),
                "discharge_date_planned": discharge_date_planned.isoformat()
            }
        )

    if stay_repo.find_by_id(stay_id) is not None:
        logger.warning(f"Attempt to create hospital stay with existing id={stay_id}")
        raise ConflictError(
            f"Hospital stay with id {stay_id} already exists",
            details={"stay_id": stay_id}
        )


def build_stay(
    stay_id: str,
    patient_id: str,
    bed_id: str,
    admission_date: date,
    discharge_date_planned: Optional[date],
    stay_type: StayType
) -> HospitalStay:
    """New open stay; the effective discharge date is unknown at creation"""
    try:
        return HospitalStay(
            id=stay_id,
            patient_id=patient_id,
            bed_id=bed_id,
            stay_type=stay_type,
            admission_date=admission_date,
            discharge_date_planned=discharge_date_planned,
            discharge_date_effective=None,
        )
    except ValidationError as e:
        raise InvalidInputError(
            "Invalid hospital stay data",
            details={"errors": [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            ]}
        ) from e


class StayService:
    """Service layer for hospital stay operations"""

    def __init__(self, stay_repo, patient_repo, bed_repo):
        self.stay_repo = stay_repo
        self.patient_repo = patient_repo
        self.bed_repo = bed_repo

    def create_stay(
        self,
        stay_id: str,
        patient_id: str,
        bed_id: str,
        admission_date: date,
        stay_type: StayType,
        discharge_date_planned: Optional[date] = None
    ) -> HospitalStay:
        """
        Create an open stay on an explicitly chosen bed.

        Bed availability is not checked: this is the manual override path.
        Use PlacementService.place_patient to let the engine pick a free bed.
        """
        logger.info(f"Creating hospital stay id={stay_id} for patient={patient_id} on bed={bed_id}")
        require_text(bed_id, "Bed id")
        validate_new_stay(
            self.stay_repo, stay_id, patient_id, admission_date, discharge_date_planned, stay_type
        )

        if self.patient_repo.find_by_id(patient_id) is None:
            raise NotFoundError(
                f"Patient with id {patient_id} does not exist",
                details={"patient_id": patient_id}
            )
        if self.bed_repo.find_by_id(bed_id) is None:
            raise NotFoundError(
                f"Bed with id {bed_id} does not exist",
                details={"bed_id": bed_id}
            )

        stay = build_stay(stay_id, patient_id, bed_id, admission_date, discharge_date_planned, stay_type)
        self.stay_repo.save(stay)

        logger.info(f"Hospital stay created id={stay_id}")
        return stay

    def discharge(self, stay_id: str, discharge_date: date) -> HospitalStay:
        """Record the effective discharge date; allowed once per stay"""
        logger.info(f"Discharging hospital stay id={stay_id}")
        require_text(stay_id, "Stay id")
        require_value(discharge_date, "Discharge date")

        stay = self.stay_repo.find_by_id(stay_id)
        if stay is None:
            logger.warning(f"Attempt to discharge non-existing hospital stay id={stay_id}")
            raise NotFoundError(
                f"Hospital stay with id {stay_id} does not exist",
                details={"stay_id": stay_id}
            )

        # Date coherence is reported before the lifecycle state
        if discharge_date < stay.admission_date:
            raise InvalidInputError(
                "Discharge date cannot be before admission date",
                details={
                    "admission_date": stay.admission_date.isoformat(),
                    "discharge_date": discharge_date.isoformat()
                }
            )

        if stay.is_discharged:
            logger.warning(f"Attempt to discharge already discharged hospital stay id={stay_id}")
            raise InvalidStateTransitionError(
                f"Hospital stay with id {stay_id} is already discharged",
                details={
                    "stay_id": stay_id,
                    "discharge_date_effective": stay.discharge_date_effective.isoformat()
                }
            )

        discharged = stay.with_discharge(discharge_date)
        self.stay_repo.save(discharged)

        logger.info(f"Hospital stay discharged id={stay_id} on {discharge_date}")
        return discharged

    def get_stay(self, stay_id: str) -> HospitalStay:
        require_text(stay_id, "Stay id")
        stay = self.stay_repo.find_by_id(stay_id)
        if stay is None:
            raise NotFoundError(
                f"Hospital stay with id {stay_id} does not exist",
                details={"stay_id": stay_id}
            )
        return stay

    def list_stays(self) -> List[HospitalStay]:
        return self.stay_repo.find_all()

    def list_stays_for_patient(self, patient_id: str) -> List[HospitalStay]:
        """All stays of an existing patient, latest admission first"""
        require_text(patient_id, "Patient id")
        if self.patient_repo.find_by_id(patient_id) is None:
            raise NotFoundError(
                f"Patient with id {patient_id} does not exist",
                details={"patient_id": patient_id}
            )
        return self.stay_repo.find_all_by_patient_id(patient_id)

    def list_active_stays_on(self, on: date) -> List[HospitalStay]:
        require_value(on, "Date")
        return self.stay_repo.find_active_on(on)
