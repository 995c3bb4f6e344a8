from typing import Optional, List, Any
from datetime import date
from pydantic import ValidationError
import logging

from bed_planner.core.exceptions import (
    ConflictError, InvalidInputError, NotFoundError, require_text, require_value
)
from bed_planner.domain.patients.models import Patient, Sex

logger = logging.getLogger(__name__)


def _build_patient(fields: dict) -> Patient:
    """Construct and validate a patient value from raw fields"""
    require_text(fields.get("first_name"), "Patient first name")
    require_text(fields.get("last_name"), "Patient last name")
    require_value(fields.get("birth_date"), "Patient birth date")
    require_value(fields.get("sex"), "Patient sex")

    try:
        patient = Patient(**fields)
    except ValidationError as e:
        raise InvalidInputError(
            "Invalid patient data",
            details={"errors": [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            ]}
        ) from e

    if patient.birth_date > date.today():
        raise InvalidInputError(
            "Patient birth date cannot be null or in the future",
            details={"field": "birth_date", "value": patient.birth_date.isoformat()}
        )
    return patient


class PatientService:
    """Service layer for patient registry operations"""

    def __init__(self, patient_repo):
        self.patient_repo = patient_repo

    def create_patient(
        self,
        patient_id: str,
        first_name: str,
        last_name: str,
        birth_date: date,
        sex: Sex,
        reduced_mobility: bool = False,
        isolation_required: bool = False,
        phone_number: Optional[str] = None,
        notes: Optional[str] = None
    ) -> Patient:
        """Register a new patient"""
        logger.info(f"Creating patient with id={patient_id}")
        require_text(patient_id, "Patient id")

        if self.patient_repo.exists_by_id(patient_id):
            logger.warning(f"Attempt to create patient with existing id={patient_id}")
            raise ConflictError(
                f"Patient with id {patient_id} already exists",
                details={"patient_id": patient_id}
            )

        patient = _build_patient({
            "id": patient_id,
            "first_name": first_name,
            "last_name": last_name,
            "birth_date": birth_date,
            "sex": sex,
            "reduced_mobility": reduced_mobility,
            "isolation_required": isolation_required,
            "phone_number": phone_number,
            "notes": notes,
        })

        self.patient_repo.save(patient)
        logger.info(f"Patient created successfully id={patient_id}")
        return patient

    def get_patient(self, patient_id: str) -> Patient:
        require_text(patient_id, "Patient id")
        patient = self.patient_repo.find_by_id(patient_id)
        if patient is None:
            raise NotFoundError(
                f"Patient with id {patient_id} does not exist",
                details={"patient_id": patient_id}
            )
        return patient

    def list_patients(self) -> List[Patient]:
        return self.patient_repo.find_all()

    def update_patient(self, patient_id: str, **changes: Any) -> Patient:
        """Replace the stored patient with a validated copy carrying the changes"""
        existing = self.get_patient(patient_id)
        if "id" in changes and changes["id"] != patient_id:
            raise InvalidInputError("Patient id cannot be changed", details={"field": "id"})

        unknown = set(changes) - set(Patient.model_fields)
        if unknown:
            raise InvalidInputError(
                f"Unknown patient fields: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)}
            )

        updated = _build_patient({**existing.model_dump(), **changes})

        self.patient_repo.save(updated)
        logger.info(f"Patient updated id={patient_id} fields={sorted(changes)}")
        return updated
