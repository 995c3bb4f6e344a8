"""
Patients API Routes

Patient registry endpoints and the per-patient stay history.
"""

from fastapi import APIRouter, Depends, status
from typing import List

from bed_planner.api.deps import get_patient_service, get_stay_service
from bed_planner.api.v1.patients.schemas import PatientCreate, PatientUpdate, PatientResponse
from bed_planner.api.v1.stays.schemas import StayResponse
from bed_planner.domain.patients.service import PatientService
from bed_planner.domain.stays.service import StayService

router = APIRouter()


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
def create_patient(
    patient_data: PatientCreate,
    service: PatientService = Depends(get_patient_service)
):
    """Register a new patient"""
    patient = service.create_patient(
        patient_id=patient_data.id,
        first_name=patient_data.first_name,
        last_name=patient_data.last_name,
        birth_date=patient_data.birth_date,
        sex=patient_data.sex,
        reduced_mobility=patient_data.reduced_mobility,
        isolation_required=patient_data.isolation_required,
        phone_number=patient_data.phone_number,
        notes=patient_data.notes
    )
    return PatientResponse.model_validate(patient)


@router.get("", response_model=List[PatientResponse])
def list_patients(service: PatientService = Depends(get_patient_service)):
    return [PatientResponse.model_validate(patient) for patient in service.list_patients()]


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(patient_id: str, service: PatientService = Depends(get_patient_service)):
    return PatientResponse.model_validate(service.get_patient(patient_id))


@router.put("/{patient_id}", response_model=PatientResponse)
def update_patient(
    patient_id: str,
    update_data: PatientUpdate,
    service: PatientService = Depends(get_patient_service)
):
    """Update patient information"""
    patient = service.update_patient(patient_id, **update_data.model_dump(exclude_unset=True))
    return PatientResponse.model_validate(patient)


@router.get("/{patient_id}/stays", response_model=List[StayResponse])
def get_patient_stays(patient_id: str, service: StayService = Depends(get_stay_service)):
    """Stay history of a patient, latest admission first"""
    return [StayResponse.model_validate(stay) for stay in service.list_stays_for_patient(patient_id)]
