"""
Hospital Stays API Routes

Explicit stay creation, discharge and stay queries.
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List

from bed_planner.api.deps import get_stay_service
from bed_planner.api.v1.stays.schemas import StayCreate, StayDischarge, StayResponse
from bed_planner.core.dates import parse_flexible_date
from bed_planner.domain.stays.service import StayService, new_stay_id

router = APIRouter()


@router.post("", response_model=StayResponse, status_code=status.HTTP_201_CREATED)
def create_stay(stay_data: StayCreate, service: StayService = Depends(get_stay_service)):
    """Create a stay on an explicitly chosen bed (bed availability is not checked)"""
    stay = service.create_stay(
        stay_id=stay_data.id or new_stay_id(),
        patient_id=stay_data.patient_id,
        bed_id=stay_data.bed_id,
        admission_date=stay_data.admission_date,
        stay_type=stay_data.stay_type,
        discharge_date_planned=stay_data.discharge_date_planned
    )
    return StayResponse.model_validate(stay)


@router.get("", response_model=List[StayResponse])
def list_stays(service: StayService = Depends(get_stay_service)):
    return [StayResponse.model_validate(stay) for stay in service.list_stays()]


@router.get("/active", response_model=List[StayResponse])
def list_active_stays(
    on: str = Query(..., description="yyyy-mm-dd, d/m/yyyy or d-m-yyyy"),
    service: StayService = Depends(get_stay_service)
):
    """Stays occupying a bed on the given day"""
    stays = service.list_active_stays_on(parse_flexible_date(on))
    return [StayResponse.model_validate(stay) for stay in stays]


@router.get("/{stay_id}", response_model=StayResponse)
def get_stay(stay_id: str, service: StayService = Depends(get_stay_service)):
    return StayResponse.model_validate(service.get_stay(stay_id))


@router.post("/{stay_id}/discharge", response_model=StayResponse)
def discharge_stay(
    stay_id: str,
    discharge_data: StayDischarge,
    service: StayService = Depends(get_stay_service)
):
    """Record the effective discharge date of an open stay"""
    return StayResponse.model_validate(service.discharge(stay_id, discharge_data.discharge_date))
