"""
Placement API Routes

Bed suggestion and engine-driven stay creation.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from bed_planner.api.deps import get_placement_service
from bed_planner.api.v1.beds.schemas import BedResponse
from bed_planner.api.v1.placement.schemas import (
    PlacementRequest, PlacementResponse, BedSuggestionResponse
)
from bed_planner.api.v1.stays.schemas import StayResponse
from bed_planner.core.dates import parse_flexible_date
from bed_planner.domain.placement.service import PlacementService
from bed_planner.domain.stays.service import new_stay_id

router = APIRouter()


@router.get("/suggestion", response_model=BedSuggestionResponse)
def suggest_bed(
    patient_id: str = Query(...),
    on: str = Query(..., description="yyyy-mm-dd, d/m/yyyy or d-m-yyyy"),
    service: PlacementService = Depends(get_placement_service)
):
    """Suggest a bed without reserving it; `bed` is null when none is eligible"""
    target_date = parse_flexible_date(on)
    bed = service.suggest_bed_for_patient(patient_id, target_date)
    return BedSuggestionResponse(
        patient_id=patient_id,
        on=target_date,
        bed=BedResponse.model_validate(bed) if bed else None
    )


@router.post("", response_model=PlacementResponse, status_code=status.HTTP_201_CREATED)
def place_patient(
    placement_data: PlacementRequest,
    response: Response,
    service: PlacementService = Depends(get_placement_service)
):
    """Create a stay on the suggested bed; answers 200 with a null stay when no bed is free"""
    stay = service.place_patient(
        stay_id=placement_data.id or new_stay_id(),
        patient_id=placement_data.patient_id,
        admission_date=placement_data.admission_date,
        stay_type=placement_data.stay_type,
        discharge_date_planned=placement_data.discharge_date_planned
    )
    if stay is None:
        response.status_code = status.HTTP_200_OK
    return PlacementResponse(
        patient_id=placement_data.patient_id,
        admission_date=placement_data.admission_date,
        stay=StayResponse.model_validate(stay) if stay else None
    )
