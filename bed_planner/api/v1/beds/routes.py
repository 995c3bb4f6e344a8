from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from bed_planner.api.deps import get_bed_service
from bed_planner.api.v1.beds.schemas import BedCreate, BedStatusUpdate, BedResponse
from bed_planner.domain.beds.models import BedStatus
from bed_planner.domain.beds.service import BedService

router = APIRouter()


@router.post("", response_model=BedResponse, status_code=status.HTTP_201_CREATED)
def create_bed(bed_data: BedCreate, service: BedService = Depends(get_bed_service)):
    """Register a new bed"""
    bed = service.create_bed(
        bed_id=bed_data.id,
        room_id=bed_data.room_id,
        code=bed_data.code,
        status=bed_data.status,
        isolation_capable=bed_data.isolation_capable
    )
    return BedResponse.model_validate(bed)


@router.get("", response_model=List[BedResponse])
def list_beds(
    bed_status: Optional[BedStatus] = Query(None, alias="status"),
    service: BedService = Depends(get_bed_service)
):
    """List beds, optionally filtered by status"""
    return [BedResponse.model_validate(bed) for bed in service.list_beds(bed_status)]


@router.get("/{bed_id}", response_model=BedResponse)
def get_bed(bed_id: str, service: BedService = Depends(get_bed_service)):
    return BedResponse.model_validate(service.get_bed(bed_id))


@router.patch("/{bed_id}/status", response_model=BedResponse)
def update_bed_status(
    bed_id: str,
    status_data: BedStatusUpdate,
    service: BedService = Depends(get_bed_service)
):
    """Change the operational status of a bed"""
    return BedResponse.model_validate(service.update_bed_status(bed_id, status_data.status))


@router.delete("/{bed_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bed(bed_id: str, service: BedService = Depends(get_bed_service)):
    service.delete_bed(bed_id)
