from pydantic import BaseModel, Field
from typing import Optional
from bed_planner.domain.beds.models import BedStatus


class BedCreate(BaseModel):
    """Schema for registering a bed; status defaults to available"""
    id: str = Field(..., max_length=50)
    room_id: str = Field(..., max_length=50)
    code: str = Field(..., max_length=20, description="Ward label, e.g. A12-1")
    status: Optional[BedStatus] = None
    isolation_capable: bool = False


class BedStatusUpdate(BaseModel):
    status: BedStatus


class BedResponse(BaseModel):
    """Schema for bed response"""
    id: str
    room_id: str
    code: str
    status: BedStatus
    isolation_capable: bool

    class Config:
        from_attributes = True
