from pydantic import BaseModel, Field
from typing import Optional
from datetime import date
from bed_planner.api.v1.beds.schemas import BedResponse
from bed_planner.api.v1.stays.schemas import StayDatesMixin, StayResponse
from bed_planner.domain.stays.models import StayType


class PlacementRequest(StayDatesMixin):
    """Schema for letting the engine pick the bed of a new stay"""
    id: Optional[str] = Field(None, max_length=50, description="Generated when omitted")
    patient_id: str
    stay_type: StayType


class BedSuggestionResponse(BaseModel):
    """`bed` is null when no bed is eligible on that date"""
    patient_id: str
    on: date
    bed: Optional[BedResponse] = None


class PlacementResponse(BaseModel):
    """`stay` is null when no bed was available"""
    patient_id: str
    admission_date: date
    stay: Optional[StayResponse] = None
