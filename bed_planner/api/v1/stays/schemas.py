"""
Hospital Stay API Schemas

Pydantic models for stay-related API requests and responses. Date fields
accept ISO dates as well as the day-first forms d/m/yyyy and d-m-yyyy.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date
from bed_planner.core.dates import validate_date_field
from bed_planner.domain.stays.models import StayState, StayType


class StayDatesMixin(BaseModel):
    admission_date: date
    discharge_date_planned: Optional[date] = None

    @field_validator('admission_date', 'discharge_date_planned', mode='before')
    @classmethod
    def parse_dates(cls, v):
        return validate_date_field(v)


class StayCreate(StayDatesMixin):
    """Schema for creating a stay on an explicitly chosen bed"""
    id: Optional[str] = Field(None, max_length=50, description="Generated when omitted")
    patient_id: str
    bed_id: str
    stay_type: StayType


class StayDischarge(BaseModel):
    """Schema for recording the effective discharge"""
    discharge_date: date

    @field_validator('discharge_date', mode='before')
    @classmethod
    def parse_discharge_date(cls, v):
        return validate_date_field(v)


class StayResponse(BaseModel):
    """Schema for hospital stay response"""
    id: str
    patient_id: str
    bed_id: str
    stay_type: StayType
    admission_date: date
    discharge_date_planned: Optional[date] = None
    discharge_date_effective: Optional[date] = None
    state: StayState

    class Config:
        from_attributes = True
