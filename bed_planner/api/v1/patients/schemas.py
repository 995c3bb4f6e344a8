from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date
from bed_planner.core.dates import validate_date_field
from bed_planner.domain.patients.models import Sex


class PatientContactSchema(BaseModel):
    """Contact fields shared by every patient payload"""
    phone_number: Optional[str] = Field(None, max_length=20)

    @field_validator('phone_number')
    @classmethod
    def validate_phone(cls, v):
        if v and not v.replace('+', '').replace('-', '').replace(' ', '').isdigit():
            raise ValueError('Phone number must contain only digits, +, -, and spaces')
        return v


class BasePatientSchema(PatientContactSchema):
    """Base schema for patient data"""
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    birth_date: date
    sex: Sex
    reduced_mobility: bool = False
    isolation_required: bool = False
    notes: Optional[str] = None

    @field_validator('birth_date', mode='before')
    @classmethod
    def parse_birth_date(cls, v):
        return validate_date_field(v)


class PatientCreate(BasePatientSchema):
    """Schema for registering a patient"""
    id: str = Field(..., max_length=50)


class PatientUpdate(PatientContactSchema):
    """Schema for updating patient information; omitted fields are kept"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    sex: Optional[Sex] = None
    reduced_mobility: Optional[bool] = None
    isolation_required: Optional[bool] = None
    notes: Optional[str] = None

    @field_validator('birth_date', mode='before')
    @classmethod
    def parse_birth_date(cls, v):
        return validate_date_field(v)


class PatientResponse(BasePatientSchema):
    """Schema for patient response"""
    id: str
    full_name: str

    class Config:
        from_attributes = True
