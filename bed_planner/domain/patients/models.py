from typing import Optional
from datetime import date
from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, String, Date, Boolean, Text, Enum, DateTime
from sqlalchemy.sql import func
from bed_planner.infrastructure.database import Base
import enum


class Sex(str, enum.Enum):
    """Sex enumeration"""
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class Patient(BaseModel):
    """
    Immutable patient value.

    Updates never mutate an instance; a copy replaces the stored value.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    first_name: str
    last_name: str
    birth_date: date
    sex: Sex
    reduced_mobility: bool = False
    isolation_required: bool = False
    phone_number: Optional[str] = None
    notes: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class PatientRecord(Base):
    """Patient table"""
    __tablename__ = "patients"

    id = Column(String(50), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    birth_date = Column(Date, nullable=False)
    sex = Column(Enum(Sex), nullable=False)
    reduced_mobility = Column(Boolean, nullable=False, default=False)
    isolation_required = Column(Boolean, nullable=False, default=False)
    phone_number = Column(String(20))
    notes = Column(Text)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def to_domain(self) -> Patient:
        return Patient(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            birth_date=self.birth_date,
            sex=self.sex,
            reduced_mobility=bool(self.reduced_mobility),
            isolation_required=bool(self.isolation_required),
            phone_number=self.phone_number,
            notes=self.notes,
        )

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientRecord":
        return cls(**patient.model_dump())
