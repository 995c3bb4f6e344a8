"""
Hospital Stay Domain Models

A stay associates one patient with one bed over a date interval. It is
created OPEN and moves exactly once to DISCHARGED when the effective
discharge date is recorded.
"""

from typing import Optional
from datetime import date
from pydantic import BaseModel, ConfigDict, model_validator
from sqlalchemy import (
    Column, String, Date, Enum, DateTime, ForeignKey, CheckConstraint, Index
)
from sqlalchemy.sql import func
from bed_planner.core.exceptions import InvalidStateTransitionError
from bed_planner.infrastructure.database import Base
import enum


class StayType(str, enum.Enum):
    """Type of stay"""
    WEEK = "WEEK"  # weekday ward
    DAY = "DAY"    # day hospital


class StayState(str, enum.Enum):
    """Lifecycle state, derived from the effective discharge date"""
    OPEN = "OPEN"
    DISCHARGED = "DISCHARGED"


class HospitalStay(BaseModel):
    """Immutable stay value"""
    model_config = ConfigDict(frozen=True)

    id: str
    patient_id: str
    bed_id: str
    stay_type: StayType
    admission_date: date
    discharge_date_planned: Optional[date] = None
    discharge_date_effective: Optional[date] = None

    @model_validator(mode="after")
    def check_date_order(self) -> "HospitalStay":
        if self.discharge_date_planned is not None and self.discharge_date_planned < self.admission_date:
            raise ValueError("Planned discharge date cannot be before admission date")
        if self.discharge_date_effective is not None and self.discharge_date_effective < self.admission_date:
            raise ValueError("Discharge date cannot be before admission date")
        return self

    @property
    def state(self) -> StayState:
        if self.discharge_date_effective is None:
            return StayState.OPEN
        return StayState.DISCHARGED

    @property
    def is_discharged(self) -> bool:
        return self.state == StayState.DISCHARGED

    def with_discharge(self, discharge_date: date) -> "HospitalStay":
        """
        Copy carrying the effective discharge date, every other field unchanged.

        The copy is re-validated, so a date before admission raises a
        ValidationError. The effective date is set at most once.
        """
        if self.discharge_date_effective is not None:
            raise InvalidStateTransitionError(
                f"Hospital stay with id {self.id} is already discharged",
                details={
                    "stay_id": self.id,
                    "discharge_date_effective": self.discharge_date_effective.isoformat()
                }
            )
        return HospitalStay.model_validate(
            {**self.model_dump(), "discharge_date_effective": discharge_date}
        )


class HospitalStayRecord(Base):
    """Hospital stay table"""
    __tablename__ = "hospital_stays"

    id = Column(String(50), primary_key=True)
    patient_id = Column(String(50), ForeignKey("patients.id"), nullable=False, index=True)
    # Plain column: a bed may be deleted while past stays still reference it
    bed_id = Column(String(50), nullable=False)
    stay_type = Column(Enum(StayType), nullable=False)
    admission_date = Column(Date, nullable=False)
    discharge_date_planned = Column(Date, nullable=True)
    discharge_date_effective = Column(Date, nullable=True)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint(
            "discharge_date_planned IS NULL OR discharge_date_planned >= admission_date",
            name="check_planned_discharge_after_admission"
        ),
        CheckConstraint(
            "discharge_date_effective IS NULL OR discharge_date_effective >= admission_date",
            name="check_effective_discharge_after_admission"
        ),
        Index("ix_hospital_stays_bed_admission", "bed_id", "admission_date"),
    )

    def to_domain(self) -> HospitalStay:
        return HospitalStay(
            id=self.id,
            patient_id=self.patient_id,
            bed_id=self.bed_id,
            stay_type=self.stay_type,
            admission_date=self.admission_date,
            discharge_date_planned=self.discharge_date_planned,
            discharge_date_effective=self.discharge_date_effective,
        )

    @classmethod
    def from_domain(cls, stay: HospitalStay) -> "HospitalStayRecord":
        return cls(**stay.model_dump())
