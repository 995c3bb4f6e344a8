from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, String, Boolean, Enum, DateTime
from sqlalchemy.sql import func
from bed_planner.infrastructure.database import Base
import enum


class BedStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    CLEANING = "cleaning"
    OUT_OF_ORDER = "out_of_order"


class Bed(BaseModel):
    """Immutable bed value; `code` is the human-readable ward label (e.g. "A12-1")"""
    model_config = ConfigDict(frozen=True)

    id: str
    room_id: str
    code: str
    status: BedStatus = BedStatus.AVAILABLE
    isolation_capable: bool = False

    def with_status(self, status: BedStatus) -> "Bed":
        return self.model_copy(update={"status": status})


class BedRecord(Base):
    __tablename__ = "beds"

    id = Column(String(50), primary_key=True)
    room_id = Column(String(50), nullable=False, index=True)
    code = Column(String(20), nullable=False)
    status = Column(
        Enum(BedStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=BedStatus.AVAILABLE
    )
    isolation_capable = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def to_domain(self) -> Bed:
        return Bed(
            id=self.id,
            room_id=self.room_id,
            code=self.code,
            status=self.status,
            isolation_capable=bool(self.isolation_capable),
        )

    @classmethod
    def from_domain(cls, bed: Bed) -> "BedRecord":
        return cls(**bed.model_dump())
