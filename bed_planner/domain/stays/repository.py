"""
Hospital Stay Repository Layer

Provides data access operations for hospital stays.
"""

from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import and_, or_
from datetime import date
import logging

from bed_planner.core.exceptions import handle_database_error
from bed_planner.domain.stays.models import HospitalStay, HospitalStayRecord

logger = logging.getLogger(__name__)


class HospitalStayRepository:
    """Repository for hospital stay data access operations"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, stay: HospitalStay) -> HospitalStay:
        """Insert a stay or replace it with its discharged copy"""
        try:
            self.db.merge(HospitalStayRecord.from_domain(stay))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_error(e, f"save hospital stay {stay.id}") from e
        logger.debug(f"Hospital stay id={stay.id} saved")
        return stay

    def find_by_id(self, stay_id: str) -> Optional[HospitalStay]:
        record = self.db.get(HospitalStayRecord, stay_id)
        return record.to_domain() if record else None

    def find_all_by_patient_id(self, patient_id: str) -> List[HospitalStay]:
        """Get all stays for a patient, latest admission first"""
        records = self.db.query(HospitalStayRecord).filter(
            HospitalStayRecord.patient_id == patient_id
        ).order_by(HospitalStayRecord.admission_date.desc()).all()
        return [record.to_domain() for record in records]

    def find_all(self) -> List[HospitalStay]:
        records = self.db.query(HospitalStayRecord).order_by(
            HospitalStayRecord.admission_date.desc()
        ).all()
        logger.debug(f"Loaded {len(records)} hospital stays")
        return [record.to_domain() for record in records]

    def find_active_on(self, on: date) -> List[HospitalStay]:
        """Stays admitted on or before the date and not effectively discharged before it"""
        records = self.db.query(HospitalStayRecord).filter(
            and_(
                HospitalStayRecord.admission_date <= on,
                or_(
                    HospitalStayRecord.discharge_date_effective.is_(None),
                    HospitalStayRecord.discharge_date_effective >= on
                )
            )
        ).all()
        logger.debug(f"Loaded {len(records)} active stays on {on}")
        return [record.to_domain() for record in records]
