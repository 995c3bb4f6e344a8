from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from bed_planner.core.exceptions import handle_database_error
from bed_planner.domain.patients.models import Patient, PatientRecord

logger = logging.getLogger(__name__)


class PatientRepository:
    """Repository for patient data access operations"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, patient: Patient) -> Patient:
        """Insert or replace a patient"""
        try:
            self.db.merge(PatientRecord.from_domain(patient))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_error(e, f"save patient {patient.id}") from e
        return patient

    def find_by_id(self, patient_id: str) -> Optional[Patient]:
        """Get patient by ID"""
        record = self.db.get(PatientRecord, patient_id)
        logger.debug(f"Patient lookup id={patient_id} found={record is not None}")
        return record.to_domain() if record else None

    def exists_by_id(self, patient_id: str) -> bool:
        return self.db.query(PatientRecord.id).filter(
            PatientRecord.id == patient_id
        ).first() is not None

    def find_all(self) -> List[Patient]:
        records = self.db.query(PatientRecord).order_by(
            PatientRecord.last_name, PatientRecord.first_name, PatientRecord.id
        ).all()
        return [record.to_domain() for record in records]

    def delete_by_id(self, patient_id: str) -> bool:
        try:
            result = self.db.query(PatientRecord).filter(
                PatientRecord.id == patient_id
            ).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_error(e, f"delete patient {patient_id}") from e
        return result > 0
