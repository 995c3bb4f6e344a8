from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from bed_planner.core.exceptions import handle_database_error
from bed_planner.domain.beds.models import Bed, BedRecord, BedStatus

logger = logging.getLogger(__name__)


class BedRepository:
    """Repository for bed data access operations"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, bed: Bed) -> Bed:
        """Insert a bed or replace the stored value"""
        try:
            self.db.merge(BedRecord.from_domain(bed))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_error(e, f"save bed {bed.id}") from e
        return bed

    def find_by_id(self, bed_id: str) -> Optional[Bed]:
        record = self.db.get(BedRecord, bed_id)
        return record.to_domain() if record else None

    def find_all(self) -> List[Bed]:
        records = self.db.query(BedRecord).order_by(BedRecord.code, BedRecord.id).all()
        logger.debug(f"Loaded {len(records)} beds")
        return [record.to_domain() for record in records]

    def find_by_status(self, status: BedStatus) -> List[Bed]:
        records = self.db.query(BedRecord).filter(
            BedRecord.status == status
        ).order_by(BedRecord.code, BedRecord.id).all()
        return [record.to_domain() for record in records]

    def delete_by_id(self, bed_id: str) -> bool:
        try:
            result = self.db.query(BedRecord).filter(BedRecord.id == bed_id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise handle_database_error(e, f"delete bed {bed_id}") from e
        return result > 0
