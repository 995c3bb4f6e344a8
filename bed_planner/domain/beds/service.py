from typing import Optional, List
import logging

from bed_planner.core.exceptions import ConflictError, NotFoundError, require_text, require_value
from bed_planner.domain.beds.models import Bed, BedStatus

logger = logging.getLogger(__name__)


class BedService:
    """Service layer for the bed registry"""

    def __init__(self, bed_repo):
        self.bed_repo = bed_repo

    def create_bed(
        self,
        bed_id: str,
        room_id: str,
        code: str,
        status: Optional[BedStatus] = None,
        isolation_capable: bool = False
    ) -> Bed:
        """Create a bed; a missing status defaults to available"""
        logger.info(f"Creating bed with id={bed_id}")
        require_text(bed_id, "Bed id")

        if self.bed_repo.find_by_id(bed_id) is not None:
            logger.warning(f"Attempt to create bed with existing id={bed_id}")
            raise ConflictError(f"Bed with id {bed_id} already exists", details={"bed_id": bed_id})

        require_text(room_id, "Room id")
        require_text(code, "Code")

        bed = Bed(
            id=bed_id,
            room_id=room_id,
            code=code,
            status=status or BedStatus.AVAILABLE,
            isolation_capable=isolation_capable,
        )
        self.bed_repo.save(bed)

        logger.info(f"Bed created successfully id={bed_id}")
        return bed

    def get_bed(self, bed_id: str) -> Bed:
        require_text(bed_id, "Bed id")
        bed = self.bed_repo.find_by_id(bed_id)
        if bed is None:
            raise NotFoundError(f"Bed with id {bed_id} does not exist", details={"bed_id": bed_id})
        return bed

    def list_beds(self, status: Optional[BedStatus] = None) -> List[Bed]:
        if status is not None:
            return self.bed_repo.find_by_status(status)
        return self.bed_repo.find_all()

    def update_bed_status(self, bed_id: str, new_status: BedStatus) -> Bed:
        """Replace the stored bed with a copy carrying the new status"""
        logger.info(f"Updating status for bed with id={bed_id} to {new_status}")
        require_text(bed_id, "Bed id")
        require_value(new_status, "New bed status")

        existing = self.bed_repo.find_by_id(bed_id)
        if existing is None:
            logger.warning(f"Attempt to update status of non-existing bed id={bed_id}")
            raise NotFoundError(f"Bed with id {bed_id} does not exist", details={"bed_id": bed_id})

        updated = existing.with_status(BedStatus(new_status))
        self.bed_repo.save(updated)

        logger.info(f"Bed status updated successfully id={bed_id} new_status={updated.status.value}")
        return updated

    def delete_bed(self, bed_id: str) -> None:
        require_text(bed_id, "Bed id")

        if self.bed_repo.find_by_id(bed_id) is None:
            logger.warning(f"Attempt to delete non-existing bed id={bed_id}")
            raise NotFoundError(f"Bed with id {bed_id} does not exist", details={"bed_id": bed_id})

        logger.info(f"Deleting bed id={bed_id}")
        self.bed_repo.delete_by_id(bed_id)
        logger.info(f"Bed deleted successfully id={bed_id}")
