"""Application service: Delete Inventory Item use case.

An item still referenced by an open job is kept, so the job's part
lines can always be traced back to the catalog until it is finished.
Finished jobs carry their own name/price snapshot and do not block
deletion.
"""

from __future__ import annotations

import logging

from jobcard.application.dto import InventoryItemDTO, item_to_dto
from jobcard.domain.exceptions import EntityNotFoundError, ValidationError
from jobcard.domain.repository.inventory_repository import InventoryRepository
from jobcard.domain.repository.job_repository import JobRepository

logger = logging.getLogger(__name__)


class DeleteInventoryItemHandler:

    def __init__(self, inventory_repo: InventoryRepository, job_repo: JobRepository) -> None:
        self._inventory_repo = inventory_repo
        self._job_repo = job_repo

    def handle(self, item_id: str) -> InventoryItemDTO:
        item = self._inventory_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")

        open_jobs = [
            job.id
            for job in self._job_repo.list_all()
            if not job.is_finished and any(p.item_id == item_id for p in job.parts_used)
        ]
        if open_jobs:
            listed = ", ".join(f"#{job_id}" for job_id in open_jobs)
            raise ValidationError(
                f"Item '{item.name}' is used on open job(s) {listed} and cannot be deleted"
            )

        if not self._inventory_repo.delete(item_id):
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")
        logger.info("Inventory item %s (%s) deleted", item_id, item.name)
        return item_to_dto(item)
