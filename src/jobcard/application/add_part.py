"""Application service: Add Part use case.

Takes stock through the inventory ledger, then records the part on the
job.  These are two separate writes, so if saving the job fails after
the stock was taken the handler puts the stock back before reporting the
failure.
"""

from __future__ import annotations

import logging

from jobcard.application._loading import load_job
from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.application.locks import JobLocks
from jobcard.domain.exceptions import (
    DependencyFailureError,
    DomainException,
    PersistenceError,
)
from jobcard.domain.repository.job_repository import JobRepository
from jobcard.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class AddPartHandler:

    def __init__(
        self,
        job_repo: JobRepository,
        ledger: InventoryLedger,
        locks: JobLocks | None = None,
    ) -> None:
        self._job_repo = job_repo
        self._ledger = ledger
        self._locks = locks or JobLocks()

    def handle(self, job_id: int, caller_id: str, item_id: str, quantity: int) -> JobDTO:
        """Consume *quantity* units of an inventory item on an IN_PROGRESS job.

        Steps:
        1. Check the job accepts parts from this caller (no stock touched yet).
        2. Deduct stock atomically; fails with InsufficientStockError.
        3. Append the name/price snapshot and save the job.
        4. If the save fails, restore the stock and raise DependencyFailureError.
        """
        with self._locks.hold(job_id):
            job = load_job(self._job_repo, job_id)
            job.ensure_can_modify(caller_id)

            snapshot = self._ledger.deduct(item_id, quantity)
            job.add_part(caller_id, snapshot, quantity)

            try:
                self._job_repo.save(job)
            except PersistenceError as exc:
                logger.error(
                    "Saving job #%s failed after taking %d x item %s; restoring stock",
                    job_id, quantity, item_id,
                )
                self._compensate(item_id, quantity)
                raise DependencyFailureError(
                    f"Could not record part on job #{job_id}: {exc}"
                ) from exc

        logger.info(
            "Job #%s: %s added %d x %s", job_id, caller_id, quantity, snapshot.name
        )
        return job_to_dto(job)

    def _compensate(self, item_id: str, quantity: int) -> None:
        try:
            self._ledger.restore(item_id, quantity)
        except DomainException:
            logger.exception(
                "Could not restore %d x item %s; stock needs manual reconciliation",
                quantity, item_id,
            )
