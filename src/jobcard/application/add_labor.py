"""Application service: Add Labor use case."""

from __future__ import annotations

import logging

from jobcard.application._loading import load_job
from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.application.locks import JobLocks
from jobcard.domain.exceptions import ValidationError
from jobcard.domain.model.value_objects import Money
from jobcard.domain.repository.job_repository import JobRepository

logger = logging.getLogger(__name__)


class AddLaborHandler:

    def __init__(
        self,
        job_repo: JobRepository,
        locks: JobLocks | None = None,
        currency: str = "USD",
    ) -> None:
        self._job_repo = job_repo
        self._locks = locks or JobLocks()
        self._currency = currency

    def handle(self, job_id: int, caller_id: str, description: str, cost: str) -> JobDTO:
        """Append a billable labor line to an IN_PROGRESS job."""
        if not description or not description.strip():
            raise ValidationError("Labor description is required")
        amount = Money.of(cost, self._currency)

        with self._locks.hold(job_id):
            job = load_job(self._job_repo, job_id)
            job.add_labor(caller_id, description, amount)
            self._job_repo.save(job)

        logger.info("Job #%s: %s added labor '%s' (%s)", job_id, caller_id, description, amount)
        return job_to_dto(job)
