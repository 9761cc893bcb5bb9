"""Application service: Cancel Job use case.

Only a SCHEDULED job can be cancelled; once work has started the job
must be completed.
"""

from __future__ import annotations

import logging

from jobcard.application._loading import load_job
from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.application.locks import JobLocks
from jobcard.domain.repository.job_repository import JobRepository

logger = logging.getLogger(__name__)


class CancelJobHandler:

    def __init__(self, job_repo: JobRepository, locks: JobLocks | None = None) -> None:
        self._job_repo = job_repo
        self._locks = locks or JobLocks()

    def handle(self, job_id: int) -> JobDTO:
        with self._locks.hold(job_id):
            job = load_job(self._job_repo, job_id)
            job.cancel()
            self._job_repo.save(job)

        logger.info("Job #%s cancelled", job_id)
        return job_to_dto(job)
