"""Application service: Start Job use case."""

from __future__ import annotations

import logging

from jobcard.application._loading import load_job
from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.application.locks import JobLocks
from jobcard.domain.repository.job_repository import JobRepository

logger = logging.getLogger(__name__)


class StartJobHandler:

    def __init__(self, job_repo: JobRepository, locks: JobLocks | None = None) -> None:
        self._job_repo = job_repo
        self._locks = locks or JobLocks()

    def handle(self, job_id: int, caller_id: str) -> JobDTO:
        """Move a SCHEDULED job to IN_PROGRESS on behalf of its mechanic."""
        with self._locks.hold(job_id):
            job = load_job(self._job_repo, job_id)
            job.start(caller_id)
            self._job_repo.save(job)

        logger.info("Job #%s started by %s", job_id, caller_id)
        return job_to_dto(job)
