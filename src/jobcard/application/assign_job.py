"""Application service: Assign Job use case.

A manager hands a SCHEDULED job to a mechanic.  The mechanic must exist
and hold a role that can perform jobs; a job that already has a mechanic
is never silently re-assigned.
"""

from __future__ import annotations

import logging

from jobcard.application._loading import load_job
from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.application.locks import JobLocks
from jobcard.domain.exceptions import EntityNotFoundError
from jobcard.domain.model.user import Capability, require_capability
from jobcard.domain.repository.job_repository import JobRepository
from jobcard.domain.repository.user_directory import UserDirectory

logger = logging.getLogger(__name__)


class AssignJobHandler:

    def __init__(
        self,
        job_repo: JobRepository,
        user_directory: UserDirectory,
        locks: JobLocks | None = None,
    ) -> None:
        self._job_repo = job_repo
        self._user_directory = user_directory
        self._locks = locks or JobLocks()

    def handle(self, job_id: int, mechanic_id: str) -> JobDTO:
        mechanic = self._user_directory.find_by_id(mechanic_id)
        if mechanic is None:
            raise EntityNotFoundError(f"Mechanic '{mechanic_id}' not found")
        require_capability(mechanic, Capability.PERFORM_JOBS)

        with self._locks.hold(job_id):
            job = load_job(self._job_repo, job_id)
            job.assign(mechanic.id)
            self._job_repo.save(job)

        logger.info("Job #%s assigned to mechanic %s", job_id, mechanic.id)
        return job_to_dto(job)
