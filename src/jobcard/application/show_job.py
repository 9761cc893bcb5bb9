"""Application services: job queries."""

from __future__ import annotations

from jobcard.application._loading import load_job
from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.domain.repository.job_repository import JobRepository


class ShowJobHandler:

    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def handle(self, job_id: int) -> JobDTO:
        return job_to_dto(load_job(self._job_repo, job_id))


class ListJobsHandler:

    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def handle(
        self,
        mechanic_id: str | None = None,
        unassigned: bool = False,
    ) -> list[JobDTO]:
        """List jobs, optionally only one mechanic's or only unassigned ones."""
        jobs = self._job_repo.list_all()
        if mechanic_id is not None:
            jobs = [j for j in jobs if j.assigned_mechanic == mechanic_id]
        if unassigned:
            jobs = [j for j in jobs if j.assigned_mechanic is None and not j.is_finished]
        return [job_to_dto(j) for j in jobs]
