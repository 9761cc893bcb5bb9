"""Lookup helpers shared by the job handlers."""

from __future__ import annotations

from jobcard.domain.exceptions import EntityNotFoundError
from jobcard.domain.model.job import Job
from jobcard.domain.repository.job_repository import JobRepository


def load_job(job_repo: JobRepository, job_id: int) -> Job:
    job = job_repo.get_by_id(job_id)
    if job is None:
        raise EntityNotFoundError(f"Job #{job_id} not found")
    return job
