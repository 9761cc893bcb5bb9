"""Abstract repository for the Job aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jobcard.domain.model.job import Job


class JobRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique job ID."""

    @abstractmethod
    def get_by_id(self, job_id: int) -> Job | None:
        """Return a job by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Job]:
        """Return every job, ordered by ID."""

    @abstractmethod
    def save(self, job: Job) -> None:
        """Persist a new or updated job.

        Either the whole job is written or, on failure, PersistenceError is
        raised and the stored copy is left as it was.
        """
