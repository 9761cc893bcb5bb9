"""Integration tests for the AssignJob and StartJob use cases."""

import pytest

from jobcard.application.assign_job import AssignJobHandler
from jobcard.application.create_job import CreateJobHandler
from jobcard.application.start_job import StartJobHandler
from jobcard.domain.exceptions import (
    AlreadyAssignedError,
    EntityNotFoundError,
    InvalidTransitionError,
    NotAuthorizedError,
)
from jobcard.domain.model.job import JobStatus
from jobcard.domain.model.user import Role, User
from tests.fakes import FakeJobRepository, FakeUserDirectory


def _setup():
    users = FakeUserDirectory([
        User("mia", "Mia", Role.MECHANIC),
        User("leo", "Leo", Role.MECHANIC),
        User("sam", "Sam", Role.MANAGER),
    ])
    job_repo = FakeJobRepository()
    dto = CreateJobHandler(job_repo).handle("cust-1", "KA-01-1234", "Brake service")
    return job_repo, users, dto.id


class TestAssignJob:

    def test_assign_sets_mechanic(self):
        job_repo, users, job_id = _setup()
        dto = AssignJobHandler(job_repo, users).handle(job_id, "mia")

        assert dto.assigned_mechanic == "mia"
        assert dto.status == "Scheduled"
        assert job_repo.get_by_id(job_id).assigned_mechanic == "mia"

    def test_reassign_rejected(self):
        job_repo, users, job_id = _setup()
        handler = AssignJobHandler(job_repo, users)
        handler.handle(job_id, "mia")

        with pytest.raises(AlreadyAssignedError):
            handler.handle(job_id, "leo")
        assert job_repo.get_by_id(job_id).assigned_mechanic == "mia"

    def test_unknown_mechanic_rejected(self):
        job_repo, users, job_id = _setup()
        with pytest.raises(EntityNotFoundError, match="Mechanic 'ghost' not found"):
            AssignJobHandler(job_repo, users).handle(job_id, "ghost")

    def test_non_mechanic_rejected(self):
        job_repo, users, job_id = _setup()
        with pytest.raises(NotAuthorizedError):
            AssignJobHandler(job_repo, users).handle(job_id, "sam")
        assert job_repo.get_by_id(job_id).assigned_mechanic is None

    def test_unknown_job_rejected(self):
        job_repo, users, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Job #999 not found"):
            AssignJobHandler(job_repo, users).handle(999, "mia")


class TestStartJob:

    def test_start_by_assigned_mechanic(self):
        job_repo, users, job_id = _setup()
        AssignJobHandler(job_repo, users).handle(job_id, "mia")

        dto = StartJobHandler(job_repo).handle(job_id, "mia")

        assert dto.status == "In Progress"
        assert dto.started_at is not None
        assert job_repo.get_by_id(job_id).status == JobStatus.IN_PROGRESS

    def test_start_by_other_mechanic_rejected(self):
        job_repo, users, job_id = _setup()
        AssignJobHandler(job_repo, users).handle(job_id, "mia")

        with pytest.raises(NotAuthorizedError):
            StartJobHandler(job_repo).handle(job_id, "leo")
        assert job_repo.get_by_id(job_id).status == JobStatus.SCHEDULED

    def test_duplicate_start_rejected(self):
        job_repo, users, job_id = _setup()
        AssignJobHandler(job_repo, users).handle(job_id, "mia")
        handler = StartJobHandler(job_repo)
        handler.handle(job_id, "mia")
        saves = job_repo.save_count

        with pytest.raises(InvalidTransitionError):
            handler.handle(job_id, "mia")
        assert job_repo.save_count == saves
