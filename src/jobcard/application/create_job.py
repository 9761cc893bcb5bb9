"""Application service: Create Job use case.

Booking glue: records a new SCHEDULED job for a customer's vehicle.
Picking the date and time of the appointment happens elsewhere.
"""

from __future__ import annotations

import logging

from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.domain.model.job import Job
from jobcard.domain.repository.job_repository import JobRepository

logger = logging.getLogger(__name__)


class CreateJobHandler:

    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def handle(
        self,
        customer_id: str,
        vehicle_id: str,
        service_type: str = "",
        discount_eligible: bool = False,
    ) -> JobDTO:
        job = Job.create(
            customer_id=customer_id,
            vehicle_id=vehicle_id,
            service_type=service_type,
            discount_eligible=discount_eligible,
        )
        self._job_repo.save(job)
        logger.info("Job #%s booked for customer %s", job.id, job.customer_id)
        return job_to_dto(job)
