"""Application service: Complete Job use case.

Freezes the invoice totals, marks the job COMPLETED and then hands it to
the notification dispatcher.  Completion is final: a failed notification
is logged and never undoes it.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from jobcard.application._loading import load_job
from jobcard.application.dto import JobDTO, job_to_dto
from jobcard.application.locks import JobLocks
from jobcard.domain.model.job import Job
from jobcard.domain.repository.job_repository import JobRepository
from jobcard.domain.service.invoice_calculator import (
    DEFAULT_DISCOUNT_RATE,
    calculate_invoice,
)
from jobcard.domain.service.notification_dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)


class CompleteJobHandler:

    def __init__(
        self,
        job_repo: JobRepository,
        dispatcher: NotificationDispatcher,
        locks: JobLocks | None = None,
        discount_rate: Decimal = DEFAULT_DISCOUNT_RATE,
        currency: str = "USD",
    ) -> None:
        self._job_repo = job_repo
        self._dispatcher = dispatcher
        self._locks = locks or JobLocks()
        self._discount_rate = discount_rate
        self._currency = currency

    def handle(self, job_id: int, caller_id: str) -> JobDTO:
        with self._locks.hold(job_id):
            job = load_job(self._job_repo, job_id)
            job.ensure_can_complete(caller_id)

            totals = calculate_invoice(
                job.parts_used,
                job.labor_items,
                job.discount_eligible,
                discount_rate=self._discount_rate,
                currency=self._currency,
            )
            job.complete(caller_id, totals)
            self._job_repo.save(job)

        logger.info(
            "Job #%s completed by %s: subtotal %s, final %s",
            job_id, caller_id, totals.subtotal, totals.final_cost,
        )
        self._dispatch(job)
        return job_to_dto(job)

    def _dispatch(self, job: Job) -> None:
        try:
            self._dispatcher.notify_job_completed(job)
        except Exception:
            logger.exception("Invoice notification for job #%s failed", job.id)
