"""Port for telling the outside world a job has been completed.

Implementations produce and deliver the invoice (e-mail, PDF, a file
outbox...).  They raise NotificationError on failure; the caller logs it
and carries on, because a completed job stays completed whether or not
the invoice arrives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from jobcard.domain.model.job import Job


class NotificationDispatcher(ABC):

    @abstractmethod
    def notify_job_completed(self, job: Job) -> None:
        """Deliver the invoice for a COMPLETED job."""


class NullNotificationDispatcher(NotificationDispatcher):
    """Dispatcher that drops every notification."""

    def notify_job_completed(self, job: Job) -> None:
        return None
