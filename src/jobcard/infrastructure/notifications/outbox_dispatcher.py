"""Notification dispatcher that writes plain-text invoices to an outbox.

Delivery (e-mail, PDF rendering) is owned by another system which picks
files up from the outbox directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jobcard.domain.exceptions import NotificationError
from jobcard.domain.model.job import Job, JobStatus
from jobcard.domain.service.notification_dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)


def render_invoice_text(job: Job) -> str:
    """Render the customer-facing invoice summary for a completed job."""
    if job.status != JobStatus.COMPLETED or job.subtotal is None or job.final_cost is None:
        raise NotificationError(f"Job #{job.id} has no final invoice yet")

    lines = [
        f"Invoice for job #{job.id}",
        f"Customer: {job.customer_id}",
        f"Vehicle:  {job.vehicle_id}",
    ]
    if job.service_type:
        lines.append(f"Service:  {job.service_type}")
    lines.append("")

    if job.parts_used:
        lines.append("Parts")
        for part in job.parts_used:
            lines.append(
                f"  {part.name:<24} {part.quantity.value:>4} x {str(part.sale_price):>10}"
                f" {str(part.line_total):>12}"
            )
    if job.labor_items:
        lines.append("Labor")
        for item in job.labor_items:
            lines.append(f"  {item.description:<41} {str(item.cost):>12}")

    lines.append("")
    lines.append(f"Subtotal: {job.subtotal}")
    if job.discount_eligible:
        lines.append(f"Discount: -{job.subtotal - job.final_cost}")
    lines.append(f"Total Amount: {job.final_cost}")
    lines.append("")
    lines.append("Thank you for your business!")
    return "\n".join(lines) + "\n"


class OutboxNotificationDispatcher(NotificationDispatcher):

    def __init__(self, outbox_dir: Path) -> None:
        self._outbox_dir = outbox_dir

    def notify_job_completed(self, job: Job) -> None:
        text = render_invoice_text(job)
        target = self._outbox_dir / f"invoice-{job.id}.txt"
        try:
            self._outbox_dir.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise NotificationError(f"Cannot write invoice for job #{job.id}: {exc}") from exc
        logger.info("Invoice for job #%s written to %s", job.id, target)
