"""Tests for the invoice outbox."""

import pytest

from jobcard.domain.exceptions import NotificationError
from jobcard.domain.model.inventory import PartSnapshot
from jobcard.domain.model.job import Job
from jobcard.domain.model.value_objects import Money
from jobcard.domain.service.invoice_calculator import calculate_invoice
from jobcard.infrastructure.notifications.outbox_dispatcher import (
    OutboxNotificationDispatcher,
    render_invoice_text,
)


def _completed_job(discount_eligible: bool) -> Job:
    job = Job.create("cust-7", "ABC-123", service_type="Brakes", discount_eligible=discount_eligible)
    job.id = 7
    job.assign("mia")
    job.start("mia")
    job.add_part("mia", PartSnapshot("1", "Brake Pad", Money.of("20.00")), 2)
    job.add_labor("mia", "Brake job", Money.of("50.00"))
    totals = calculate_invoice(job.parts_used, job.labor_items, job.discount_eligible)
    job.complete("mia", totals)
    return job


def test_render_with_discount():
    text = render_invoice_text(_completed_job(discount_eligible=True))
    assert "Invoice for job #7" in text
    assert "Subtotal: $90.00" in text
    assert "Discount: -$4.50" in text
    assert "Total Amount: $85.50" in text
    assert text.rstrip().endswith("Thank you for your business!")


def test_render_without_discount():
    text = render_invoice_text(_completed_job(discount_eligible=False))
    assert "Discount" not in text
    assert "Total Amount: $90.00" in text


def test_render_rejects_open_job():
    job = Job.create("c", "v")
    job.id = 1
    with pytest.raises(NotificationError):
        render_invoice_text(job)


def test_dispatcher_writes_outbox_file(tmp_path):
    outbox = tmp_path / "outbox"
    OutboxNotificationDispatcher(outbox).notify_job_completed(_completed_job(True))
    written = (outbox / "invoice-7.txt").read_text()
    assert "Total Amount: $85.50" in written


def test_unwritable_outbox_raises_notification_error(tmp_path):
    blocker = tmp_path / "outbox"
    blocker.write_text("not a directory")
    with pytest.raises(NotificationError):
        OutboxNotificationDispatcher(blocker).notify_job_completed(_completed_job(False))
