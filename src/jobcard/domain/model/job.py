"""Job aggregate: one repair appointment tracked through the workshop.

The Job owns its part and labor lines and enforces the lifecycle:

    SCHEDULED --assign--> SCHEDULED --start--> IN_PROGRESS --complete--> COMPLETED
    SCHEDULED --cancel--> CANCELLED

Each transition is only reachable from one predecessor status, so a
duplicated request (a second ``start`` or ``complete``) is rejected rather
than applied twice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from jobcard.domain.exceptions import (
    AlreadyAssignedError,
    InvalidTransitionError,
    NotAuthorizedError,
    ValidationError,
)
from jobcard.domain.model.inventory import PartSnapshot
from jobcard.domain.model.value_objects import Money, Quantity

if TYPE_CHECKING:
    from jobcard.domain.service.invoice_calculator import InvoiceTotals


class JobStatus(Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PartUsage:
    """A part consumed by a job.

    ``name`` and ``sale_price`` are copied from the catalog when the part
    is used and never follow later catalog edits.
    """

    item_id: str
    name: str
    sale_price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.sale_price * self.quantity.value

    @staticmethod
    def from_snapshot(snapshot: PartSnapshot, quantity: int) -> PartUsage:
        return PartUsage(
            item_id=snapshot.item_id,
            name=snapshot.name,
            sale_price=snapshot.sale_price,
            quantity=Quantity(quantity),
        )


@dataclass(frozen=True)
class LaborItem:
    description: str
    cost: Money

    def __post_init__(self) -> None:
        if not self.description or not self.description.strip():
            raise ValidationError("Labor description is required")


@dataclass
class Job:
    """Aggregate root for a repair job.

    Use ``Job.create()`` for new bookings.  The ``__init__`` stays plain so
    repositories can reconstitute stored jobs without re-validating.
    """

    id: int | None
    customer_id: str
    vehicle_id: str
    service_type: str = ""
    status: JobStatus = JobStatus.SCHEDULED
    assigned_mechanic: str | None = None
    parts_used: list[PartUsage] = field(default_factory=list)
    labor_items: list[LaborItem] = field(default_factory=list)
    discount_eligible: bool = False
    subtotal: Money | None = None
    final_cost: Money | None = None
    created_at: datetime = field(default_factory=_utcnow)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    # --- Factory (used for NEW bookings only) ---------------------------------

    @staticmethod
    def create(
        customer_id: str,
        vehicle_id: str,
        service_type: str = "",
        discount_eligible: bool = False,
    ) -> Job:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer is required")
        if not vehicle_id or not vehicle_id.strip():
            raise ValidationError("Vehicle is required")
        return Job(
            id=None,
            customer_id=customer_id.strip(),
            vehicle_id=vehicle_id.strip(),
            service_type=service_type.strip(),
            discount_eligible=discount_eligible,
        )

    # --- State transitions ----------------------------------------------------

    def assign(self, mechanic_id: str) -> None:
        """Set the mechanic responsible for this job; status stays SCHEDULED.

        The caller must already have verified that *mechanic_id* is a
        mechanic.
        """
        if self.assigned_mechanic is not None:
            raise AlreadyAssignedError(
                f"Job #{self.id} is already assigned to mechanic '{self.assigned_mechanic}'"
            )
        self._require_status(JobStatus.SCHEDULED, "assign")
        self.assigned_mechanic = mechanic_id

    def start(self, caller_id: str, now: datetime | None = None) -> None:
        """Transition SCHEDULED -> IN_PROGRESS."""
        self._require_status(JobStatus.SCHEDULED, "start")
        self._require_assigned_mechanic(caller_id, "start")
        self.status = JobStatus.IN_PROGRESS
        self.started_at = now or _utcnow()

    def ensure_can_modify(self, caller_id: str) -> None:
        """Check that *caller_id* may add parts or labor right now.

        Called before any stock is taken so a rejected request never
        touches inventory.
        """
        self._require_status(JobStatus.IN_PROGRESS, "modify")
        self._require_assigned_mechanic(caller_id, "modify")

    def add_part(self, caller_id: str, snapshot: PartSnapshot, quantity: int) -> PartUsage:
        self.ensure_can_modify(caller_id)
        usage = PartUsage.from_snapshot(snapshot, quantity)
        self.parts_used.append(usage)
        return usage

    def add_labor(self, caller_id: str, description: str, cost: Money) -> LaborItem:
        self.ensure_can_modify(caller_id)
        item = LaborItem(description=description.strip(), cost=cost)
        self.labor_items.append(item)
        return item

    def ensure_can_complete(self, caller_id: str) -> None:
        self._require_status(JobStatus.IN_PROGRESS, "complete")
        self._require_assigned_mechanic(caller_id, "complete")

    def complete(
        self,
        caller_id: str,
        totals: InvoiceTotals,
        now: datetime | None = None,
    ) -> None:
        """Transition IN_PROGRESS -> COMPLETED and freeze the totals."""
        self.ensure_can_complete(caller_id)
        self.subtotal = totals.subtotal
        self.final_cost = totals.final_cost
        self.status = JobStatus.COMPLETED
        self.finished_at = now or _utcnow()

    def cancel(self) -> None:
        """Transition SCHEDULED -> CANCELLED."""
        self._require_status(JobStatus.SCHEDULED, "cancel")
        self.status = JobStatus.CANCELLED

    # --- Computed properties --------------------------------------------------

    @property
    def is_finished(self) -> bool:
        return self.status in (JobStatus.COMPLETED, JobStatus.CANCELLED)

    # --- Internal helpers -----------------------------------------------------

    def _require_status(self, expected: JobStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidTransitionError(
                f"Cannot {action} job #{self.id} — current status is "
                f"{self.status.value}, expected {expected.value}",
                current_status=self.status,
            )

    def _require_assigned_mechanic(self, caller_id: str, action: str) -> None:
        if self.assigned_mechanic is None or caller_id != self.assigned_mechanic:
            raise NotAuthorizedError(
                f"Not authorized to {action} job #{self.id}"
            )
