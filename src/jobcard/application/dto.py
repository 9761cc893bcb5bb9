"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from jobcard.domain.model.inventory import InventoryItem
from jobcard.domain.model.job import Job
from jobcard.domain.model.value_objects import Money

_TIME_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class PartUsageDTO:
    item_id: str
    name: str
    quantity: int
    sale_price: str  # formatted, e.g. "$20.00"
    line_total: str


@dataclass(frozen=True)
class LaborItemDTO:
    description: str
    cost: str


@dataclass(frozen=True)
class JobDTO:
    """Output: a job as displayed to the user."""

    id: int
    customer_id: str
    vehicle_id: str
    service_type: str
    status: str
    assigned_mechanic: str | None
    parts: list[PartUsageDTO]
    labor: list[LaborItemDTO]
    discount_eligible: bool
    subtotal: str | None
    final_cost: str | None
    created_at: str
    started_at: str | None
    finished_at: str | None


@dataclass(frozen=True)
class InventoryItemDTO:
    id: str
    name: str
    quantity: int
    unit: str
    cost_price: str
    sale_price: str
    low_stock_threshold: int
    is_low_stock: bool
    part_number: str | None = None
    supplier: str | None = None


# --- Mapping ------------------------------------------------------------------


def job_to_dto(job: Job) -> JobDTO:
    return JobDTO(
        id=job.id,  # type: ignore[arg-type]
        customer_id=job.customer_id,
        vehicle_id=job.vehicle_id,
        service_type=job.service_type,
        status=job.status.value,
        assigned_mechanic=job.assigned_mechanic,
        parts=[
            PartUsageDTO(
                item_id=part.item_id,
                name=part.name,
                quantity=part.quantity.value,
                sale_price=str(part.sale_price),
                line_total=str(part.line_total),
            )
            for part in job.parts_used
        ],
        labor=[
            LaborItemDTO(description=item.description, cost=str(item.cost))
            for item in job.labor_items
        ],
        discount_eligible=job.discount_eligible,
        subtotal=_money(job.subtotal),
        final_cost=_money(job.final_cost),
        created_at=job.created_at.strftime(_TIME_FORMAT),
        started_at=_time(job.started_at),
        finished_at=_time(job.finished_at),
    )


def item_to_dto(item: InventoryItem) -> InventoryItemDTO:
    return InventoryItemDTO(
        id=item.id,
        name=item.name,
        quantity=item.quantity,
        unit=item.unit,
        cost_price=str(item.cost_price),
        sale_price=str(item.sale_price),
        low_stock_threshold=item.low_stock_threshold,
        is_low_stock=item.is_low_stock,
        part_number=item.part_number,
        supplier=item.supplier,
    )


def _money(value: Money | None) -> str | None:
    return None if value is None else str(value)


def _time(value: datetime | None) -> str | None:
    return None if value is None else value.strftime(_TIME_FORMAT)
