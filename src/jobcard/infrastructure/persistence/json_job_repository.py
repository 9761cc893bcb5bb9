"""JSON-file-backed implementation of JobRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from jobcard.domain.model.job import Job, JobStatus, LaborItem, PartUsage
from jobcard.domain.model.value_objects import Money, Quantity
from jobcard.domain.repository.job_repository import JobRepository
from jobcard.infrastructure.persistence.json_store import JsonFileStore


class JsonJobRepository(JobRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- JobRepository interface ----------------------------------------------

    def next_id(self) -> int:
        jobs = self._store.load()
        if not jobs:
            return 1
        return max(j["id"] for j in jobs) + 1

    def get_by_id(self, job_id: int) -> Job | None:
        for raw in self._store.load():
            if raw["id"] == job_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Job]:
        jobs = [self._to_domain(raw) for raw in self._store.load()]
        return sorted(jobs, key=lambda j: j.id)

    def save(self, job: Job) -> None:
        with self._store.transaction() as jobs:
            if job.id is None:
                job.id = max((j["id"] for j in jobs), default=0) + 1

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(jobs):
                if raw["id"] == job.id:
                    jobs[i] = self._to_raw(job)
                    break
            else:
                jobs.append(self._to_raw(job))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(job: Job) -> dict:
        return {
            "id": job.id,
            "customer_id": job.customer_id,
            "vehicle_id": job.vehicle_id,
            "service_type": job.service_type,
            "status": job.status.value,
            "assigned_mechanic": job.assigned_mechanic,
            "discount_eligible": job.discount_eligible,
            "parts_used": [
                {
                    "item_id": part.item_id,
                    "name": part.name,
                    "sale_price": str(part.sale_price.amount),
                    "currency": part.sale_price.currency,
                    "quantity": part.quantity.value,
                }
                for part in job.parts_used
            ],
            "labor_items": [
                {
                    "description": item.description,
                    "cost": str(item.cost.amount),
                    "currency": item.cost.currency,
                }
                for item in job.labor_items
            ],
            "subtotal": _dump_money(job.subtotal),
            "final_cost": _dump_money(job.final_cost),
            "created_at": job.created_at.isoformat(),
            "started_at": _dump_time(job.started_at),
            "finished_at": _dump_time(job.finished_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Job:
        return Job(
            id=raw["id"],
            customer_id=raw["customer_id"],
            vehicle_id=raw["vehicle_id"],
            service_type=raw.get("service_type", ""),
            status=JobStatus(raw["status"]),
            assigned_mechanic=raw.get("assigned_mechanic"),
            parts_used=[
                PartUsage(
                    item_id=p["item_id"],
                    name=p["name"],
                    sale_price=Money(Decimal(p["sale_price"]), p.get("currency", "USD")),
                    quantity=Quantity(p["quantity"]),
                )
                for p in raw.get("parts_used", [])
            ],
            labor_items=[
                LaborItem(
                    description=li["description"],
                    cost=Money(Decimal(li["cost"]), li.get("currency", "USD")),
                )
                for li in raw.get("labor_items", [])
            ],
            discount_eligible=raw.get("discount_eligible", False),
            subtotal=_load_money(raw.get("subtotal")),
            final_cost=_load_money(raw.get("final_cost")),
            created_at=datetime.fromisoformat(raw["created_at"]),
            started_at=_load_time(raw.get("started_at")),
            finished_at=_load_time(raw.get("finished_at")),
        )


def _dump_money(value: Money | None) -> dict | None:
    if value is None:
        return None
    return {"amount": str(value.amount), "currency": value.currency}


def _load_money(raw: dict | None) -> Money | None:
    if raw is None:
        return None
    return Money(Decimal(raw["amount"]), raw.get("currency", "USD"))


def _dump_time(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def _load_time(raw: str | None) -> datetime | None:
    return None if raw is None else datetime.fromisoformat(raw)
