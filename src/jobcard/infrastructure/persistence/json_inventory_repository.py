"""JSON-file-backed implementation of InventoryRepository."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from pathlib import Path

from jobcard.domain.model.inventory import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    DEFAULT_UNIT,
    InventoryItem,
)
from jobcard.domain.model.value_objects import Money
from jobcard.domain.repository.inventory_repository import InventoryRepository
from jobcard.infrastructure.persistence.json_store import JsonFileStore


class JsonInventoryRepository(InventoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- InventoryRepository interface ----------------------------------------

    def next_id(self) -> str:
        numeric = [int(raw["id"]) for raw in self._store.load() if raw["id"].isdigit()]
        return str(max(numeric, default=0) + 1)

    def get_by_id(self, item_id: str) -> InventoryItem | None:
        for raw in self._store.load():
            if raw["id"] == item_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> InventoryItem | None:
        for raw in self._store.load():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[InventoryItem]:
        items = [self._to_domain(raw) for raw in self._store.load()]
        return sorted(items, key=lambda item: item.name.lower())

    def list_low_stock(self) -> list[InventoryItem]:
        low = [item for item in self.list_all() if item.is_low_stock]
        return sorted(low, key=lambda item: item.quantity)

    def save(self, item: InventoryItem) -> None:
        with self._store.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == item.id:
                    records[i] = self._to_raw(item)
                    break
            else:
                records.append(self._to_raw(item))

    def decrement_if_available(self, item_id: str, quantity: int) -> InventoryItem | None:
        # Check and write happen under the same file lock.
        with self._store.lock:
            records = self._store.load()
            for raw in records:
                if raw["id"] == item_id:
                    if raw["quantity"] < quantity:
                        return None
                    raw["quantity"] -= quantity
                    self._store.persist(records)
                    return self._to_domain(raw)
            return None

    def increment(self, item_id: str, quantity: int) -> InventoryItem | None:
        with self._store.lock:
            records = self._store.load()
            for raw in records:
                if raw["id"] == item_id:
                    raw["quantity"] += quantity
                    self._store.persist(records)
                    return self._to_domain(raw)
            return None

    def update_fields(self, item_id: str, changes: Mapping[str, object]) -> InventoryItem | None:
        with self._store.lock:
            records = self._store.load()
            for i, raw in enumerate(records):
                if raw["id"] == item_id:
                    item = self._to_domain(raw)
                    for name, value in changes.items():
                        setattr(item, name, value)
                    records[i] = self._to_raw(item)
                    self._store.persist(records)
                    return item
            return None

    def delete(self, item_id: str) -> bool:
        with self._store.lock:
            records = self._store.load()
            remaining = [raw for raw in records if raw["id"] != item_id]
            if len(remaining) == len(records):
                return False
            self._store.persist(remaining)
            return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: InventoryItem) -> dict:
        return {
            "id": item.id,
            "name": item.name,
            "quantity": item.quantity,
            "unit": item.unit,
            "cost_price": str(item.cost_price.amount),
            "sale_price": str(item.sale_price.amount),
            "currency": item.sale_price.currency,
            "low_stock_threshold": item.low_stock_threshold,
            "part_number": item.part_number,
            "supplier": item.supplier,
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryItem:
        currency = raw.get("currency", "USD")
        return InventoryItem(
            id=raw["id"],
            name=raw["name"],
            quantity=raw["quantity"],
            cost_price=Money(Decimal(raw["cost_price"]), currency),
            sale_price=Money(Decimal(raw["sale_price"]), currency),
            unit=raw.get("unit", DEFAULT_UNIT),
            low_stock_threshold=raw.get("low_stock_threshold", DEFAULT_LOW_STOCK_THRESHOLD),
            part_number=raw.get("part_number"),
            supplier=raw.get("supplier"),
        )
