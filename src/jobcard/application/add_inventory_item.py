"""Application service: Add Inventory Item use case (catalog management)."""

from __future__ import annotations

import logging

from jobcard.application.dto import InventoryItemDTO, item_to_dto
from jobcard.domain.exceptions import ValidationError
from jobcard.domain.model.inventory import InventoryItem
from jobcard.domain.model.value_objects import Money
from jobcard.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


class AddInventoryItemHandler:

    def __init__(self, inventory_repo: InventoryRepository, currency: str = "USD") -> None:
        self._inventory_repo = inventory_repo
        self._currency = currency

    def handle(
        self,
        name: str,
        cost_price: str,
        sale_price: str,
        quantity: int = 0,
        unit: str | None = None,
        low_stock_threshold: int | None = None,
        part_number: str | None = None,
        supplier: str | None = None,
    ) -> InventoryItemDTO:
        """Add a new part to the catalog; names are unique (case-insensitive)."""
        if name and self._inventory_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Item '{name.strip()}' already exists")

        item = InventoryItem.create(
            item_id=self._inventory_repo.next_id(),
            name=name,
            cost_price=Money.of(cost_price, self._currency),
            sale_price=Money.of(sale_price, self._currency),
            quantity=quantity,
            unit=unit,
            low_stock_threshold=low_stock_threshold,
            part_number=part_number,
            supplier=supplier,
        )
        self._inventory_repo.save(item)
        logger.info("Inventory item %s '%s' added with %d on hand", item.id, item.name, item.quantity)
        return item_to_dto(item)
