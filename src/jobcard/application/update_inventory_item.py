"""Application service: Update Inventory Item use case (catalog edits).

Price changes here never affect jobs that already used the part; those
keep the price snapshot taken when the part was added.

Only the edited attributes are written back.  Stock on hand is left to
the ledger unless a corrected count is given explicitly, so a deduction
that lands while an edit is in flight is never undone by it.
"""

from __future__ import annotations

import logging

from jobcard.application.dto import InventoryItemDTO, item_to_dto
from jobcard.domain.exceptions import EntityNotFoundError, ValidationError
from jobcard.domain.model.value_objects import Money
from jobcard.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


class UpdateInventoryItemHandler:

    def __init__(self, inventory_repo: InventoryRepository, currency: str = "USD") -> None:
        self._inventory_repo = inventory_repo
        self._currency = currency

    def handle(
        self,
        item_id: str,
        name: str | None = None,
        cost_price: str | None = None,
        sale_price: str | None = None,
        quantity: int | None = None,
        unit: str | None = None,
        low_stock_threshold: int | None = None,
        part_number: str | None = None,
        supplier: str | None = None,
    ) -> InventoryItemDTO:
        """Apply a partial edit; ``None`` leaves a field unchanged."""
        item = self._inventory_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")

        # Edits are validated on the loaded copy; only their results are stored.
        changes: dict[str, object] = {}
        if name is not None and name.strip().lower() != item.name.lower():
            clash = self._inventory_repo.get_by_name(name.strip())
            if clash is not None and clash.id != item.id:
                raise ValidationError(f"Item '{name.strip()}' already exists")
            item.rename(name)
            changes["name"] = item.name
        if cost_price is not None:
            changes["cost_price"] = Money.of(cost_price, self._currency)
        if sale_price is not None:
            changes["sale_price"] = Money.of(sale_price, self._currency)
        if quantity is not None:
            item.set_quantity(quantity)
            changes["quantity"] = item.quantity
        if unit is not None and unit.strip():
            changes["unit"] = unit.strip()
        if low_stock_threshold is not None:
            item.set_low_stock_threshold(low_stock_threshold)
            changes["low_stock_threshold"] = item.low_stock_threshold
        if part_number is not None:
            changes["part_number"] = part_number
        if supplier is not None:
            changes["supplier"] = supplier

        if not changes:
            return item_to_dto(item)

        updated = self._inventory_repo.update_fields(item_id, changes)
        if updated is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")
        logger.info("Inventory item %s updated: %s", item_id, ", ".join(sorted(changes)))
        return item_to_dto(updated)
