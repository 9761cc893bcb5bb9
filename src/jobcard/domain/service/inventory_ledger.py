"""Domain service: Inventory Ledger.

The single source of truth for stock counts.  Every deduction goes
through the repository's atomic conditional decrement, so no job can take
more stock than exists at that moment, even when several mechanics draw
on the same item concurrently.
"""

from __future__ import annotations

import logging

from jobcard.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from jobcard.domain.model.inventory import InventoryItem, PartSnapshot
from jobcard.domain.repository.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def deduct(self, item_id: str, quantity: int) -> PartSnapshot:
        """Take *quantity* units of an item out of stock.

        Returns the item's name and sale price as of the deduction.
        Raises InsufficientStockError when too few units are on hand, in
        which case stock is left untouched.
        """
        _require_positive(quantity, "Deduct")

        while True:
            updated = self._inventory_repo.decrement_if_available(item_id, quantity)
            if updated is not None:
                break
            # The conditional update did not apply; find out why.
            current = self._inventory_repo.get_by_id(item_id)
            if current is None:
                raise EntityNotFoundError(f"Inventory item '{item_id}' not found")
            if current.quantity < quantity:
                raise InsufficientStockError(
                    f"Insufficient stock for {current.name} "
                    f"(need {quantity}, have {current.quantity} available)",
                    available=current.quantity,
                )
            # Restocked between the update and the read: try again.
            logger.debug("Item %s restocked during deduction, retrying", item_id)

        logger.info(
            "Deducted %d x %s (item %s), %d left",
            quantity, updated.name, item_id, updated.quantity,
        )
        if updated.is_low_stock:
            logger.warning(
                "Item %s (%s) is low on stock: %d <= %d",
                item_id, updated.name, updated.quantity, updated.low_stock_threshold,
            )
        return updated.snapshot()

    def restore(self, item_id: str, quantity: int) -> InventoryItem:
        """Put *quantity* units back into stock."""
        _require_positive(quantity, "Restore")

        updated = self._inventory_repo.increment(item_id, quantity)
        if updated is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")

        logger.info(
            "Restored %d x %s (item %s), now %d",
            quantity, updated.name, item_id, updated.quantity,
        )
        return updated

    def find_low_stock(self) -> list[InventoryItem]:
        """Items at or below their threshold, lowest quantity first."""
        return self._inventory_repo.list_low_stock()


def _require_positive(quantity: int, verb: str) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise ValidationError(f"{verb} quantity must be a positive integer")
