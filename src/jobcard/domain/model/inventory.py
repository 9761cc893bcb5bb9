"""InventoryItem aggregate: one stocked part in the shop catalog.

Stock on hand is only ever changed through the repository's atomic
primitives (used by the inventory ledger) or by an explicit catalog edit.
"""

from __future__ import annotations

from dataclasses import dataclass

from jobcard.domain.exceptions import ValidationError
from jobcard.domain.model.value_objects import Money

DEFAULT_UNIT = "units"
DEFAULT_LOW_STOCK_THRESHOLD = 5


@dataclass(frozen=True)
class PartSnapshot:
    """Name and sale price of an item as they were when stock was taken."""

    item_id: str
    name: str
    sale_price: Money


@dataclass
class InventoryItem:
    """Aggregate root for a stocked part.

    Invariants:
    - ``quantity`` is never negative
    - ``name`` is never blank
    """

    id: str
    name: str
    quantity: int
    cost_price: Money
    sale_price: Money
    unit: str = DEFAULT_UNIT
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    part_number: str | None = None
    supplier: str | None = None

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        item_id: str,
        name: str,
        cost_price: Money,
        sale_price: Money,
        quantity: int = 0,
        unit: str | None = None,
        low_stock_threshold: int | None = None,
        part_number: str | None = None,
        supplier: str | None = None,
    ) -> InventoryItem:
        """Create a new catalog item, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        _check_quantity(quantity)
        threshold = (
            DEFAULT_LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
        )
        _check_threshold(threshold)
        return InventoryItem(
            id=item_id,
            name=name.strip(),
            quantity=quantity,
            cost_price=cost_price,
            sale_price=sale_price,
            unit=(unit or DEFAULT_UNIT).strip() or DEFAULT_UNIT,
            low_stock_threshold=threshold,
            part_number=part_number,
            supplier=supplier,
        )

    def snapshot(self) -> PartSnapshot:
        return PartSnapshot(item_id=self.id, name=self.name, sale_price=self.sale_price)

    # --- Catalog edits --------------------------------------------------------

    def set_quantity(self, quantity: int) -> None:
        _check_quantity(quantity)
        self.quantity = quantity

    def set_low_stock_threshold(self, threshold: int) -> None:
        _check_threshold(threshold)
        self.low_stock_threshold = threshold

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Item name is required")
        self.name = name.strip()

    # --- Queries --------------------------------------------------------------

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.low_stock_threshold


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(f"Quantity must be an integer, got {quantity!r}")
    if quantity < 0:
        raise ValidationError("Quantity on hand cannot be negative")


def _check_threshold(threshold: int) -> None:
    if not isinstance(threshold, int) or isinstance(threshold, bool):
        raise ValidationError(f"Low-stock threshold must be an integer, got {threshold!r}")
    if threshold < 0:
        raise ValidationError("Low-stock threshold cannot be negative")
