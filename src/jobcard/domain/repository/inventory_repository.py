"""Abstract repository for the InventoryItem aggregate.

Besides plain load/save, implementations must provide two atomic stock
primitives.  ``decrement_if_available`` is a single conditional update
("subtract n where quantity >= n"): two concurrent callers can never both
observe the same starting quantity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping

from jobcard.domain.model.inventory import InventoryItem


class InventoryRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique item ID."""

    @abstractmethod
    def get_by_id(self, item_id: str) -> InventoryItem | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> InventoryItem | None:
        """Return an item by name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryItem]:
        """Return every item, ordered by name."""

    @abstractmethod
    def list_low_stock(self) -> list[InventoryItem]:
        """Return items with quantity <= threshold, lowest quantity first."""

    @abstractmethod
    def save(self, item: InventoryItem) -> None:
        """Persist a new item, or replace a stored one wholesale."""

    @abstractmethod
    def decrement_if_available(self, item_id: str, quantity: int) -> InventoryItem | None:
        """Atomically subtract *quantity* if at least that much is on hand.

        Returns the updated item, or None when the item is missing or has
        too little stock.  Nothing is changed in the latter case.
        """

    @abstractmethod
    def increment(self, item_id: str, quantity: int) -> InventoryItem | None:
        """Atomically add *quantity*; returns the updated item or None if missing."""

    @abstractmethod
    def update_fields(self, item_id: str, changes: Mapping[str, object]) -> InventoryItem | None:
        """Atomically overwrite only the named attributes of one item.

        Keys are ``InventoryItem`` attribute names.  Attributes not named,
        stock on hand in particular, keep whatever value is stored at the
        moment of the write.  Returns the updated item or None if missing.
        """

    @abstractmethod
    def delete(self, item_id: str) -> bool:
        """Remove an item; returns False if it did not exist."""
