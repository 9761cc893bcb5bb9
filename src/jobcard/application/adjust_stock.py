"""Application services: direct stock movements through the ledger.

``DeductStockHandler`` takes stock out without a job (e.g. a damaged
part written off); ``RestoreStockHandler`` puts it back.
"""

from __future__ import annotations

from jobcard.application.dto import InventoryItemDTO, item_to_dto
from jobcard.domain.exceptions import EntityNotFoundError
from jobcard.domain.repository.inventory_repository import InventoryRepository
from jobcard.domain.service.inventory_ledger import InventoryLedger


class DeductStockHandler:

    def __init__(self, ledger: InventoryLedger, inventory_repo: InventoryRepository) -> None:
        self._ledger = ledger
        self._inventory_repo = inventory_repo

    def handle(self, item_id: str, quantity: int) -> InventoryItemDTO:
        self._ledger.deduct(item_id, quantity)
        item = self._inventory_repo.get_by_id(item_id)
        if item is None:
            raise EntityNotFoundError(f"Inventory item '{item_id}' not found")
        return item_to_dto(item)


class RestoreStockHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(self, item_id: str, quantity: int) -> InventoryItemDTO:
        return item_to_dto(self._ledger.restore(item_id, quantity))
