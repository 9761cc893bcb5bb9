"""Application services: inventory queries (catalog listing, low stock)."""

from __future__ import annotations

from jobcard.application.dto import InventoryItemDTO, item_to_dto
from jobcard.domain.repository.inventory_repository import InventoryRepository
from jobcard.domain.service.inventory_ledger import InventoryLedger


class ShowInventoryHandler:

    def __init__(self, inventory_repo: InventoryRepository) -> None:
        self._inventory_repo = inventory_repo

    def handle(self) -> list[InventoryItemDTO]:
        return [item_to_dto(item) for item in self._inventory_repo.list_all()]


class ListLowStockHandler:

    def __init__(self, ledger: InventoryLedger) -> None:
        self._ledger = ledger

    def handle(self) -> list[InventoryItemDTO]:
        return [item_to_dto(item) for item in self._ledger.find_low_stock()]
