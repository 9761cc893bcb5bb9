"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings are passed in
explicitly; nothing here reads the environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import create_engine

from jobcard.application.locks import JobLocks
from jobcard.domain.repository.inventory_repository import InventoryRepository
from jobcard.domain.service.inventory_ledger import InventoryLedger
from jobcard.infrastructure.config import Settings
from jobcard.infrastructure.notifications.outbox_dispatcher import (
    OutboxNotificationDispatcher,
)
from jobcard.infrastructure.persistence.file_locks import FileJobLocks
from jobcard.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryRepository,
)
from jobcard.infrastructure.persistence.json_job_repository import JsonJobRepository
from jobcard.infrastructure.persistence.json_user_directory import JsonUserDirectory
from jobcard.infrastructure.persistence.sql_inventory_repository import (
    SqlInventoryRepository,
)


@dataclass
class Container:
    settings: Settings
    locks: JobLocks | None = None
    _inventory_repo: InventoryRepository | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        # One process per CLI command: job locks must hold across processes.
        if self.locks is None:
            self.locks = FileJobLocks(self.settings.data_dir / "locks")

    def job_repository(self) -> JsonJobRepository:
        return JsonJobRepository(self.settings.data_dir / "jobs.json")

    def user_directory(self) -> JsonUserDirectory:
        return JsonUserDirectory(self.settings.data_dir / "users.json")

    def inventory_repository(self) -> InventoryRepository:
        if self._inventory_repo is None:
            if self.settings.database_url:
                repo = SqlInventoryRepository(create_engine(self.settings.database_url))
                repo.create_schema()
                self._inventory_repo = repo
            else:
                self._inventory_repo = JsonInventoryRepository(
                    self.settings.data_dir / "inventory.json"
                )
        return self._inventory_repo

    def ledger(self) -> InventoryLedger:
        return InventoryLedger(self.inventory_repository())

    def dispatcher(self) -> OutboxNotificationDispatcher:
        return OutboxNotificationDispatcher(self.settings.data_dir / "outbox")
