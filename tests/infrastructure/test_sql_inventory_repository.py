"""Tests for the SQLAlchemy inventory repository on in-memory SQLite."""

import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from jobcard.domain.model.inventory import InventoryItem
from jobcard.domain.model.value_objects import Money
from jobcard.infrastructure.persistence.sql_inventory_repository import SqlInventoryRepository


@pytest.fixture
def repo():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    repository = SqlInventoryRepository(engine)
    repository.create_schema()
    yield repository
    engine.dispose()


def _item(item_id="1", name="Brake Pad", quantity=10) -> InventoryItem:
    return InventoryItem.create(
        item_id,
        name,
        cost_price=Money.of("12.00"),
        sale_price=Money.of("20.00"),
        quantity=quantity,
        part_number="BP-100",
    )


class TestSqlInventoryRepository:

    def test_save_and_reload(self, repo):
        repo.save(_item())
        loaded = repo.get_by_id("1")
        assert loaded.name == "Brake Pad"
        assert loaded.sale_price == Money.of("20.00")
        assert loaded.part_number == "BP-100"
        assert repo.get_by_name("brake pad").id == "1"
        assert repo.next_id() == "2"

    def test_save_updates_existing_row(self, repo):
        repo.save(_item())
        item = repo.get_by_id("1")
        item.sale_price = Money.of("22.50")
        repo.save(item)
        assert repo.get_by_id("1").sale_price == Money.of("22.50")
        assert len(repo.list_all()) == 1

    def test_decrement_if_available(self, repo):
        repo.save(_item(quantity=4))
        assert repo.decrement_if_available("1", 4).quantity == 0
        assert repo.decrement_if_available("1", 1) is None
        assert repo.decrement_if_available("missing", 1) is None

    def test_increment(self, repo):
        repo.save(_item(quantity=0))
        assert repo.increment("1", 3).quantity == 3
        assert repo.increment("missing", 3) is None

    def test_list_low_stock(self, repo):
        repo.save(_item("1", "Oil Filter", quantity=5))
        repo.save(_item("2", "Brake Pad", quantity=1))
        repo.save(_item("3", "Spark Plug", quantity=6))
        assert [i.id for i in repo.list_low_stock()] == ["2", "1"]

    def test_concurrent_decrements_never_oversell(self, tmp_path):
        # One file database so each thread gets its own connection.
        engine = create_engine(f"sqlite:///{tmp_path / 'inventory.db'}")
        repo = SqlInventoryRepository(engine)
        repo.create_schema()
        repo.save(_item(quantity=10))
        results = []
        lock = threading.Lock()

        def take():
            outcome = repo.decrement_if_available("1", 3)
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=take) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(r is not None for r in results) == 3
        assert repo.get_by_id("1").quantity == 1
        engine.dispose()


class TestSqlCatalogEdits:

    def test_update_fields_leaves_stock_alone(self, repo):
        repo.save(_item(quantity=5))
        repo.decrement_if_available("1", 4)

        updated = repo.update_fields("1", {"sale_price": Money.of("25.00"), "supplier": "Acme"})

        assert updated.quantity == 1
        assert updated.sale_price == Money.of("25.00")
        assert repo.get_by_id("1").supplier == "Acme"
        assert repo.update_fields("missing", {"unit": "box"}) is None

    def test_delete(self, repo):
        repo.save(_item())
        assert repo.delete("1") is True
        assert repo.delete("1") is False
        assert repo.get_by_id("1") is None
