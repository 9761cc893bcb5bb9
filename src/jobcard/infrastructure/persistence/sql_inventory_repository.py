"""SQLAlchemy-backed implementation of InventoryRepository.

Stock deduction is a single conditional UPDATE::

    UPDATE inventory_items
       SET quantity = quantity - :n
     WHERE id = :id AND quantity >= :n

and the affected row count says whether it applied.  The database
serializes concurrent updates on the same row, so this stays correct
across processes, not only across threads.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Engine,
    Integer,
    Numeric,
    String,
    delete,
    func,
    select,
    update,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from jobcard.domain.exceptions import PersistenceError
from jobcard.domain.model.inventory import InventoryItem
from jobcard.domain.model.value_objects import Money
from jobcard.domain.repository.inventory_repository import InventoryRepository


class Base(DeclarativeBase):
    pass


class InventoryRow(Base):
    __tablename__ = "inventory_items"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_inventory_items_quantity_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    unit: Mapped[str] = mapped_column(String(32), default="units", nullable=False)
    cost_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    sale_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    low_stock_threshold: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    part_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    supplier: Mapped[str | None] = mapped_column(String(200), nullable=True)

    def __repr__(self) -> str:
        return f"<InventoryRow id={self.id} name={self.name!r} qty={self.quantity}>"


class SqlInventoryRepository(InventoryRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot create inventory schema: {exc}") from exc

    # --- InventoryRepository interface ----------------------------------------

    def next_id(self) -> str:
        try:
            with self._session_factory() as session:
                ids = session.scalars(select(InventoryRow.id)).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot read inventory: {exc}") from exc
        numeric = [int(i) for i in ids if i.isdigit()]
        return str(max(numeric, default=0) + 1)

    def get_by_id(self, item_id: str) -> InventoryItem | None:
        try:
            with self._session_factory() as session:
                row = session.get(InventoryRow, item_id)
                return None if row is None else self._to_domain(row)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot read inventory item {item_id}: {exc}") from exc

    def get_by_name(self, name: str) -> InventoryItem | None:
        query = select(InventoryRow).where(func.lower(InventoryRow.name) == name.lower())
        try:
            with self._session_factory() as session:
                row = session.scalars(query).first()
                return None if row is None else self._to_domain(row)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot read inventory item '{name}': {exc}") from exc

    def list_all(self) -> list[InventoryItem]:
        return self._list(select(InventoryRow).order_by(func.lower(InventoryRow.name)))

    def list_low_stock(self) -> list[InventoryItem]:
        query = (
            select(InventoryRow)
            .where(InventoryRow.quantity <= InventoryRow.low_stock_threshold)
            .order_by(InventoryRow.quantity.asc(), InventoryRow.id.asc())
        )
        return self._list(query)

    def save(self, item: InventoryItem) -> None:
        try:
            with self._session_factory.begin() as session:
                session.merge(self._to_row(item))
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot save inventory item {item.id}: {exc}") from exc

    def decrement_if_available(self, item_id: str, quantity: int) -> InventoryItem | None:
        stmt = (
            update(InventoryRow)
            .where(InventoryRow.id == item_id, InventoryRow.quantity >= quantity)
            .values(quantity=InventoryRow.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return self._apply(stmt, item_id)

    def increment(self, item_id: str, quantity: int) -> InventoryItem | None:
        stmt = (
            update(InventoryRow)
            .where(InventoryRow.id == item_id)
            .values(quantity=InventoryRow.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return self._apply(stmt, item_id)

    def update_fields(self, item_id: str, changes: Mapping[str, object]) -> InventoryItem | None:
        values: dict[str, object] = {}
        for name, value in changes.items():
            if isinstance(value, Money):
                values[name] = value.amount
                values["currency"] = value.currency
            else:
                values[name] = value
        if not values:
            return self.get_by_id(item_id)
        stmt = (
            update(InventoryRow)
            .where(InventoryRow.id == item_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self._apply(stmt, item_id)

    def delete(self, item_id: str) -> bool:
        stmt = delete(InventoryRow).where(InventoryRow.id == item_id)
        try:
            with self._session_factory.begin() as session:
                return session.execute(stmt).rowcount == 1
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot delete inventory item {item_id}: {exc}") from exc

    # --- Internal helpers -----------------------------------------------------

    def _apply(self, stmt, item_id: str) -> InventoryItem | None:
        """Run a single-row UPDATE; return the row as it now is, or None."""
        try:
            with self._session_factory.begin() as session:
                result = session.execute(stmt)
                if result.rowcount != 1:
                    return None
                row = session.get(InventoryRow, item_id)
                return self._to_domain(row)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot update inventory item {item_id}: {exc}") from exc

    def _list(self, query) -> list[InventoryItem]:
        try:
            with self._session_factory() as session:
                return [self._to_domain(row) for row in session.scalars(query).all()]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot read inventory: {exc}") from exc

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(item: InventoryItem) -> InventoryRow:
        return InventoryRow(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
            cost_price=item.cost_price.amount,
            sale_price=item.sale_price.amount,
            currency=item.sale_price.currency,
            low_stock_threshold=item.low_stock_threshold,
            part_number=item.part_number,
            supplier=item.supplier,
        )

    @staticmethod
    def _to_domain(row: InventoryRow) -> InventoryItem:
        return InventoryItem(
            id=row.id,
            name=row.name,
            quantity=row.quantity,
            cost_price=Money(Decimal(row.cost_price), row.currency),
            sale_price=Money(Decimal(row.sale_price), row.currency),
            unit=row.unit,
            low_stock_threshold=row.low_stock_threshold,
            part_number=row.part_number,
            supplier=row.supplier,
        )
