"""CLI commands for inventory management."""

from __future__ import annotations

import click

from jobcard.application.add_inventory_item import AddInventoryItemHandler
from jobcard.application.adjust_stock import DeductStockHandler, RestoreStockHandler
from jobcard.application.delete_inventory_item import DeleteInventoryItemHandler
from jobcard.application.dto import InventoryItemDTO
from jobcard.application.show_inventory import ListLowStockHandler, ShowInventoryHandler
from jobcard.application.update_inventory_item import UpdateInventoryItemHandler
from jobcard.domain.exceptions import DomainException
from jobcard.infrastructure.bootstrap import Container


def _print_items(items: list[InventoryItemDTO]) -> None:
    click.echo(f"{'ID':<6} {'Name':<20} {'Qty':>6} {'Unit':<8} {'Sale':>10} {'Low at':>7}")
    click.echo("-" * 62)
    for item in items:
        flag = " !" if item.is_low_stock else ""
        click.echo(
            f"{item.id:<6} {item.name:<20} {item.quantity:>6} {item.unit:<8} "
            f"{item.sale_price:>10} {item.low_stock_threshold:>7}{flag}"
        )


@click.command("add")
@click.option("--name", required=True, help="Part name.")
@click.option("--cost-price", required=True, help="Purchase price (e.g. 12.00).")
@click.option("--sale-price", required=True, help="Price charged to customers.")
@click.option("--quantity", default=0, type=int, help="Units in stock.")
@click.option("--unit", default=None, help="Unit label (default: units).")
@click.option("--threshold", default=None, type=int, help="Low-stock threshold (default: 5).")
@click.option("--part-number", default=None, help="Manufacturer part number.")
@click.option("--supplier", default=None, help="Supplier name.")
@click.pass_obj
def inventory_add(
    container: Container,
    name: str,
    cost_price: str,
    sale_price: str,
    quantity: int,
    unit: str | None,
    threshold: int | None,
    part_number: str | None,
    supplier: str | None,
) -> None:
    """Add a part to the catalog."""
    handler = AddInventoryItemHandler(
        inventory_repo=container.inventory_repository(),
        currency=container.settings.billing.currency,
    )
    try:
        dto = handler.handle(
            name=name,
            cost_price=cost_price,
            sale_price=sale_price,
            quantity=quantity,
            unit=unit,
            low_stock_threshold=threshold,
            part_number=part_number,
            supplier=supplier,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{dto.id} '{dto.name}' added ({dto.quantity} {dto.unit} at {dto.sale_price})")


@click.command("update")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--cost-price", default=None, help="New purchase price.")
@click.option("--sale-price", default=None, help="New sale price.")
@click.option("--quantity", default=None, type=int, help="Correct the stock count.")
@click.option("--unit", default=None, help="New unit label.")
@click.option("--threshold", default=None, type=int, help="New low-stock threshold.")
@click.pass_obj
def inventory_update(
    container: Container,
    item_id: str,
    name: str | None,
    cost_price: str | None,
    sale_price: str | None,
    quantity: int | None,
    unit: str | None,
    threshold: int | None,
) -> None:
    """Edit a catalog item."""
    handler = UpdateInventoryItemHandler(
        inventory_repo=container.inventory_repository(),
        currency=container.settings.billing.currency,
    )
    try:
        handler.handle(
            item_id=item_id,
            name=name,
            cost_price=cost_price,
            sale_price=sale_price,
            quantity=quantity,
            unit=unit,
            low_stock_threshold=threshold,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item_id} updated.")


@click.command("show")
@click.pass_obj
def inventory_show(container: Container) -> None:
    """Show current stock levels."""
    items = ShowInventoryHandler(container.inventory_repository()).handle()
    if not items:
        click.echo("No inventory records found.")
        return
    _print_items(items)


@click.command("low-stock")
@click.pass_obj
def inventory_low_stock(container: Container) -> None:
    """List items at or below their low-stock threshold."""
    items = ListLowStockHandler(container.ledger()).handle()
    if not items:
        click.echo("No items are low on stock.")
        return
    _print_items(items)


@click.command("deduct")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.option("--quantity", required=True, type=int, help="Units to take out.")
@click.pass_obj
def inventory_deduct(container: Container, item_id: str, quantity: int) -> None:
    """Take stock out without a job (write-off)."""
    handler = DeductStockHandler(container.ledger(), container.inventory_repository())
    try:
        dto = handler.handle(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"{dto.name}: {dto.quantity} {dto.unit} left.")


@click.command("restore")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.option("--quantity", required=True, type=int, help="Units to put back.")
@click.pass_obj
def inventory_restore(container: Container, item_id: str, quantity: int) -> None:
    """Put stock back."""
    handler = RestoreStockHandler(container.ledger())
    try:
        dto = handler.handle(item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"{dto.name}: {dto.quantity} {dto.unit} on hand.")


@click.command("delete")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.pass_obj
def inventory_delete(container: Container, item_id: str) -> None:
    """Remove an item from the catalog."""
    handler = DeleteInventoryItemHandler(
        inventory_repo=container.inventory_repository(),
        job_repo=container.job_repository(),
    )
    try:
        dto = handler.handle(item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Item #{dto.id} '{dto.name}' deleted.")
