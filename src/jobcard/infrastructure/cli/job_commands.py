"""CLI commands for the Job aggregate."""

from __future__ import annotations

import click

from jobcard.application.add_labor import AddLaborHandler
from jobcard.application.add_part import AddPartHandler
from jobcard.application.assign_job import AssignJobHandler
from jobcard.application.cancel_job import CancelJobHandler
from jobcard.application.complete_job import CompleteJobHandler
from jobcard.application.create_job import CreateJobHandler
from jobcard.application.dto import JobDTO
from jobcard.application.show_job import ListJobsHandler, ShowJobHandler
from jobcard.application.start_job import StartJobHandler
from jobcard.domain.exceptions import DomainException
from jobcard.infrastructure.bootstrap import Container


def _display_job(dto: JobDTO) -> None:
    """Shared formatting for displaying a job card."""
    click.echo(f"Job #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}   Vehicle: {dto.vehicle_id}")
    if dto.service_type:
        click.echo(f"Service:  {dto.service_type}")
    click.echo(f"Mechanic: {dto.assigned_mechanic or '-'}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.started_at:
        click.echo(f"Started:  {dto.started_at}")
    if dto.finished_at:
        click.echo(f"Finished: {dto.finished_at}")
    click.echo()

    if dto.parts:
        click.echo(f"  {'Part':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
        click.echo(f"  {'-'*47}")
        for part in dto.parts:
            click.echo(
                f"  {part.name:<20} {part.quantity:>5} {part.sale_price:>10} {part.line_total:>10}"
            )
        click.echo()
    if dto.labor:
        click.echo(f"  {'Labor':<36} {'Cost':>10}")
        click.echo(f"  {'-'*47}")
        for item in dto.labor:
            click.echo(f"  {item.description:<36} {item.cost:>10}")
        click.echo()

    if dto.final_cost is not None:
        click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
        if dto.discount_eligible:
            click.echo(f"  {'Discount applied':<27} {'yes':>20}")
        click.echo(f"  {'Final Cost':<27} {dto.final_cost:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--vehicle", required=True, help="Vehicle ID or plate.")
@click.option("--service", "service_type", default="", help="Service type.")
@click.option("--discount-eligible", is_flag=True, default=False, help="Apply the loyalty discount.")
@click.pass_obj
def job_create(
    container: Container,
    customer: str,
    vehicle: str,
    service_type: str,
    discount_eligible: bool,
) -> None:
    """Book a new job (status Scheduled)."""
    handler = CreateJobHandler(job_repo=container.job_repository())
    try:
        dto = handler.handle(customer, vehicle, service_type, discount_eligible)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Job #{dto.id} created  (status={dto.status})")


@click.command("assign")
@click.option("--id", "job_id", required=True, type=int, help="Job ID.")
@click.option("--mechanic", required=True, help="Mechanic user ID.")
@click.pass_obj
def job_assign(container: Container, job_id: int, mechanic: str) -> None:
    """Assign a scheduled job to a mechanic."""
    handler = AssignJobHandler(
        job_repo=container.job_repository(),
        user_directory=container.user_directory(),
        locks=container.locks,
    )
    try:
        handler.handle(job_id, mechanic)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Job #{job_id} assigned to {mechanic}.")


@click.command("start")
@click.option("--id", "job_id", required=True, type=int, help="Job ID.")
@click.option("--as", "caller", required=True, help="Your (mechanic) user ID.")
@click.pass_obj
def job_start(container: Container, job_id: int, caller: str) -> None:
    """Start work on an assigned job."""
    handler = StartJobHandler(job_repo=container.job_repository(), locks=container.locks)
    try:
        handler.handle(job_id, caller)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Job #{job_id} started.")


@click.command("add-part")
@click.option("--id", "job_id", required=True, type=int, help="Job ID.")
@click.option("--as", "caller", required=True, help="Your (mechanic) user ID.")
@click.option("--item", "item_id", required=True, help="Inventory item ID.")
@click.option("--quantity", required=True, type=int, help="Units used.")
@click.pass_obj
def job_add_part(
    container: Container,
    job_id: int,
    caller: str,
    item_id: str,
    quantity: int,
) -> None:
    """Record a part used on a job (deducts stock)."""
    handler = AddPartHandler(
        job_repo=container.job_repository(),
        ledger=container.ledger(),
        locks=container.locks,
    )
    try:
        dto = handler.handle(job_id, caller, item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    part = dto.parts[-1]
    click.echo(f"Added {part.quantity} x {part.name} at {part.sale_price} to job #{job_id}.")


@click.command("add-labor")
@click.option("--id", "job_id", required=True, type=int, help="Job ID.")
@click.option("--as", "caller", required=True, help="Your (mechanic) user ID.")
@click.option("--description", required=True, help="What was done.")
@click.option("--cost", required=True, help="Labor cost (e.g. 50.00).")
@click.pass_obj
def job_add_labor(
    container: Container,
    job_id: int,
    caller: str,
    description: str,
    cost: str,
) -> None:
    """Record a labor line on a job."""
    handler = AddLaborHandler(
        job_repo=container.job_repository(),
        locks=container.locks,
        currency=container.settings.billing.currency,
    )
    try:
        handler.handle(job_id, caller, description, cost)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Labor '{description}' added to job #{job_id}.")


@click.command("complete")
@click.option("--id", "job_id", required=True, type=int, help="Job ID.")
@click.option("--as", "caller", required=True, help="Your (mechanic) user ID.")
@click.pass_obj
def job_complete(container: Container, job_id: int, caller: str) -> None:
    """Complete a job, freeze its totals and issue the invoice."""
    billing = container.settings.billing
    handler = CompleteJobHandler(
        job_repo=container.job_repository(),
        dispatcher=container.dispatcher(),
        locks=container.locks,
        discount_rate=billing.discount_rate,
        currency=billing.currency,
    )
    try:
        dto = handler.handle(job_id, caller)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Job #{job_id} completed — final cost {dto.final_cost}.")


@click.command("cancel")
@click.option("--id", "job_id", required=True, type=int, help="Job ID.")
@click.pass_obj
def job_cancel(container: Container, job_id: int) -> None:
    """Cancel a job that has not been started."""
    handler = CancelJobHandler(job_repo=container.job_repository(), locks=container.locks)
    try:
        handler.handle(job_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Job #{job_id} cancelled.")


@click.command("show")
@click.option("--id", "job_id", required=True, type=int, help="Job ID to display.")
@click.pass_obj
def job_show(container: Container, job_id: int) -> None:
    """Show a job card."""
    handler = ShowJobHandler(job_repo=container.job_repository())
    try:
        dto = handler.handle(job_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_job(dto)


@click.command("list")
@click.option("--mechanic", default=None, help="Only jobs assigned to this mechanic.")
@click.option("--unassigned", is_flag=True, default=False, help="Only open jobs with no mechanic.")
@click.pass_obj
def job_list(container: Container, mechanic: str | None, unassigned: bool) -> None:
    """List jobs."""
    handler = ListJobsHandler(job_repo=container.job_repository())
    jobs = handler.handle(mechanic_id=mechanic, unassigned=unassigned)

    if not jobs:
        click.echo("No jobs found.")
        return

    click.echo(f"{'ID':<6} {'Status':<12} {'Customer':<14} {'Vehicle':<14} {'Mechanic':<12}")
    click.echo("-" * 62)
    for dto in jobs:
        click.echo(
            f"{dto.id:<6} {dto.status:<12} {dto.customer_id:<14} "
            f"{dto.vehicle_id:<14} {dto.assigned_mechanic or '-':<12}"
        )
