import click

from jobcard.infrastructure.bootstrap import Container
from jobcard.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_deduct,
    inventory_delete,
    inventory_low_stock,
    inventory_restore,
    inventory_show,
    inventory_update,
)
from jobcard.infrastructure.cli.job_commands import (
    job_add_labor,
    job_add_part,
    job_assign,
    job_cancel,
    job_complete,
    job_create,
    job_list,
    job_show,
    job_start,
)
from jobcard.infrastructure.cli.user_commands import user_add, user_list
from jobcard.infrastructure.config import ConfigError, load_settings
from jobcard.infrastructure.logging_config import configure_logging


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Path to a jobcard.toml file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """Jobcard — workshop job and parts tracking"""
    try:
        settings = load_settings(config_path)
    except ConfigError as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level)
    ctx.obj = Container(settings=settings)


@cli.group()
def job() -> None:
    """Manage repair jobs."""


@cli.group()
def inventory() -> None:
    """Manage parts inventory."""


@cli.group()
def user() -> None:
    """Manage the local user directory."""


# Register subcommands
job.add_command(job_add_labor)
job.add_command(job_add_part)
job.add_command(job_assign)
job.add_command(job_cancel)
job.add_command(job_complete)
job.add_command(job_create)
job.add_command(job_list)
job.add_command(job_show)
job.add_command(job_start)
inventory.add_command(inventory_add)
inventory.add_command(inventory_deduct)
inventory.add_command(inventory_delete)
inventory.add_command(inventory_low_stock)
inventory.add_command(inventory_restore)
inventory.add_command(inventory_show)
inventory.add_command(inventory_update)
user.add_command(user_add)
user.add_command(user_list)
