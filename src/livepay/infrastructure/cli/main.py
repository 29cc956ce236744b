import click

from livepay.domain.exceptions import ConfigurationError
from livepay.infrastructure.bootstrap import build_container
from livepay.infrastructure.cli.inventory_commands import inventory_set, inventory_show
from livepay.infrastructure.cli.outbox_commands import outbox_drain, outbox_pending
from livepay.infrastructure.cli.order_commands import (
    order_cancel,
    order_list,
    order_reserve,
    order_show,
)
from livepay.infrastructure.cli.payment_commands import payments_simulate
from livepay.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update,
)
from livepay.infrastructure.cli.scheduler_commands import scheduler_run, scheduler_sweep
from livepay.infrastructure.cli.vendor_commands import vendor_configure, vendor_show
from livepay.infrastructure.config import Settings
from livepay.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override LIVEPAY_LOG_LEVEL.")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """LivePay: live-sale reservations and payment settlement"""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    configure_logging(log_level or settings.log_level)
    ctx.obj = build_container(settings)


@cli.group()
def order() -> None:
    """Reserve, inspect and cancel orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage stock levels."""


@cli.group()
def vendor() -> None:
    """Manage vendor settings."""


@cli.group()
def payments() -> None:
    """Payment provider tools."""


@cli.group()
def scheduler() -> None:
    """Run the expiration sweep."""


@cli.group()
def outbox() -> None:
    """Notifications waiting for the chat collaborator."""


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--no-scheduler", is_flag=True, default=False, help="Do not run the sweep.")
@click.pass_obj
def serve(container, host: str, port: int, no_scheduler: bool) -> None:
    """Serve the HTTP API (reservations, webhooks, payment pages)."""
    import uvicorn

    from livepay.infrastructure.web.app import create_app

    app = create_app(container, run_scheduler=not no_scheduler)
    # One worker: locks are in-process.
    uvicorn.run(app, host=host, port=port, workers=1)


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_list)
order.add_command(order_reserve)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
vendor.add_command(vendor_configure)
vendor.add_command(vendor_show)
payments.add_command(payments_simulate)
scheduler.add_command(scheduler_run)
scheduler.add_command(scheduler_sweep)
outbox.add_command(outbox_drain)
outbox.add_command(outbox_pending)
