"""CLI commands for vendor settings."""

from __future__ import annotations

import click

from livepay.application.configure_vendor import load_vendor_config
from livepay.domain.exceptions import DomainException


@click.command("configure")
@click.option("--vendor", "vendor_id", required=True, help="Vendor ID.")
@click.option("--name", "business_name", default=None, help="Business name shown to buyers.")
@click.option("--reservation-minutes", type=int, default=None, help="Hold length.")
@click.option("--reminders/--no-reminders", default=None, help="Automatic payment reminders.")
@click.option("--low-stock", type=int, default=None, help="Low-stock alert threshold.")
@click.pass_obj
def vendor_configure(
    container,
    vendor_id: str,
    business_name: str | None,
    reservation_minutes: int | None,
    reminders: bool | None,
    low_stock: int | None,
) -> None:
    """Create or update a vendor's settings."""
    handler = container.configure_vendor()

    try:
        config = handler.handle(
            vendor_id=vendor_id,
            business_name=business_name,
            reservation_minutes=reservation_minutes,
            auto_reminder=reminders,
            low_stock_threshold=low_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Vendor '{config.vendor_id}' ({config.business_name}): "
        f"holds {config.reservation_duration_minutes} min, "
        f"reminders {'on' if config.auto_reminder_enabled else 'off'}, "
        f"low stock at {config.low_stock_threshold}"
    )


@click.command("show")
@click.option("--vendor", "vendor_id", required=True, help="Vendor ID.")
@click.pass_obj
def vendor_show(container, vendor_id: str) -> None:
    """Show a vendor's effective settings."""
    config = load_vendor_config(
        container.vendor_repo, vendor_id, container.settings.default_reservation_minutes
    )
    click.echo(f"Vendor:        {config.vendor_id}")
    click.echo(f"Business name: {config.business_name}")
    click.echo(f"Hold length:   {config.reservation_duration_minutes} min")
    click.echo(f"Reminders:     {'on' if config.auto_reminder_enabled else 'off'}")
    click.echo(f"Low stock at:  {config.low_stock_threshold}")
