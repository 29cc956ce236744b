"""CLI commands for stock levels."""

from __future__ import annotations

import click

from livepay.domain.exceptions import DomainException


@click.command("set")
@click.option("--vendor", "vendor_id", required=True, help="Vendor ID.")
@click.option("--product", "keyword", required=True, help="Product keyword.")
@click.option("--quantity", required=True, type=int, help="Total quantity in stock.")
@click.pass_obj
def inventory_set(container, vendor_id: str, keyword: str, quantity: int) -> None:
    """Set the stock level of a product."""
    handler = container.set_stock()

    try:
        product = handler.handle(vendor_id=vendor_id, keyword=keyword, stock=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock for '{product.keyword}' set to {product.stock} "
        f"({product.available_stock} available)"
    )


@click.command("show")
@click.option("--vendor", "vendor_id", default=None, help="Only this vendor's products.")
@click.pass_obj
def inventory_show(container, vendor_id: str | None) -> None:
    """Show current stock levels."""
    lines = container.show_inventory().handle(vendor_id)

    if not lines:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'Product':<20} {'Total':>8} {'Reserved':>10} {'Available':>10}")
    click.echo("-" * 50)
    for line in lines:
        click.echo(
            f"{line.product_name:<20} {line.total:>8} {line.reserved:>10} {line.available:>10}"
        )
