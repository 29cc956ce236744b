"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from livepay.domain.exceptions import DomainException


@click.command("add")
@click.option("--vendor", "vendor_id", required=True, help="Vendor ID.")
@click.option("--keyword", required=True, help="Keyword buyers type in the chat.")
@click.option("--name", default=None, help="Display name (defaults to the keyword).")
@click.option("--price", required=True, help="Price in F CFA (e.g. 15000).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.pass_obj
def product_add(container, vendor_id: str, keyword: str, name: str | None, price: str, stock: int) -> None:
    """Add a new product to a vendor's catalogue."""
    handler = container.add_product()

    try:
        product = handler.handle(
            vendor_id=vendor_id, keyword=keyword, price=price, stock=stock, name=name
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' (keyword '{product.keyword}') "
        f"added at {product.price}, stock {product.stock}"
    )


@click.command("list")
@click.option("--vendor", "vendor_id", default=None, help="Only this vendor's products.")
@click.pass_obj
def product_list(container, vendor_id: str | None) -> None:
    """List products in the catalogue."""
    lines = container.show_inventory().handle(vendor_id)

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Keyword':<14} {'Name':<20} {'Price':>14} {'Active':>7}")
    click.echo("-" * 65)
    for p in lines:
        click.echo(
            f"{p.product_id:<6} {p.keyword:<14} {p.product_name:<20} "
            f"{p.price:>14} {'yes' if p.active else 'no':>7}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price in F CFA.")
@click.option("--active/--inactive", default=None, help="Open or close reservations.")
@click.pass_obj
def product_update(container, product_id: str, price: str | None, active: bool | None) -> None:
    """Update a product's price or availability."""
    if price is None and active is None:
        raise click.ClickException("Nothing to update: pass --price and/or --active/--inactive")

    handler = container.update_product()

    try:
        product = handler.handle(product_id=product_id, new_price=price, active=active)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    state = "active" if product.active else "inactive"
    click.echo(f"Product #{product.id} now {product.price}, {state}")
