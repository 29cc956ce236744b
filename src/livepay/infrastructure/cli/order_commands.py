"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from livepay.application.dto import ReserveRequest
from livepay.domain.exceptions import DomainException


@click.command("reserve")
@click.option("--vendor", "vendor_id", required=True, help="Vendor ID.")
@click.option("--keyword", required=True, help="Product keyword.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to hold.")
@click.option("--phone", required=True, help="Buyer phone number.")
@click.option("--name", "buyer_name", default=None, help="Buyer name.")
@click.pass_obj
def order_reserve(
    container, vendor_id: str, keyword: str, quantity: int, phone: str, buyer_name: str | None
) -> None:
    """Reserve units for a buyer (as the chat parser would)."""
    handler = container.reserve_order()

    try:
        dto = handler.handle(
            ReserveRequest(
                vendor_id=vendor_id,
                product_keyword=keyword,
                quantity=quantity,
                buyer_phone=phone,
                buyer_name=buyer_name,
            )
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.order_id} reserved  (amount={dto.amount} F CFA)")
    click.echo(f"Payment token: {dto.payment_token}")
    click.echo(f"Expires at:    {dto.expires_at.strftime('%Y-%m-%d %H:%M:%S UTC')}")


def _display_order(dto) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Buyer:    {dto.buyer_name or '-'} ({dto.buyer_phone})")
    click.echo(f"Reserved: {dto.reserved_at or '-'}")
    click.echo(f"Expires:  {dto.expires_at}")
    if dto.paid_at:
        click.echo(f"Paid:     {dto.paid_at}  (ref {dto.provider_ref})")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*55}")
    click.echo(
        f"  {dto.product_name:<20} {dto.quantity:>5} {dto.unit_price:>14} {dto.total:>14}"
    )
    if dto.payments:
        click.echo()
        click.echo("Payment events:")
        for p in dto.payments:
            click.echo(
                f"  {p.received_at}  {p.provider_ref:<16} {p.amount:>14}  "
                f"{p.outcome:<8} -> {p.result}"
            )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(container, order_id: int) -> None:
    """Show details of an existing order."""
    handler = container.show_order()

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--vendor", "vendor_id", default=None, help="Only this vendor's orders.")
@click.option("--status", default=None, help="Only orders in this status.")
@click.pass_obj
def order_list(container, vendor_id: str | None, status: str | None) -> None:
    """List orders."""
    try:
        orders = container.list_orders().handle(vendor_id=vendor_id, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<10} {'Product':<20} {'Qty':>4} {'Total':>14}  Expires")
    click.echo("-" * 80)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.status:<10} {o.product_name:<20} {o.quantity:>4} {o.total:>14}  {o.expires_at}"
        )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(container, order_id: int) -> None:
    """Cancel a reserved order (releases its held stock)."""
    handler = container.cancel_order()

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled, stock released.")
