"""CLI commands for exercising the payment reconciler locally."""

from __future__ import annotations

import click

from livepay.domain.exceptions import DomainException
from livepay.domain.model.payment import PaymentEvent, PaymentOutcome


@click.command("simulate")
@click.option("--token", required=True, help="Order payment token.")
@click.option("--amount", required=True, type=int, help="Amount paid in F CFA.")
@click.option("--ref", "provider_ref", required=True, help="Provider transaction reference.")
@click.option(
    "--outcome",
    type=click.Choice([o.value for o in PaymentOutcome]),
    default=PaymentOutcome.SUCCESS.value,
    show_default=True,
)
@click.option("--key", "idempotency_key", default=None, help="Idempotency key.")
@click.pass_obj
def payments_simulate(
    container,
    token: str,
    amount: int,
    provider_ref: str,
    outcome: str,
    idempotency_key: str | None,
) -> None:
    """Sign and process a provider event as if the webhook had received it."""
    try:
        event = PaymentEvent(
            token=token,
            provider_ref=provider_ref,
            amount=amount,
            outcome=PaymentOutcome(outcome),
            idempotency_key=idempotency_key,
        )
        ack = container.payment_handler.handle(event, container.verifier.sign(event))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    suffix = " (replayed)" if ack.replayed else ""
    click.echo(f"Order #{ack.order_id}: {ack.result}{suffix}")
