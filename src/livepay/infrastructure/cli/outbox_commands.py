"""CLI commands for the notification outbox read by the chat collaborator."""

from __future__ import annotations

import json

import click


def _echo_records(records: list[dict], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(records, indent=2))
        return
    if not records:
        click.echo("Outbox is empty.")
        return
    for record in records:
        data = record["data"]
        subject = f"order #{data['order_id']}" if "order_id" in data else data.get("product_name", "")
        click.echo(f"{data['occurred_at']}  {record['event']:<20} {subject}")


@click.command("pending")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_obj
def outbox_pending(container, as_json: bool) -> None:
    """Show queued notifications without removing them."""
    _echo_records(container.publisher.pending(), as_json)


@click.command("drain")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_obj
def outbox_drain(container, as_json: bool) -> None:
    """Print queued notifications and empty the outbox."""
    _echo_records(container.publisher.drain(), as_json)
