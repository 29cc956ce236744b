"""CLI commands for the expiration sweep."""

from __future__ import annotations

import threading

import click


@click.command("sweep")
@click.pass_obj
def scheduler_sweep(container) -> None:
    """Run one expiration + reminder tick now."""
    expired = container.expire_orders().handle()
    reminded = container.send_reminders().handle()
    click.echo(f"Expired {len(expired)} order(s), sent {len(reminded)} reminder(s).")


@click.command("run")
@click.option("--interval", type=float, default=None, help="Seconds between ticks.")
@click.pass_obj
def scheduler_run(container, interval: float | None) -> None:
    """Run the sweep in the foreground until interrupted."""
    sched = container.scheduler(interval)
    click.echo(f"Sweeping every {sched.interval:g}s (Ctrl+C to stop).")
    sched.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        sched.stop()
