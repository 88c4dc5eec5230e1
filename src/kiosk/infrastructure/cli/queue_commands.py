"""CLI commands for the kitchen queue."""

from __future__ import annotations

import click

from kiosk.domain.exceptions import DomainException
from kiosk.domain.model.order import OrderStatus
from kiosk.infrastructure.bootstrap import order_queue_service
from kiosk.infrastructure.cli.order_commands import STATUS_CHOICE


@click.command("active")
def queue_active() -> None:
    """Show outstanding orders in kitchen order."""
    try:
        orders = order_queue_service().list_active()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("Queue is empty.")
        return

    for dto in orders:
        click.echo(
            f"[{dto.status:<14}] {dto.id}  payment={dto.payment_status}  "
            f"total={dto.total_amount:.2f}  since {dto.created_at:%H:%M:%S}"
        )
        for item in dto.items:
            click.echo(f"    {item.quantity:>3} x {item.product_name}")


@click.command("list")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Only entries in this status.")
def queue_list(status: str | None) -> None:
    """List raw queue entries."""
    service = order_queue_service()
    entries = service.list_by_status(OrderStatus(status.upper())) if status else service.list_all()

    if not entries:
        click.echo("No queue entries found.")
        return

    for e in entries:
        click.echo(f"{e.order_id:<38} {e.status:<15} updated {e.updated_at:%Y-%m-%d %H:%M:%S}")


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", required=True, type=STATUS_CHOICE, help="Target status.")
def queue_update(order_id: str, status: str) -> None:
    """Move an order to its next kitchen status."""
    try:
        entry = order_queue_service().update_status(order_id, OrderStatus(status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {entry.order_id} is now {entry.status}.")


@click.command("prune")
def queue_prune() -> None:
    """Remove cancelled orders from the display."""
    removed = order_queue_service().prune_cancelled()
    click.echo(f"Removed {removed} cancelled order(s) from the queue.")


@click.command("rebuild")
def queue_rebuild() -> None:
    """Recreate queue entries from the order store."""
    created = order_queue_service().rebuild()
    click.echo(f"Queue rebuilt; {created} entr{'y' if created == 1 else 'ies'} created.")
