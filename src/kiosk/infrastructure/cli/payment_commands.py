"""CLI commands for simulated payments and webhook delivery."""

from __future__ import annotations

import click

from kiosk.application.dto import WebhookOutcomeDTO
from kiosk.domain.exceptions import DomainException
from kiosk.infrastructure.bootstrap import (
    simulate_payment_handler,
    start_payment_handler,
    webhook_reconciler,
)


def _display_outcome(outcome: WebhookOutcomeDTO) -> None:
    if outcome.applied:
        click.echo(f"Order {outcome.order_id} payment is now {outcome.payment_status}.")
    elif outcome.payment_status is None:
        click.echo(f"Order {outcome.order_id} not fully paid yet; nothing changed.")
    else:
        click.echo(f"Order {outcome.order_id} payment already {outcome.payment_status}.")


@click.command("start")
@click.option("--order", "order_id", required=True, help="Order ID to charge.")
@click.option("--description", default=None, help="Text shown to the payer.")
def payment_start(order_id: str, description: str | None) -> None:
    """Open a QR payment order at the configured provider."""
    try:
        qr = start_payment_handler().handle(order_id, description=description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Payment opened for order {qr.order_id} ({qr.amount:.2f})")
    if qr.payment_id:
        click.echo(f"Payment ID: {qr.payment_id}")
    click.echo(f"QR data: {qr.qr_data}")


def _settle_command(name: str, action: str, help_text: str) -> click.Command:
    @click.command(name, help=help_text)
    @click.option("--id", "payment_id", required=True, help="Simulated payment ID.")
    def command(payment_id: str) -> None:
        try:
            handler = simulate_payment_handler()
            outcome = getattr(handler, action)(payment_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))
        _display_outcome(outcome)

    return command


payment_approve = _settle_command("approve", "approve", "Approve a simulated charge.")
payment_reject = _settle_command("reject", "reject", "Reject a simulated charge.")
payment_cancel = _settle_command("cancel", "cancel", "Cancel a simulated charge.")


@click.command("list")
def payment_list() -> None:
    """List simulated charges."""
    try:
        charges = simulate_payment_handler().list_charges()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not charges:
        click.echo("No charges found.")
        return

    click.echo(f"{'Payment':<26} {'Order':<38} {'Status':<10} {'Amount':>10}")
    click.echo("-" * 87)
    for c in charges:
        click.echo(f"{c.payment_id:<26} {c.order_id:<38} {c.status:<10} {c.amount:>10.2f}")


@click.command("clear")
@click.option("--hours", type=float, default=24.0, show_default=True, help="Age threshold.")
def payment_clear(hours: float) -> None:
    """Forget simulated charges older than HOURS."""
    try:
        removed = simulate_payment_handler().clear_old(hours)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cleared {removed} charge(s).")


@click.command("deliver")
@click.argument("payload_file", type=click.File("rb"))
@click.option("--signature", default=None, help="Value of the provider signature header.")
def webhook_deliver(payload_file, signature: str | None) -> None:
    """Deliver a provider notification read from PAYLOAD_FILE ('-' for stdin)."""
    body = payload_file.read()

    try:
        outcome = webhook_reconciler().handle(body, signature=signature)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_outcome(outcome)
