"""CLI commands for checkout and order queries."""

from __future__ import annotations

import click

from kiosk.application.dto import OrderDTO, OrderItemSpec
from kiosk.application.list_orders import ListOrdersHandler
from kiosk.application.show_order import ShowOrderHandler
from kiosk.application.show_payment_status import ShowPaymentStatusHandler
from kiosk.application.update_payment_status import UpdatePaymentStatusHandler
from kiosk.domain.exceptions import DomainException
from kiosk.domain.model.order import OrderStatus, PaymentStatus
from kiosk.infrastructure.bootstrap import (
    checkout_handler,
    order_repository,
    product_repository,
)

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)
PAYMENT_CHOICE = click.Choice([s.value for s in PaymentStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'p1:2,p2:1' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


@click.command("checkout")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--customer", "customer_id", default=None, help="Registered customer ID.")
@click.option("--cpf", default=None, help="CPF for an unregistered customer.")
@click.option("--request-id", default=None, help="Reuse to retry a checkout safely.")
def order_checkout(
    items: str,
    customer_id: str | None,
    cpf: str | None,
    request_id: str | None,
) -> None:
    """Check out a cart and send it to the kitchen queue."""
    specs = _parse_items(items)

    try:
        result = checkout_handler().handle(
            specs, customer_id=customer_id, tax_id=cpf, request_id=request_id
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    verb = "already checked out" if result.replayed else "created"
    click.echo(f"Order {result.order_id} {verb}  (status={result.status}, payment={result.payment_status})")
    click.echo()
    click.echo(f"  {'Product':<38} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*65}")
    for item in result.items:
        click.echo(
            f"  {item.product_id:<38} {item.quantity:>5} {item.price:>10.2f} {item.total:>10.2f}"
        )
    click.echo(f"  {'-'*65}")
    click.echo(f"  {'Order Total':<45} {result.total_amount:>20.2f}")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status}, payment={dto.payment_status})")
    if dto.customer_id:
        click.echo(f"Customer: {dto.customer_id}")
    elif dto.tax_id:
        click.echo(f"CPF:      {dto.tax_id}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*52}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.price:>10.2f} {item.total:>10.2f}"
        )
    click.echo(f"  {'-'*52}")
    click.echo(f"  {'Order Total':<31} {dto.total_amount:>20.2f}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show an order priced at current catalog prices."""
    handler = ShowOrderHandler(order_repository(), product_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", type=STATUS_CHOICE, default=None, help="Only orders in this status.")
@click.option("--customer", "customer_id", default=None, help="Only orders of this customer.")
def order_list(status: str | None, customer_id: str | None) -> None:
    """List orders, oldest first."""
    handler = ListOrdersHandler(order_repository())
    if status:
        orders = handler.by_status(OrderStatus(status.upper()))
    elif customer_id:
        orders = handler.by_customer(customer_id)
    else:
        orders = handler.all()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<38} {'Status':<15} {'Payment':<10} {'Items':>5}")
    click.echo("-" * 71)
    for o in orders:
        click.echo(f"{o.id:<38} {o.status:<15} {o.payment_status:<10} {o.item_count:>5}")


@click.command("payment-status")
@click.option("--id", "order_id", required=True, help="Order ID.")
def order_payment_status(order_id: str) -> None:
    """Show the payment status of an order."""
    handler = ShowPaymentStatusHandler(order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_id}: payment {dto.payment_status}")


@click.command("set-payment")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--status", required=True, type=PAYMENT_CHOICE, help="New payment status.")
def order_set_payment(order_id: str, status: str) -> None:
    """Set an order's payment status by hand."""
    handler = UpdatePaymentStatusHandler(order_repository())

    try:
        order, changed = handler.handle(order_id, PaymentStatus(status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if changed:
        click.echo(f"Order {order.id} payment is now {order.payment_status.value}.")
    else:
        click.echo(f"Order {order.id} payment already {order.payment_status.value}.")
