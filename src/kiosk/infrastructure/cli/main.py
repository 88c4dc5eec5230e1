import click

from kiosk.infrastructure.cli.customer_commands import (
    customer_register_cpf,
    customer_register_email,
    customer_show,
)
from kiosk.infrastructure.cli.order_commands import (
    order_checkout,
    order_list,
    order_payment_status,
    order_set_payment,
    order_show,
)
from kiosk.infrastructure.cli.payment_commands import (
    payment_approve,
    payment_cancel,
    payment_clear,
    payment_list,
    payment_reject,
    payment_start,
    webhook_deliver,
)
from kiosk.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from kiosk.infrastructure.cli.queue_commands import (
    queue_active,
    queue_list,
    queue_prune,
    queue_rebuild,
    queue_update,
)
from kiosk.infrastructure.config import get_settings
from kiosk.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Kiosk self-service ordering."""
    configure_logging(get_settings().log_level)


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def order() -> None:
    """Check out and inspect orders."""


@cli.group()
def queue() -> None:
    """Work the kitchen queue."""


@cli.group()
def payment() -> None:
    """Start payments and drive simulated ones."""


@cli.group()
def webhook() -> None:
    """Receive payment provider notifications."""


# Register subcommands
customer.add_command(customer_register_cpf)
customer.add_command(customer_register_email)
customer.add_command(customer_show)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_payment_status)
order.add_command(order_set_payment)
order.add_command(order_show)
queue.add_command(queue_active)
queue.add_command(queue_list)
queue.add_command(queue_prune)
queue.add_command(queue_rebuild)
queue.add_command(queue_update)
payment.add_command(payment_approve)
payment.add_command(payment_cancel)
payment.add_command(payment_clear)
payment.add_command(payment_list)
payment.add_command(payment_reject)
payment.add_command(payment_start)
webhook.add_command(webhook_deliver)
