"""CLI commands for the Customer entity."""

from __future__ import annotations

import click

from kiosk.application.dto import CustomerDTO
from kiosk.application.find_customer import FindCustomerHandler
from kiosk.application.register_customer import RegisterCustomerHandler
from kiosk.domain.exceptions import DomainException
from kiosk.infrastructure.bootstrap import customer_repository


def _display_customer(dto: CustomerDTO) -> None:
    click.echo(f"Customer {dto.id}")
    if dto.name:
        click.echo(f"  Name:  {dto.name}")
    if dto.tax_id:
        click.echo(f"  CPF:   {dto.tax_id}")
    if dto.email:
        click.echo(f"  Email: {dto.email}")


@click.command("register-cpf")
@click.option("--cpf", required=True, help="CPF, with or without punctuation.")
def customer_register_cpf(cpf: str) -> None:
    """Register a customer by CPF alone."""
    handler = RegisterCustomerHandler(customer_repository())

    try:
        dto = handler.with_tax_id(cpf)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} registered with CPF {dto.tax_id}")


@click.command("register-email")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
def customer_register_email(name: str, email: str) -> None:
    """Register a customer by name and email."""
    handler = RegisterCustomerHandler(customer_repository())

    try:
        dto = handler.with_email(name, email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {dto.id} '{dto.name}' registered with {dto.email}")


@click.command("show")
@click.option("--id", "customer_id", default=None, help="Customer ID.")
@click.option("--email", default=None, help="Customer email.")
@click.option("--cpf", default=None, help="Customer CPF.")
def customer_show(customer_id: str | None, email: str | None, cpf: str | None) -> None:
    """Look up a customer by ID, email or CPF."""
    if sum(v is not None for v in (customer_id, email, cpf)) != 1:
        raise click.UsageError("Give exactly one of --id, --email or --cpf.")

    handler = FindCustomerHandler(customer_repository())
    try:
        if customer_id is not None:
            dto = handler.by_id(customer_id)
        elif email is not None:
            dto = handler.by_email(email)
        else:
            dto = handler.by_tax_id(cpf)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_customer(dto)
