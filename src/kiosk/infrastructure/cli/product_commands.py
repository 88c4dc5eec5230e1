"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from kiosk.application.add_product import AddProductHandler
from kiosk.application.delete_product import DeleteProductHandler
from kiosk.application.list_products import ListProductsHandler
from kiosk.application.show_product import ShowProductHandler
from kiosk.application.update_product import UpdateProductHandler
from kiosk.domain.exceptions import DomainException
from kiosk.domain.model.product import ProductCategory
from kiosk.infrastructure.bootstrap import order_repository, product_repository

CATEGORY_CHOICE = click.Choice([c.value for c in ProductCategory], case_sensitive=False)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.99).")
@click.option("--category", required=True, type=CATEGORY_CHOICE, help="Menu category.")
@click.option("--description", default="", help="Short description.")
@click.option("--image-url", default=None, help="Picture shown on the kiosk.")
def product_add(
    name: str,
    price: str,
    category: str,
    description: str,
    image_url: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            name=name,
            description=description,
            price=price,
            category=category,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="Only this category.")
def product_list(category: str | None) -> None:
    """List products in the catalog."""
    try:
        products = ListProductsHandler(product_repository()).handle(category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<20} {'Category':<10} {'Price':>10}")
    click.echo("-" * 81)
    for p in products:
        click.echo(f"{p.id:<38} {p.name:<20} {p.category.value:<10} {str(p.price):>10}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show one product."""
    try:
        p = ShowProductHandler(product_repository()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product:     {p.id}")
    click.echo(f"Name:        {p.name}")
    click.echo(f"Category:    {p.category.value}")
    click.echo(f"Price:       {p.price}")
    if p.description:
        click.echo(f"Description: {p.description}")
    if p.image_url:
        click.echo(f"Image:       {p.image_url}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="New category.")
@click.option("--image-url", default=None, help="New picture; empty string clears it.")
def product_update(
    product_id: str,
    price: str | None,
    name: str | None,
    description: str | None,
    category: str | None,
    image_url: str | None,
) -> None:
    """Update a product's details."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            product_id,
            price=price,
            name=name,
            description=description,
            category=category,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' updated; price {product.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(product_repository(), order_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")
