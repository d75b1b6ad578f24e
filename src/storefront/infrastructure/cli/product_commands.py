"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.product import ProductCategory
from storefront.infrastructure.cli.context import container

_CATEGORIES = click.Choice([c.value for c in ProductCategory])


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--image", required=True, help="Image URL.")
@click.option("--stock", "stock_quantity", default=0, type=int, help="Units in stock.")
@click.option("--discount", default=None, help="Discount percentage (0-100).")
@click.option("--category", default=ProductCategory.GENERAL.value, type=_CATEGORIES)
@click.option("--description", default=None)
@click.option("--size", "sizes", multiple=True, help="Available size (repeatable).")
@click.option("--color", "colors", multiple=True, help="Available color (repeatable).")
def product_add(
    name: str,
    price: str,
    image: str,
    stock_quantity: int,
    discount: str | None,
    category: str,
    description: str | None,
    sizes: tuple[str, ...],
    colors: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    try:
        product = container().add_product().handle(
            name=name,
            price=price,
            image=image,
            stock_quantity=stock_quantity,
            discount_percentage=discount,
            category=category,
            description=description,
            sizes=list(sizes),
            colors=list(colors),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at ${product.price:.2f}")


@click.command("list")
@click.option("--category", default=None, type=_CATEGORIES)
@click.option("--query", default=None, help="Only names containing this text.")
def product_list(category: str | None, query: str | None) -> None:
    """List active products in the catalog, newest first."""
    products = container().show_products().search(query=query, category=category)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Price':>10} {'Disc':>6} {'Final':>10} {'Stock':>6}")
    click.echo("-" * 95)
    for p in products:
        click.echo(
            f"{p.id:<34} {p.name:<24} {p.price:>10.2f} {p.discount_percentage:>5}% "
            f"{p.unit_price:>10.2f} {p.stock_quantity:>6}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None)
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--discount", default=None, help="New discount percentage.")
@click.option("--stock", "stock_quantity", default=None, type=int, help="New stock level.")
@click.option("--image", default=None, help="New image URL.")
@click.option("--active/--inactive", "is_active", default=None)
def product_update(
    product_id: str,
    name: str | None,
    price: str | None,
    discount: str | None,
    stock_quantity: int | None,
    image: str | None,
    is_active: bool | None,
) -> None:
    """Update a product's fields."""
    try:
        product = container().update_product().handle(
            product_id,
            name=name,
            price=price,
            discount_percentage=discount,
            stock_quantity=stock_quantity,
            is_active=is_active,
            image=image,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} updated: ${product.price:.2f} "
        f"(final ${product.unit_price:.2f}), stock {product.stock_quantity}"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    try:
        container().delete_product().handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} removed.")
