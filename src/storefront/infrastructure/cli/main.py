import click

from storefront.domain.model.identity import Principal, Role
from storefront.infrastructure.cli.context import container
from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_refund,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storefront.infrastructure.logging import configure_logging

SEED_IMAGES = "https://images.unsplash.com/photo-{}?w=1080"

# name, price, stock, discount %, category, photo id
SEED_PRODUCTS = [
    ("Royal Elegance Dress", "249.99", 15, "0", "Female", "1764265149077-b9b0dde8970b"),
    ("Heritage Print Collection", "189.99", 8, "15", "Female", "1709281961493-a9acb8558177"),
    ("Ankara Maxi Dress", "299.99", 5, "0", "Female", "1768212566108-4ce4f329e4d2"),
    ("Traditional Kente Wrap", "179.99", 12, "20", "Female", "1763823133159-c6f8ec380e33"),
    ("Silk Kaftan Gown", "279.99", 10, "10", "Female", "1697924293303-34488b60bf36"),
    ("Modern Dashiki Dress", "159.99", 18, "0", "Female", "1709809081557-78f803ce93a0"),
]


@click.group()
def cli() -> None:
    """Storefront: catalog, checkout and orders"""
    configure_logging()


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def token() -> None:
    """Issue API tokens."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (defaults to HOST setting).")
@click.option("--port", default=None, type=int, help="Port (defaults to PORT setting).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn

    from storefront.infrastructure.http.app import create_app

    c = container()
    uvicorn.run(
        create_app(c),
        host=host or c.settings.HOST,
        port=port or c.settings.PORT,
        log_config=None,
    )


@cli.command("seed")
def seed() -> None:
    """Load a starter catalog into an empty store."""
    c = container()
    if c.products.list_all():
        raise click.ClickException("Catalog is not empty; refusing to seed.")

    handler = c.add_product()
    for name, price, stock, discount, category, photo in SEED_PRODUCTS:
        p = handler.handle(
            name=name,
            price=price,
            image=SEED_IMAGES.format(photo),
            stock_quantity=stock,
            discount_percentage=discount,
            category=category,
        )
        click.echo(f"  {p.id}  {p.name}")
    click.echo(f"Seeded {len(SEED_PRODUCTS)} products.")


@token.command("issue")
@click.option("--user-id", required=True)
@click.option("--email", required=True)
@click.option("--role", default=Role.CUSTOMER.value, type=click.Choice([r.value for r in Role]))
def token_issue(user_id: str, email: str, role: str) -> None:
    """Print a bearer token for the given identity."""
    from storefront.infrastructure.http.auth import issue_token

    click.echo(issue_token(Principal(user_id=user_id, email=email, role=Role(role))))


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_refund)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
