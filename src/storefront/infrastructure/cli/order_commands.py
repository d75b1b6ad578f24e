"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.dto import CustomerDetails, OrderDTO, OrderItemSpec
from storefront.domain.exceptions import DomainException
from storefront.domain.model.identity import Principal, Role
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.cli.context import container


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'abc123:3,def456:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
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


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (status={dto.status}, refund={dto.refund_status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Date:     {dto.date}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.line_items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} "
            f"{item.unit_price:>10.2f} {item.line_total:>10.2f}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<31} {dto.total:>20.2f}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--user-id", default=None, help="Owning user id (omit for a guest order).")
@click.option("--address", default=None, help="Shipping address.")
@click.option("--city", default=None)
@click.option("--postal-code", default=None)
@click.option("--country", default=None)
def order_create(
    customer: str,
    email: str,
    items: str,
    user_id: str | None,
    address: str | None,
    city: str | None,
    postal_code: str | None,
    country: str | None,
) -> None:
    """Check out a cart and create an order."""
    specs = _parse_items(items)
    details = CustomerDetails(
        name=customer,
        email=email,
        shipping_address=address,
        city=city,
        postal_code=postal_code,
        country=country,
    )
    principal = Principal(user_id=user_id, email=email) if user_id else None

    try:
        dto = container().create_order().handle(details, specs, principal)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--email", default=None, help="Only orders placed with this email.")
@click.option("--user-id", default=None, help="Only orders owned by this user id.")
def order_list(email: str | None, user_id: str | None) -> None:
    """List orders, newest first."""
    handler = container().list_orders()
    if email or user_id:
        orders = handler.for_user(Principal(user_id=user_id or "", email=email or ""))
    else:
        orders = handler.list_all()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Number':<12} {'Date':<11} {'Status':<11} {'Refund':<10} {'Items':>5} {'Total':>10}")
    click.echo("-" * 64)
    for o in orders:
        click.echo(
            f"{o.order_number:<12} {o.date:<11} {o.status:<11} {o.refund_status:<10} "
            f"{o.item_count:>5} {o.total:>10.2f}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--status",
    "new_status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New fulfilment status.",
)
def order_status(order_id: str, new_status: str) -> None:
    """Set an order's status (admin)."""
    try:
        dto = container().update_order_status().handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("refund")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--email", required=True, help="Email of the requesting customer.")
@click.option("--user-id", default="", help="User id of the requesting customer.")
@click.option("--reason", required=True, help="Why the refund is requested.")
def order_refund(order_id: str, email: str, user_id: str, reason: str) -> None:
    """Request a refund on behalf of a customer."""
    requester = Principal(user_id=user_id, email=email, role=Role.CUSTOMER)
    try:
        dto = container().request_refund().handle(order_id, requester, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Refund requested for order {dto.order_number}.")
