"""Orders router: checkout, order history, refunds and admin status updates.

Routes are plain ``def`` so FastAPI runs each request on its own worker
thread; concurrent checkouts meet only in the store.
"""

from fastapi import APIRouter, status

from storefront.infrastructure.http.auth import AdminPrincipal, CurrentPrincipal
from storefront.infrastructure.http.dependencies import ContainerDep
from storefront.infrastructure.http.schemas import (
    CreateOrderRequest,
    OrderResponse,
    RequestRefundRequest,
    UpdateOrderStatusRequest,
)

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    request: CreateOrderRequest,
    principal: CurrentPrincipal,
    container: ContainerDep,
):
    """Create an order (checkout)."""
    dto = container.create_order().handle(
        customer=request.customer(),
        item_specs=request.item_specs(),
        principal=principal,
    )
    return OrderResponse.from_dto(dto)


@router.get("/my-orders", response_model=list[OrderResponse])
def get_my_orders(principal: CurrentPrincipal, container: ContainerDep):
    """Orders for the current user."""
    return [OrderResponse.from_dto(o) for o in container.list_orders().for_user(principal)]


@router.get("/admin/all", response_model=list[OrderResponse])
def get_all_orders(_: AdminPrincipal, container: ContainerDep):
    """All orders (admin)."""
    return [OrderResponse.from_dto(o) for o in container.list_orders().list_all()]


@router.patch("/{order_id}/request-refund", response_model=OrderResponse)
def request_refund(
    order_id: str,
    request: RequestRefundRequest,
    principal: CurrentPrincipal,
    container: ContainerDep,
):
    """Request a refund for one of your orders."""
    dto = container.request_refund().handle(order_id, principal, request.refund_reason)
    return OrderResponse.from_dto(dto)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    _: AdminPrincipal,
    container: ContainerDep,
):
    """Update order status (admin)."""
    dto = container.update_order_status().handle(order_id, request.status)
    return OrderResponse.from_dto(dto)
