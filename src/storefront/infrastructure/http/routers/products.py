"""Catalog router: public reads, admin/brand-partner writes."""

from typing import Optional

from fastapi import APIRouter, status

from storefront.infrastructure.http.auth import AdminPrincipal, CatalogEditor
from storefront.infrastructure.http.dependencies import ContainerDep
from storefront.infrastructure.http.schemas import (
    CreateProductRequest,
    ProductResponse,
    UpdateProductRequest,
)

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
def list_products(container: ContainerDep, category: Optional[str] = None):
    """Active catalog, newest first, optionally filtered by category."""
    return [ProductResponse.from_dto(p) for p in container.show_products().list_active(category)]


@router.get("/search", response_model=list[ProductResponse])
def search_products(
    container: ContainerDep,
    query: Optional[str] = None,
    category: Optional[str] = None,
):
    """Active products whose name contains the query, ignoring case."""
    found = container.show_products().search(query=query, category=category)
    return [ProductResponse.from_dto(p) for p in found]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, container: ContainerDep):
    return ProductResponse.from_dto(container.show_products().get(product_id))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(request: CreateProductRequest, _: CatalogEditor, container: ContainerDep):
    dto = container.add_product().handle(
        name=request.name,
        price=request.price,
        image=request.image,
        stock_quantity=request.stock_quantity,
        discount_percentage=request.discount_percentage,
        category=request.category.value,
        description=request.description,
        sizes=request.sizes,
        colors=request.colors,
    )
    return ProductResponse.from_dto(dto)


@router.patch("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    request: UpdateProductRequest,
    _: CatalogEditor,
    container: ContainerDep,
):
    dto = container.update_product().handle(
        product_id,
        name=request.name,
        price=request.price,
        discount_percentage=request.discount_percentage,
        stock_quantity=request.stock_quantity,
        category=request.category.value if request.category else None,
        description=request.description,
        is_active=request.is_active,
        image=request.image,
        sizes=request.sizes,
        colors=request.colors,
    )
    return ProductResponse.from_dto(dto)


@router.delete("/{product_id}")
def delete_product(product_id: str, _: AdminPrincipal, container: ContainerDep) -> dict[str, str]:
    container.delete_product().handle(product_id)
    return {"message": "Product removed"}
