"""FastAPI application for the storefront API."""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.domain.exceptions import (
    AccessDeniedError,
    DomainException,
    DuplicateOrderNumberError,
    EntityNotFoundError,
)
from storefront.infrastructure.bootstrap import Container, build_container
from storefront.infrastructure.http.middleware import RequestContextMiddleware
from storefront.infrastructure.http.routers import notifications, orders, products
from storefront.infrastructure.logging import get_logger

logger = get_logger(__name__)


def _status_for(exc: DomainException) -> int:
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, AccessDeniedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, DuplicateOrderNumberError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    code = _status_for(exc)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=code, content={"detail": "Internal server error"})
    return JSONResponse(status_code=code, content={"detail": str(exc)})


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(container: Container | None = None) -> FastAPI:
    """Create and configure the storefront FastAPI app."""
    app = FastAPI(
        title="Storefront API",
        version="0.1.0",
        description="Product catalog, checkout and order management.",
    )
    app.state.container = container or build_container()
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront"}

    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(notifications.router)

    return app
