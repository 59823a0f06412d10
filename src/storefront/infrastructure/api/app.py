"""FastAPI application factory."""

from __future__ import annotations

from typing import Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.application.notifications import NotificationDispatcher
from storefront.domain.exceptions import DomainException
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.api.routes import (
    cart_router,
    checkout_router,
    order_router,
    product_router,
    review_router,
    user_router,
)

logger = structlog.get_logger(__name__)


def create_app(
    uow_factory: Callable[[], UnitOfWork] | None = None,
    notifications: NotificationDispatcher | None = None,
) -> FastAPI:
    """Build the API.  Collaborators default to the configured ones."""
    if uow_factory is None or notifications is None:
        from storefront.infrastructure import bootstrap

        uow_factory = uow_factory or bootstrap.unit_of_work
        notifications = notifications or bootstrap.notification_dispatcher()

    app = FastAPI(title="Storefront Checkout")
    app.state.uow_factory = uow_factory
    app.state.notifications = notifications

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        logger.info(
            "Request rejected",
            path=request.url.path,
            error=type(exc).__name__,
            message=str(exc),
        )
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        # Malformed input is a validation failure like any other
        return JSONResponse(status_code=400, content={"message": errors})

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(checkout_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(product_router)
    app.include_router(review_router)
    app.include_router(user_router)

    return app
