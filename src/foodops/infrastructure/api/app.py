"""FoodOps FastAPI application.

The order log is held by the ``Container`` on ``app.state`` and lives as
long as the process does.

Usage:
    uvicorn foodops.infrastructure.api.app:create_app --factory --port 8000
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from foodops.domain.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from foodops.infrastructure.api.routes import analytics_router, order_router
from foodops.infrastructure.api.schemas import wire_field
from foodops.infrastructure.bootstrap import Container, build_container

logger = structlog.get_logger(__name__)


def create_app(container: Container | None = None) -> FastAPI:
    app = FastAPI(
        title="FoodOps API",
        description="Order lifecycle and sales analytics for the delivery storefront",
    )
    app.state.container = container if container is not None else build_container()

    app.include_router(order_router)
    app.include_router(analytics_router)
    _register_error_handlers(app)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_error",
                "message": str(exc),
                "field": wire_field(exc.field),
            },
        )

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"error": "not_found", "message": str(exc), "orderId": exc.order_id},
        )

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition(request: Request, exc: InvalidTransitionError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "error": "invalid_transition",
                "message": str(exc),
                "current": exc.current.value,
                "requested": exc.requested.value,
                "currentLabel": exc.current.label,
                "requestedLabel": exc.requested.label,
            },
        )

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("storage_error", path=request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "storage_error", "message": "Order storage failed"},
        )
