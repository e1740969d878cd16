"""
FastAPI app factory for the cinema reservation API.

Routers, CORS, error mapping, health and Prometheus endpoints. The lifespan
(DB, DI wiring, notification workers) is supplied by the caller.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.logging.loguru_io import Logger
from src.service.cinema.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.cinema.driving_adapter.http_controller.payment_controller import (
    router as payment_router,
)
from src.service.cinema.driving_adapter.http_controller.screening_controller import (
    router as screening_router,
)
from src.service.cinema.driving_adapter.http_controller.ticket_controller import (
    router as ticket_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Cinema Reservation System',
) -> FastAPI:
    """Build the app; `lifespan` owns startup and shutdown of everything stateful."""
    title = f'{settings.PROJECT_NAME}{title_suffix}'

    app = FastAPI(
        title=title,
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    # Register exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(booking_router, prefix='/api/booking', tags=['booking'])
    app.include_router(screening_router, prefix='/api/screening', tags=['screening'])
    app.include_router(payment_router, prefix='/api/payment', tags=['payment'])
    app.include_router(ticket_router, prefix='/api/ticket', tags=['ticket'])
    # Target of the link encoded in ticket QR codes ({BASE_URL}/tickets/verify?token=...)
    app.include_router(ticket_router, prefix='/tickets', include_in_schema=False)

    # Register common endpoints
    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get('/health')
    async def health_check() -> JSONResponse:
        """Liveness plus a round trip to the database; 503 when the database is unreachable."""
        try:
            async with container.database().session() as session:
                await session.execute(text('SELECT 1'))
        except (SQLAlchemyError, OSError) as e:
            Logger.base.error(f'💥 [HEALTH] Database unreachable: {e}')
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={'status': 'unhealthy', 'database': 'unreachable'},
            )
        return JSONResponse(
            content={'status': 'healthy', 'service': settings.PROJECT_NAME, 'database': 'ok'}
        )

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
