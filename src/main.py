"""
Production FastAPI Application

Reservation API plus the background notification workers.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import intercept_std_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Cinema Service] Starting up...')

    intercept_std_logging('uvicorn', 'uvicorn.error', 'sqlalchemy.engine')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema Service] Dependency injection wired')

    # Initialize database
    database = container.database()
    await database.create_tables()
    Logger.base.info('🗄️  [Cinema Service] Database ready')

    notification_pool = container.notification_pool()

    async with anyio.create_task_group() as tg:
        await tg.start(notification_pool.run)
        Logger.base.info('✅ [Cinema Service] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Cinema Service] Shutting down...')
        # Drain-then-stop: queued ticket emails still go out
        await notification_pool.shutdown()

    tally = container.notification_tally()
    Logger.base.info(
        f'📊 [Cinema Service] Notifications sent={tally.sent_count} failed={tally.failed_count}'
    )

    await database.dispose()
    Logger.base.info('🗄️  [Cinema Service] Database engine disposed')

    # Unwire DI
    container.unwire()

    Logger.base.info('👋 [Cinema Service] Shutdown complete')


# Create FastAPI app using shared factory
app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
