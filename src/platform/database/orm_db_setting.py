"""
SQLAlchemy async engine and session management

This module provides:
1. AsyncEngineManager: event-loop-aware engine + session maker for one database URL
2. Database: the object handed out by the DI container (sessions, table creation, dispose)
3. Base: declarative base for every ORM model

Pool policy:
- PostgreSQL (asyncpg): pool sized from settings
- SQLite (aiosqlite, local runs and tests): a single connection, since SQLite admits
  one writer at a time and a second connection would fail with "database is locked"
  instead of waiting
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


# =============================================================================
# Event-loop-aware Engine Manager
# =============================================================================


class AsyncEngineManager:
    """
    Keeps the engine bound to the running event loop.

    An engine created under one loop cannot be reused from another
    ("Task got Future attached to a different loop"), which happens when tests
    or CLI scripts call anyio.run() more than once in the same process.
    """

    def __init__(self, url: str) -> None:
        self._url = url
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def url(self) -> str:
        return self._url

    def get_engine(self) -> AsyncEngine:
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._engine is None:
                self._engine = self._create_engine()
            return self._engine

        if self._loop is not current_loop:
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, recreating engine')
                self._session_maker = None
            Logger.base.info(f'🔗 [DB] Creating engine for event loop {id(current_loop)}')
            self._engine = self._create_engine()
            self._loop = current_loop

        return self._engine  # type: ignore[return-value]

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.get_engine()
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        self._loop = None

    def _create_engine(self) -> AsyncEngine:
        if self._url.startswith('sqlite'):
            return create_async_engine(
                self._url,
                echo=False,
                pool_size=1,
                max_overflow=0,
                pool_timeout=settings.DB_POOL_TIMEOUT,
            )
        return create_async_engine(
            self._url,
            echo=False,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )


# =============================================================================
# Database Class (for DI)
# =============================================================================


class Database:
    def __init__(self, *, url: Optional[str] = None) -> None:
        self._manager = AsyncEngineManager(url or settings.DATABASE_URL_ASYNC)

    @property
    def engine(self) -> AsyncEngine:
        return self._manager.get_engine()

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._manager.get_session_maker()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Read-only session; the context manager rolls back anything left open on exit."""
        async with self.session_factory() as session:
            yield session

    async def create_tables(self) -> None:
        # Import models so every table is registered on Base.metadata
        import src.service.cinema.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        Logger.base.info('🗄️  [DB] Tables ensured')

    async def drop_tables(self) -> None:
        import src.service.cinema.driven_adapter.model  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self._manager.dispose()
