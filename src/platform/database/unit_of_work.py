"""
Unit of Work Pattern - one database transaction shared by a set of repositories

Architecture:
- UoW owns the session lifecycle (opened on enter, closed on exit)
- UoW owns commit/rollback; anything not committed explicitly is rolled back on exit,
  whether the block returns early, raises, or simply ends
- Repositories receive the shared session from the UoW
- Use cases coordinate repositories inside `async with uow:`
"""

from __future__ import annotations

import abc
from types import TracebackType
from typing import TYPE_CHECKING, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.platform.config.di import Container
from src.platform.database.orm_db_setting import Database
from src.platform.exception.exceptions import PersistenceError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
    from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
    from src.service.cinema.app.interface.i_payment_command_repo import IPaymentCommandRepo
    from src.service.cinema.app.interface.i_screening_query_repo import IScreeningQueryRepo
    from src.service.cinema.app.interface.i_seat_query_repo import ISeatQueryRepo
    from src.service.cinema.app.interface.i_ticket_repo import ITicketRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            booking = await uow.booking_command_repo.create(...)
            await uow.commit()
    """

    booking_command_repo: IBookingCommandRepo
    booking_query_repo: IBookingQueryRepo
    screening_query_repo: IScreeningQueryRepo
    seat_query_repo: ISeatQueryRepo
    payment_command_repo: IPaymentCommandRepo
    ticket_repo: ITicketRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.cinema.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.booking_query_repo_impl import (
            BookingQueryRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.payment_command_repo_impl import (
            PaymentCommandRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.screening_query_repo_impl import (
            ScreeningQueryRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.seat_query_repo_impl import SeatQueryRepoImpl
        from src.service.cinema.driven_adapter.repo.ticket_repo_impl import TicketRepoImpl

        self.session = self.session_factory()

        # Every repository shares the one session, hence the one transaction
        self.booking_command_repo = BookingCommandRepoImpl(self.session)
        self.booking_query_repo = BookingQueryRepoImpl(self.session)
        self.screening_query_repo = ScreeningQueryRepoImpl(self.session)
        self.seat_query_repo = SeatQueryRepoImpl(self.session)
        self.payment_command_repo = PaymentCommandRepoImpl(self.session)
        self.ticket_repo = TicketRepoImpl(self.session)

        await super().__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        except SQLAlchemyError as rollback_exc:
            Logger.base.error(f'💥 [UOW] Rollback failed: {rollback_exc}')
            raise PersistenceError() from (exc or rollback_exc)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

        if isinstance(exc, SQLAlchemyError):
            Logger.base.error(f'💥 [UOW] Transaction aborted: {type(exc).__name__}: {exc}')
            raise PersistenceError() from exc

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() called outside `async with uow`'
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()


@inject
def get_unit_of_work(
    database: Database = Depends(Provide[Container.database]),
) -> AbstractUnitOfWork:
    """
    FastAPI dependency for Unit of Work

    Usage:
        async def create_booking(uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
            async with uow:
                ...
                await uow.commit()
    """
    return SqlAlchemyUnitOfWork(session_factory=database.session_factory)
