from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import BookingClosedError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock, utc_now
from src.service.cinema.domain.entity.seat_entity import SeatAvailability


class ListSeatsUseCase:
    """Seat map of a screening. Pure read: no locks, no writes, expiry judged against now."""

    def __init__(self, *, uow: AbstractUnitOfWork, clock: Clock = utc_now) -> None:
        self.uow = uow
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow=uow, clock=clock)

    @Logger.io
    async def list_seats(self, *, screening_id: int) -> List[SeatAvailability]:
        now = self.clock()
        async with self.uow:
            window = await self.uow.screening_query_repo.get_screening_window(
                screening_id=screening_id
            )
            if window is None:
                raise NotFoundError('screening not found')
            if not window.is_open(now):
                raise BookingClosedError('seats for this screening is already closed')

            return await self.uow.seat_query_repo.list_seat_availability(
                screening_id=screening_id, studio_id=window.studio_id, now=now
            )
