from typing import Self

from dependency_injector.wiring import Provide, inject
import attrs
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock, utc_now
from src.service.cinema.app.dto.booking_detail import BookingDetail
from src.service.cinema.domain.entity.booking_entity import effective_booking_status


class GetBookingUseCase:
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
    async def get_booking(self, *, booking_id: int) -> BookingDetail:
        async with self.uow:
            detail = await self.uow.booking_query_repo.get_detail(booking_id=booking_id)

        if not detail:
            raise NotFoundError('booking not found')

        return attrs.evolve(
            detail,
            effective_status=effective_booking_status(
                status=detail.status, expired_at=detail.expired_at, now=self.clock()
            ),
        )
