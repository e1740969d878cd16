from typing import Self

from dependency_injector.wiring import Provide, inject
import attrs
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock, utc_now
from src.service.cinema.app.dto.booking_detail import BookingHistoryPage, Pagination
from src.service.cinema.domain.entity.booking_entity import effective_booking_status


class ListBookingHistoryUseCase:
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
    async def list_history(
        self, *, user_id: int, page: int = 1, limit: int = 10, show_all: bool = False
    ) -> BookingHistoryPage:
        """show_all=True ignores page/limit and returns every booking of the user."""
        if page < 1:
            raise ValidationError('page must be at least 1')
        if not show_all and limit < 1:
            raise ValidationError('limit must be at least 1')

        async with self.uow:
            items, total = await self.uow.booking_query_repo.list_history(
                user_id=user_id,
                offset=(page - 1) * limit,
                limit=None if show_all else limit,
            )

        now = self.clock()
        return BookingHistoryPage(
            items=[
                attrs.evolve(
                    item,
                    effective_status=effective_booking_status(
                        status=item.status, expired_at=item.expired_at, now=now
                    ),
                )
                for item in items
            ],
            pagination=Pagination(
                page=1 if show_all else page,
                limit=total if show_all else limit,
                total=total,
            ),
        )
