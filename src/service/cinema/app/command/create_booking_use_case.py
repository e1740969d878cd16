from datetime import timedelta
import time
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import (
    BookingClosedError,
    CustomBaseError,
    NotFoundError,
    SeatConflictError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import ReservationMetrics
from src.platform.types.clock import Clock, utc_now
from src.service.cinema.domain.entity.booking_entity import Booking


_RESULT_BY_ERROR: dict[type[CustomBaseError], str] = {
    SeatConflictError: 'conflict',
    BookingClosedError: 'closed',
    NotFoundError: 'not_found',
    ValidationError: 'invalid',
}


class CreateBookingUseCase:
    """
    Reserve seats for a screening with a time-bounded hold.

    Flow (one transaction):
    1. Check the user exists
    2. Lock the screening row for share and check the booking window
    3. Check every seat belongs to the screening's studio
    4. Release lapsed or cancelled holds on the requested seats
    5. Insert booking + one booking_seat row per seat

    The partial unique index on booking_seat is what keeps two active bookings
    off the same seat; losing that race is a SeatConflictError and nothing of the
    losing booking survives the rollback.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        hold_ttl: timedelta,
        clock: Clock = utc_now,
        metrics: ReservationMetrics | None = None,
    ) -> None:
        self.uow = uow
        self.hold_ttl = hold_ttl
        self.clock = clock
        self.metrics = metrics

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        config: Settings = Depends(Provide[Container.config_service]),
        clock: Clock = Depends(Provide[Container.clock]),
        metrics: ReservationMetrics = Depends(Provide[Container.metrics]),
    ) -> Self:
        return cls(
            uow=uow,
            hold_ttl=timedelta(seconds=config.BOOKING_HOLD_TTL_SECONDS),
            clock=clock,
            metrics=metrics,
        )

    @Logger.io
    async def create_booking(self, *, user_id: int, screening_id: int, seat_ids: List[int]) -> Booking:
        """
        Raises:
            ValidationError: empty, duplicate or non-positive seat ids
            NotFoundError: user or screening missing, or seat outside its studio
            BookingClosedError: screening already past start + duration
            SeatConflictError: a requested seat is held by another active booking
            PersistenceError: storage failure
        """
        started = time.perf_counter()
        result = 'error'
        try:
            booking = await self._create_booking(
                user_id=user_id, screening_id=screening_id, seat_ids=seat_ids
            )
            result = 'created'
            return booking
        except CustomBaseError as e:
            result = _RESULT_BY_ERROR.get(type(e), 'error')
            raise
        finally:
            if self.metrics:
                self.metrics.record_booking(result=result, duration=time.perf_counter() - started)

    async def _create_booking(self, *, user_id: int, screening_id: int, seat_ids: List[int]) -> Booking:
        now = self.clock()
        # Validation happens here, before any transaction opens
        booking = Booking.create(
            user_id=user_id,
            screening_id=screening_id,
            seat_ids=seat_ids,
            now=now,
            hold_ttl=self.hold_ttl,
        )

        async with self.uow:
            if not await self.uow.booking_command_repo.user_exists(user_id=user_id):
                raise NotFoundError('user not found')

            window = await self.uow.screening_query_repo.get_screening_window(
                screening_id=screening_id, lock=True
            )
            if window is None:
                raise NotFoundError('screening not found')
            if not window.is_open(now):
                raise BookingClosedError()

            studio_seats = await self.uow.seat_query_repo.list_seats_for_studio(
                studio_id=window.studio_id
            )
            studio_seat_ids = {seat.id for seat in studio_seats}
            unknown = [seat_id for seat_id in seat_ids if seat_id not in studio_seat_ids]
            if unknown:
                raise NotFoundError(f'seats not found in this studio: {unknown}')

            await self.uow.booking_command_repo.release_lapsed_holds(
                screening_id=screening_id, seat_ids=seat_ids, now=now
            )
            created = await self.uow.booking_command_repo.create(booking=booking)
            await self.uow.commit()

        Logger.base.info(
            f'🎟️ [BOOKING] Booking {created.id} holds {len(seat_ids)} seat(s) on screening '
            f'{screening_id} until {created.expired_at.isoformat()}'
        )
        return created
