from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import SeatConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.enum.booking_status import (
    SEAT_HOLDING_STATUSES,
    BookingSeatStatus,
    BookingStatus,
)
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.booking_seat_model import BookingSeatModel
from src.service.cinema.driven_adapter.model.user_model import UserModel


class BookingCommandRepoImpl(IBookingCommandRepo):
    """
    Booking writes. The session belongs to the caller's unit of work, so nothing
    here commits; a unique-index violation surfaces on flush.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_booking: BookingModel, seat_ids: List[int]) -> Booking:
        return Booking(
            id=db_booking.id,
            user_id=db_booking.user_id,
            screening_id=db_booking.screening_id,
            status=BookingStatus(db_booking.status),
            expired_at=db_booking.expired_at,
            seat_ids=seat_ids,
            created_at=db_booking.created_at,
            updated_at=db_booking.updated_at,
        )

    async def _seat_ids(self, booking_id: int) -> List[int]:
        result = await self.session.execute(
            select(BookingSeatModel.seat_id)
            .where(BookingSeatModel.booking_id == booking_id)
            .order_by(BookingSeatModel.id)
        )
        return list(result.scalars().all())

    @Logger.io
    async def user_exists(self, *, user_id: int) -> bool:
        result = await self.session.execute(select(UserModel.id).where(UserModel.id == user_id))
        return result.scalar_one_or_none() is not None

    @Logger.io
    async def release_lapsed_holds(
        self, *, screening_id: int, seat_ids: List[int], now: datetime
    ) -> int:
        # Same rule the seat map reads by: a hold counts only while its booking is
        # pending and unexpired, or paid
        cancelled_bookings = select(BookingModel.id).where(
            BookingModel.status == BookingStatus.CANCELLED
        )
        result = await self.session.execute(
            update(BookingSeatModel)
            .where(
                BookingSeatModel.screening_id == screening_id,
                BookingSeatModel.seat_id.in_(seat_ids),
                or_(
                    and_(
                        BookingSeatModel.booking_status == BookingSeatStatus.PENDING,
                        BookingSeatModel.hold_expires_at <= now,
                    ),
                    and_(
                        BookingSeatModel.booking_status.in_(SEAT_HOLDING_STATUSES),
                        BookingSeatModel.booking_id.in_(cancelled_bookings),
                    ),
                ),
            )
            .values(booking_status=BookingSeatStatus.RELEASED, hold_expires_at=None)
            .execution_options(synchronize_session=False)
        )
        released = result.rowcount or 0  # pyright: ignore[reportAttributeAccessIssue]
        if released:
            Logger.base.info(
                f'♻️ [BOOKING] Released {released} lapsed hold(s) on screening {screening_id}'
            )
        return released

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        db_booking = BookingModel(
            user_id=booking.user_id,
            screening_id=booking.screening_id,
            status=booking.status.value,
            expired_at=booking.expired_at,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
        self.session.add(db_booking)
        await self.session.flush()

        try:
            self.session.add_all(
                [
                    BookingSeatModel(
                        booking_id=db_booking.id,
                        screening_id=booking.screening_id,
                        seat_id=seat_id,
                        booking_status=BookingSeatStatus.PENDING,
                        hold_expires_at=booking.expired_at,
                        created_at=booking.created_at,
                    )
                    for seat_id in booking.seat_ids
                ]
            )
            await self.session.flush()
        except IntegrityError as e:
            Logger.base.warning(
                f'⚠️ [BOOKING] Seat already held on screening {booking.screening_id}: '
                f'{booking.seat_ids}'
            )
            raise SeatConflictError() from e

        return self._to_entity(db_booking, list(booking.seat_ids))

    @Logger.io
    async def get_for_update(self, *, booking_id: int) -> Optional[Booking]:
        result = await self.session.execute(
            select(BookingModel).where(BookingModel.id == booking_id).with_for_update()
        )
        db_booking = result.scalar_one_or_none()
        if not db_booking:
            return None
        return self._to_entity(db_booking, await self._seat_ids(booking_id))

    @Logger.io
    async def mark_paid(self, *, booking_id: int, now: datetime) -> List[int]:
        await self.session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking_id)
            .values(status=BookingStatus.PAID, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        try:
            # Released rows come back too; if their seat went to someone else the index objects
            await self.session.execute(
                update(BookingSeatModel)
                .where(BookingSeatModel.booking_id == booking_id)
                .values(booking_status=BookingSeatStatus.PAID, hold_expires_at=None)
                .execution_options(synchronize_session=False)
            )
        except IntegrityError as e:
            Logger.base.warning(f'⚠️ [BOOKING] Seats of booking {booking_id} were taken back')
            raise SeatConflictError() from e

        return await self._seat_ids(booking_id)
