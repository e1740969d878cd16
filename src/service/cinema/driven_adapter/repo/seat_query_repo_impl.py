from datetime import datetime
from typing import List

from sqlalchemy import and_, exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.cinema.domain.entity.seat_entity import Seat, SeatAvailability
from src.service.cinema.domain.enum.booking_status import BookingStatus
from src.service.cinema.domain.enum.seat_status import SeatStatus
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.booking_seat_model import BookingSeatModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel


class SeatQueryRepoImpl(ISeatQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def list_seats_for_studio(self, *, studio_id: int) -> List[Seat]:
        result = await self.session.execute(
            select(SeatModel).where(SeatModel.studio_id == studio_id).order_by(SeatModel.id)
        )
        return [
            Seat(id=seat.id, studio_id=seat.studio_id, seat_code=seat.seat_code)
            for seat in result.scalars().all()
        ]

    @Logger.io
    async def list_seat_availability(
        self, *, screening_id: int, studio_id: int, now: datetime
    ) -> List[SeatAvailability]:
        # Decided from the booking row, so a lapsed hold reads as free even before
        # anyone releases its booking_seat row
        held = exists().where(
            BookingSeatModel.seat_id == SeatModel.id,
            BookingSeatModel.screening_id == screening_id,
            BookingModel.id == BookingSeatModel.booking_id,
            or_(
                BookingModel.status == BookingStatus.PAID,
                and_(
                    BookingModel.status == BookingStatus.PENDING,
                    BookingModel.expired_at > now,
                ),
            ),
        )
        result = await self.session.execute(
            select(SeatModel.id, SeatModel.seat_code, held.label('is_booked'))
            .where(SeatModel.studio_id == studio_id)
            .order_by(SeatModel.id)
        )
        return [
            SeatAvailability(
                seat_id=row.id,
                seat_code=row.seat_code,
                status=SeatStatus.BOOKED if row.is_booked else SeatStatus.AVAILABLE,
            )
            for row in result.all()
        ]
