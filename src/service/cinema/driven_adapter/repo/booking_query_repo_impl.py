from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.booking_detail import BookingDetail, BookingHistoryItem
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.booking_seat_model import BookingSeatModel
from src.service.cinema.driven_adapter.model.cinema_model import CinemaModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.screening_model import ScreeningModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.studio_model import StudioModel


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _seat_codes_by_booking(self, booking_ids: List[int]) -> Dict[int, List[str]]:
        if not booking_ids:
            return {}
        result = await self.session.execute(
            select(BookingSeatModel.booking_id, SeatModel.seat_code)
            .join(SeatModel, SeatModel.id == BookingSeatModel.seat_id)
            .where(BookingSeatModel.booking_id.in_(booking_ids))
            .order_by(BookingSeatModel.booking_id, SeatModel.seat_code)
        )
        codes: Dict[int, List[str]] = defaultdict(list)
        for booking_id, seat_code in result.all():
            codes[booking_id].append(seat_code)
        return codes

    @Logger.io
    async def get_detail(self, *, booking_id: int) -> Optional[BookingDetail]:
        result = await self.session.execute(
            select(
                BookingModel,
                MovieModel.title,
                CinemaModel.name,
                StudioModel.name,
                StudioModel.price,
                ScreeningModel.start_time,
            )
            .join(ScreeningModel, ScreeningModel.id == BookingModel.screening_id)
            .join(MovieModel, MovieModel.id == ScreeningModel.movie_id)
            .join(StudioModel, StudioModel.id == ScreeningModel.studio_id)
            .join(CinemaModel, CinemaModel.id == StudioModel.cinema_id)
            .where(BookingModel.id == booking_id)
        )
        row = result.first()
        if row is None:
            return None

        db_booking, movie_title, cinema_name, studio_name, price, start_time = row
        seat_codes = (await self._seat_codes_by_booking([booking_id])).get(booking_id, [])

        return BookingDetail(
            id=db_booking.id,
            user_id=db_booking.user_id,
            screening_id=db_booking.screening_id,
            movie_title=movie_title,
            cinema_name=cinema_name,
            studio_name=studio_name,
            start_time=start_time,
            seat_codes=seat_codes,
            status=db_booking.status,
            total_price=price * len(seat_codes),
            expired_at=db_booking.expired_at,
            created_at=db_booking.created_at,
        )

    @Logger.io
    async def list_history(
        self, *, user_id: int, offset: int, limit: Optional[int]
    ) -> Tuple[List[BookingHistoryItem], int]:
        total = await self.session.scalar(
            select(func.count()).select_from(BookingModel).where(BookingModel.user_id == user_id)
        )

        stmt = (
            select(BookingModel, MovieModel.title, CinemaModel.name, ScreeningModel.start_time)
            .join(ScreeningModel, ScreeningModel.id == BookingModel.screening_id)
            .join(MovieModel, MovieModel.id == ScreeningModel.movie_id)
            .join(StudioModel, StudioModel.id == ScreeningModel.studio_id)
            .join(CinemaModel, CinemaModel.id == StudioModel.cinema_id)
            .where(BookingModel.user_id == user_id)
            .order_by(ScreeningModel.start_time.desc(), BookingModel.id.desc())
        )
        if limit is not None:
            stmt = stmt.offset(offset).limit(limit)

        rows = (await self.session.execute(stmt)).all()
        seat_codes = await self._seat_codes_by_booking([row[0].id for row in rows])

        items = [
            BookingHistoryItem(
                id=db_booking.id,
                movie_title=movie_title,
                cinema_name=cinema_name,
                start_time=start_time,
                seat_codes=seat_codes.get(db_booking.id, []),
                status=db_booking.status,
                expired_at=db_booking.expired_at,
            )
            for db_booking, movie_title, cinema_name, start_time in rows
        ]
        return items, total or 0
